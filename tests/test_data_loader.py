import json

import pytest

from safe_routing.data.data_loader import (
    CSVIncidentSource,
    GeoJSONIncidentSource,
    InMemoryIncidentSource,
    create_incident_source,
)
from safe_routing.data.models import IncidentRecord
from safe_routing.exceptions import DataSourceError


@pytest.fixture
def geojson_file(tmp_path):
    data = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [77.2182, 28.6453]},
                "properties": {"nm_pol": "Kamla Market", "totalcrime": 120, "crime/area": 3.5},
            },
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [77.2190, 28.6460]},
                "properties": {},
            },
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [[77.2, 28.6], [77.3, 28.7]]},
                "properties": {"nm_pol": "Road"},
            },
            {
                "type": "Feature",
                "geometry": None,
                "properties": {"nm_pol": "Unknown"},
            },
        ],
    }
    path = tmp_path / "incidents.geojson"
    path.write_text(json.dumps(data))
    return path


def test_in_memory_source_drops_unlocated_records():
    source = InMemoryIncidentSource([
        IncidentRecord(name="a", lat=28.6, lng=77.2),
        IncidentRecord(name="b", lat=None, lng=77.2),
    ])
    assert [r.name for r in source.fetch_incidents()] == ["a"]


def test_geojson_source_reads_point_features(geojson_file):
    records = GeoJSONIncidentSource(str(geojson_file)).fetch_incidents()

    assert len(records) == 2
    first = records[0]
    assert first.name == "Kamla Market"
    assert first.location == (28.6453, 77.2182)
    assert first.total_count == 120.0
    assert first.density == 3.5
    assert records[1].name == "incident-1"
    assert records[1].total_count is None


def test_geojson_missing_file(tmp_path):
    with pytest.raises(DataSourceError):
        GeoJSONIncidentSource(str(tmp_path / "missing.geojson")).fetch_incidents()


def test_geojson_invalid_json(tmp_path):
    path = tmp_path / "broken.geojson"
    path.write_text("{not json")
    with pytest.raises(DataSourceError):
        GeoJSONIncidentSource(str(path)).fetch_incidents()


def test_geojson_without_features(tmp_path):
    path = tmp_path / "plain.json"
    path.write_text(json.dumps({"type": "Feature"}))
    with pytest.raises(DataSourceError):
        GeoJSONIncidentSource(str(path)).fetch_incidents()


def test_csv_source(tmp_path):
    path = tmp_path / "crime.csv"
    path.write_text(
        "nm_pol,lat,long,totalcrime,crime/area\n"
        "Kamla Market,28.6453,77.2182,120,3.5\n"
        "Darya Ganj,,77.2410,80,2.0\n"
        "Chandni Mahal,28.6500,77.2350,,\n"
    )
    records = CSVIncidentSource(str(path)).fetch_incidents()

    assert [r.name for r in records] == ["Kamla Market", "Chandni Mahal"]
    assert records[0].location == (28.6453, 77.2182)
    assert records[1].total_count is None
    assert records[1].density == 0.0


def test_csv_requires_coordinate_columns(tmp_path):
    path = tmp_path / "crime.csv"
    path.write_text("nm_pol,totalcrime\nKamla Market,120\n")
    with pytest.raises(DataSourceError):
        CSVIncidentSource(str(path)).fetch_incidents()


def test_csv_missing_file(tmp_path):
    with pytest.raises(DataSourceError):
        CSVIncidentSource(str(tmp_path / "missing.csv")).fetch_incidents()


@pytest.mark.parametrize("name,expected", [
    ("data.geojson", GeoJSONIncidentSource),
    ("data.JSON", GeoJSONIncidentSource),
    ("data.csv", CSVIncidentSource),
])
def test_create_incident_source(name, expected):
    assert isinstance(create_incident_source(name), expected)


def test_create_incident_source_unknown_extension():
    with pytest.raises(ValueError):
        create_incident_source("data.xlsx")


def test_geojson_skips_non_finite_coordinates(tmp_path):
    path = tmp_path / "overflow.geojson"
    # 1e400 overflows to inf when parsed
    path.write_text(
        '{"type": "FeatureCollection", "features": ['
        '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [1e400, 28.6]},'
        ' "properties": {"nm_pol": "overflow"}},'
        '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [77.2182, NaN]},'
        ' "properties": {"nm_pol": "nan"}},'
        '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [77.2182, 28.6453]},'
        ' "properties": {"nm_pol": "ok", "totalcrime": 1e400}}'
        ']}'
    )
    records = GeoJSONIncidentSource(str(path)).fetch_incidents()

    assert [r.name for r in records] == ["ok"]
    assert records[0].total_count is None


def test_csv_skips_non_finite_coordinates(tmp_path):
    path = tmp_path / "crime.csv"
    path.write_text(
        "nm_pol,lat,long\n"
        "Kamla Market,28.6453,77.2182\n"
        "Overflow,inf,77.2410\n"
        "Negative,28.6500,-inf\n"
    )
    records = CSVIncidentSource(str(path)).fetch_incidents()
    assert [r.name for r in records] == ["Kamla Market"]
