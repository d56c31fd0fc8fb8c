import pytest

from safe_routing.data.models import Hotspot, RiskTier, RouteSegment, RouteStats, SafeRouteResult
from safe_routing.exceptions import InvalidInputError
from safe_routing.schemas.routing import RouteRequest, SafeRouteResponse

from .conftest import DELHI_DESTINATION, DELHI_SOURCE

VALID_REQUEST = {
    "sourceLat": 28.6129,
    "sourceLng": 77.2295,
    "destLat": 28.6304,
    "destLng": 77.2177,
}


def test_parse_camel_case_request():
    request = RouteRequest.parse(VALID_REQUEST)
    assert request.source == DELHI_SOURCE
    assert request.destination == DELHI_DESTINATION
    assert request.user_id is None


def test_numeric_strings_are_accepted():
    request = RouteRequest.parse({**VALID_REQUEST, "sourceLat": "28.6129"})
    assert request.source_lat == pytest.approx(28.6129)


@pytest.mark.parametrize("field,value", [
    ("sourceLat", 91.0),
    ("sourceLng", -180.5),
    ("destLat", "north"),
    ("destLng", float("nan")),
])
def test_invalid_coordinates_rejected(field, value):
    with pytest.raises(InvalidInputError):
        RouteRequest.parse({**VALID_REQUEST, field: value})


def test_missing_coordinate_rejected():
    data = dict(VALID_REQUEST)
    del data["destLng"]
    with pytest.raises(InvalidInputError):
        RouteRequest.parse(data)


def test_blank_user_id_is_anonymous():
    assert RouteRequest.parse({**VALID_REQUEST, "userId": "  "}).user_id is None
    assert RouteRequest.parse({**VALID_REQUEST, "userId": "u-1"}).user_id == "u-1"


def test_from_query():
    request = RouteRequest.from_query("28.6129, 77.2295", "28.6304,77.2177", "u-7")
    assert request.source == DELHI_SOURCE
    assert request.destination == DELHI_DESTINATION
    assert request.user_id == "u-7"


@pytest.mark.parametrize("src,dst", [
    (None, "28.6,77.2"),
    ("28.6,77.2", ""),
    ("28.6", "28.6,77.2"),
    ("28.6,77.2,1", "28.6,77.2"),
    ("abc,77.2", "28.6,77.2"),
])
def test_from_query_rejects_bad_parameters(src, dst):
    with pytest.raises(InvalidInputError):
        RouteRequest.from_query(src, dst)


def test_response_payload_uses_public_field_names():
    hotspot = Hotspot(center=(28.64, 77.21), radius_km=0.4, incident_count=8,
                      risk_tier=RiskTier.MEDIUM)
    result = SafeRouteResult(
        route=(DELHI_SOURCE, DELHI_DESTINATION),
        segments=(RouteSegment(DELHI_SOURCE, DELHI_DESTINATION, RiskTier.MEDIUM),),
        overall_safety_score=85,
        hotspots=(hotspot,),
        stats=RouteStats(algorithm="direct", total_distance_km=2.2345678,
                         direct_distance_km=2.2345678, calculation_time_ms=1.234),
    )

    payload = SafeRouteResponse.from_result(result).to_payload()

    assert payload["overallSafetyScore"] == 85
    assert payload["route"][0] == {"lat": 28.6129, "lng": 77.2295}
    assert payload["segments"][0]["risk"] == "medium"
    assert payload["hotspots"][0] == {
        "center": [28.64, 77.21],
        "radius": 0.4,
        "crimeCount": 8,
        "riskLevel": "medium",
    }
    stats = payload["routeStats"]
    assert stats["algorithm"] == "direct"
    assert stats["totalDistanceKm"] == 2.2346
    assert "baselineDistanceKm" not in stats
