"""
Incident data sources.

A source only has to answer one question: "all incident records with
non-null coordinates". Sources are read-only and raise DataSourceError
when the underlying data cannot be read.
"""

import json
import logging
import math
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from ..exceptions import DataSourceError
from .models import IncidentRecord

logger = logging.getLogger(__name__)

# Column names used by the police-area crime table
NAME_COLUMN = 'nm_pol'
LAT_COLUMN = 'lat'
LNG_COLUMN = 'long'
TOTAL_COLUMN = 'totalcrime'
DENSITY_COLUMN = 'crime/area'


def _to_optional_float(value: Any) -> Optional[float]:
    """Convert a raw cell value to float, mapping missing or non-finite values to None."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


class BaseIncidentSource(ABC):
    """
    Abstract base class for incident data collaborators.
    """

    @abstractmethod
    def fetch_incidents(self) -> List[IncidentRecord]:
        """
        Fetch all incident records that carry both coordinates.

        Returns:
            List of IncidentRecord with lat and lng present

        Raises:
            DataSourceError: If the data cannot be read
        """
        pass


class InMemoryIncidentSource(BaseIncidentSource):
    """Incident source backed by an in-memory list."""

    def __init__(self, records: Iterable[IncidentRecord]):
        self.records = list(records)

    def fetch_incidents(self) -> List[IncidentRecord]:
        return [r for r in self.records if r.has_location]


class GeoJSONIncidentSource(BaseIncidentSource):
    """
    Incident source reading Point features from a GeoJSON file.
    """

    def __init__(self, data_path: str):
        """
        Args:
            data_path: Path to a GeoJSON FeatureCollection
        """
        self.data_path = data_path

    def fetch_incidents(self) -> List[IncidentRecord]:
        if not os.path.exists(self.data_path):
            raise DataSourceError(f"Incident data file not found: {self.data_path}")

        logger.info(f"Loading incident data from: {self.data_path}")

        try:
            with open(self.data_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(f"Invalid incident data file {self.data_path}: {e}") from e

        if 'features' not in data:
            raise DataSourceError("Incident data must be in GeoJSON format with 'features' key")

        records = []
        for i, feature in enumerate(data['features']):
            geometry = feature.get('geometry') or {}
            if geometry.get('type') != 'Point':
                continue
            coords = geometry.get('coordinates') or []
            if len(coords) < 2:
                continue

            # GeoJSON stores (lon, lat)
            lng, lat = _to_optional_float(coords[0]), _to_optional_float(coords[1])
            if lat is None or lng is None:
                continue

            properties = feature.get('properties') or {}
            records.append(self._record_from_properties(properties, lat, lng, i))

        logger.info(f"Loaded {len(records)} incident records with coordinates")
        return records

    @staticmethod
    def _record_from_properties(properties: Dict[str, Any], lat: float, lng: float,
                                index: int) -> IncidentRecord:
        name = properties.get(NAME_COLUMN) or properties.get('name') or f"incident-{index}"
        density = _to_optional_float(properties.get(DENSITY_COLUMN))
        return IncidentRecord(
            name=str(name),
            lat=lat,
            lng=lng,
            total_count=_to_optional_float(properties.get(TOTAL_COLUMN)),
            density=density if density is not None else 0.0
        )


class CSVIncidentSource(BaseIncidentSource):
    """
    Incident source reading the police-area crime table from CSV.

    Expected columns: nm_pol, lat, long, totalcrime, crime/area. Only the
    coordinate columns are mandatory.
    """

    def __init__(self, data_path: str):
        self.data_path = data_path

    def fetch_incidents(self) -> List[IncidentRecord]:
        logger.info(f"Loading incident table from: {self.data_path}")

        try:
            frame = pd.read_csv(self.data_path)
        except (OSError, ValueError) as e:
            raise DataSourceError(f"Could not read incident table {self.data_path}: {e}") from e

        missing = {LAT_COLUMN, LNG_COLUMN} - set(frame.columns)
        if missing:
            raise DataSourceError(f"Incident table missing columns: {sorted(missing)}")

        frame = frame.dropna(subset=[LAT_COLUMN, LNG_COLUMN])

        records = []
        for i, row in enumerate(frame.to_dict('records')):
            lat = _to_optional_float(row.get(LAT_COLUMN))
            lng = _to_optional_float(row.get(LNG_COLUMN))
            if lat is None or lng is None:
                continue
            name = row.get(NAME_COLUMN)
            density = _to_optional_float(row.get(DENSITY_COLUMN))
            records.append(IncidentRecord(
                name=str(name) if name is not None and not pd.isna(name) else f"incident-{i}",
                lat=lat,
                lng=lng,
                total_count=_to_optional_float(row.get(TOTAL_COLUMN)),
                density=density if density is not None else 0.0
            ))

        logger.info(f"Loaded {len(records)} incident records with coordinates")
        return records


def create_incident_source(data_path: str) -> BaseIncidentSource:
    """
    Pick an incident source from the file extension.

    Args:
        data_path: .geojson/.json or .csv file

    Returns:
        Matching incident source
    """
    extension = os.path.splitext(data_path)[1].lower()
    if extension in ('.geojson', '.json'):
        return GeoJSONIncidentSource(data_path)
    if extension == '.csv':
        return CSVIncidentSource(data_path)
    raise ValueError(f"Unsupported incident file type: {extension or data_path}")
