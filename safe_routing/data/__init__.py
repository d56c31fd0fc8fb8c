"""
Data structures, incident sources and geographic utilities.

This module contains:
- Core data model (incidents, hotspots, grid nodes, route results)
- Incident data sources (in-memory, GeoJSON, CSV)
- Distance calculations
- GeoJSON export
"""

from .models import (
    Coordinate,
    RiskTier,
    IncidentRecord,
    Hotspot,
    GridNode,
    RouteSegment,
    RouteStats,
    SafeRouteResult
)
from .distance_utils import haversine_distance, haversine_distances, calculate_route_distance
from .data_loader import (
    BaseIncidentSource,
    InMemoryIncidentSource,
    GeoJSONIncidentSource,
    CSVIncidentSource,
    create_incident_source
)
from .geojson_utils import route_to_geojson

__all__ = [
    'Coordinate',
    'RiskTier',
    'IncidentRecord',
    'Hotspot',
    'GridNode',
    'RouteSegment',
    'RouteStats',
    'SafeRouteResult',
    'haversine_distance',
    'haversine_distances',
    'calculate_route_distance',
    'BaseIncidentSource',
    'InMemoryIncidentSource',
    'GeoJSONIncidentSource',
    'CSVIncidentSource',
    'create_incident_source',
    'route_to_geojson'
]
