"""
GeoJSON export of computed routes for mapping clients.
"""

import logging

import geojson

from .models import SafeRouteResult

logger = logging.getLogger(__name__)


def route_to_geojson(result: SafeRouteResult) -> geojson.FeatureCollection:
    """
    Convert a route result to a GeoJSON FeatureCollection.

    Each segment becomes a LineString carrying its risk tier, each hotspot a
    Point carrying radius, incident count and tier, plus start/end markers.

    Args:
        result: Computed route

    Returns:
        GeoJSON FeatureCollection (coordinates in lon, lat order)
    """
    features = []

    for i, segment in enumerate(result.segments):
        features.append(geojson.Feature(
            geometry=geojson.LineString([
                [segment.start[1], segment.start[0]],
                [segment.end[1], segment.end[0]]
            ]),
            properties={
                "type": "segment",
                "index": i,
                "risk": segment.risk_tier.value
            }
        ))

    for hotspot in result.hotspots:
        features.append(geojson.Feature(
            geometry=geojson.Point([hotspot.center[1], hotspot.center[0]]),
            properties={
                "type": "hotspot",
                "radius_km": hotspot.radius_km,
                "crime_count": hotspot.incident_count,
                "risk": hotspot.risk_tier.value
            }
        ))

    start, end = result.route[0], result.route[-1]
    features.append(geojson.Feature(
        geometry=geojson.Point([start[1], start[0]]),
        properties={"type": "start", "name": "Start Point"}
    ))
    features.append(geojson.Feature(
        geometry=geojson.Point([end[1], end[0]]),
        properties={"type": "end", "name": "End Point"}
    ))

    collection = geojson.FeatureCollection(
        features,
        properties={"overall_safety_score": result.overall_safety_score}
    )

    logger.debug(f"Exported route with {len(result.segments)} segments and "
                 f"{len(result.hotspots)} hotspots to GeoJSON")
    return collection
