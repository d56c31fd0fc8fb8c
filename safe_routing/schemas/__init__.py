"""
Request and response schemas.
"""

from .routing import (
    RouteRequest,
    LatLng,
    RouteSegmentResponse,
    HotspotResponse,
    RouteStatsResponse,
    SafeRouteResponse
)

__all__ = [
    'RouteRequest',
    'LatLng',
    'RouteSegmentResponse',
    'HotspotResponse',
    'RouteStatsResponse',
    'SafeRouteResponse'
]
