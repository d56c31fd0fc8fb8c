"""
Pydantic schemas for safe route requests and responses.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..data.models import Hotspot, RouteSegment, RouteStats, SafeRouteResult
from ..exceptions import InvalidInputError


class RouteRequest(BaseModel):
    """Inbound request for a safe route."""
    model_config = ConfigDict(populate_by_name=True)

    source_lat: float = Field(..., alias="sourceLat", ge=-90, le=90, allow_inf_nan=False,
                              description="Source latitude")
    source_lng: float = Field(..., alias="sourceLng", ge=-180, le=180, allow_inf_nan=False,
                              description="Source longitude")
    dest_lat: float = Field(..., alias="destLat", ge=-90, le=90, allow_inf_nan=False,
                            description="Destination latitude")
    dest_lng: float = Field(..., alias="destLng", ge=-180, le=180, allow_inf_nan=False,
                            description="Destination longitude")
    user_id: Optional[str] = Field(default=None, alias="userId",
                                   description="Authenticated user; enables route history")

    @field_validator('user_id')
    @classmethod
    def blank_user_id_is_anonymous(cls, v):
        """Treat empty user ids as anonymous."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def source(self) -> Tuple[float, float]:
        return (self.source_lat, self.source_lng)

    @property
    def destination(self) -> Tuple[float, float]:
        return (self.dest_lat, self.dest_lng)

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> 'RouteRequest':
        """
        Validate raw request data.

        Raises:
            InvalidInputError: If coordinates are missing, non-numeric or out of range
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid route request: {e}") from e

    @classmethod
    def from_query(cls, src: Optional[str], dst: Optional[str],
                   user_id: Optional[str] = None) -> 'RouteRequest':
        """
        Build a request from "lat,lng" query strings.

        Raises:
            InvalidInputError: If either parameter is missing or malformed
        """
        if not src or not dst:
            raise InvalidInputError("Missing source or destination parameters")

        src_lat, src_lng = _split_coordinate(src, "source")
        dst_lat, dst_lng = _split_coordinate(dst, "destination")

        return cls.parse({
            "sourceLat": src_lat,
            "sourceLng": src_lng,
            "destLat": dst_lat,
            "destLng": dst_lng,
            "userId": user_id
        })


def _split_coordinate(value: str, label: str) -> Tuple[str, str]:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2 or not all(parts):
        raise InvalidInputError(f"Malformed {label} coordinate '{value}', expected 'lat,lng'")
    return parts[0], parts[1]


class LatLng(BaseModel):
    """A route point."""
    lat: float
    lng: float


class RouteSegmentResponse(BaseModel):
    """A route segment and its risk tier."""
    start: LatLng
    end: LatLng
    risk: str = Field(..., description="'low', 'medium' or 'high'")

    @classmethod
    def from_segment(cls, segment: RouteSegment) -> 'RouteSegmentResponse':
        return cls(
            start=LatLng(lat=segment.start[0], lng=segment.start[1]),
            end=LatLng(lat=segment.end[0], lng=segment.end[1]),
            risk=segment.risk_tier.value
        )


class HotspotResponse(BaseModel):
    """A crime hotspot."""
    model_config = ConfigDict(populate_by_name=True)

    center: List[float] = Field(..., description="[lat, lng]")
    radius: float = Field(..., description="Radius in km")
    crime_count: int = Field(..., alias="crimeCount")
    risk_level: str = Field(..., alias="riskLevel")

    @classmethod
    def from_hotspot(cls, hotspot: Hotspot) -> 'HotspotResponse':
        return cls(
            center=[hotspot.center[0], hotspot.center[1]],
            radius=hotspot.radius_km,
            crime_count=hotspot.incident_count,
            risk_level=hotspot.risk_tier.value
        )


class RouteStatsResponse(BaseModel):
    """Statistics about a calculated route."""
    model_config = ConfigDict(populate_by_name=True)

    algorithm: str
    total_distance_km: float = Field(..., alias="totalDistanceKm")
    direct_distance_km: float = Field(..., alias="directDistanceKm")
    baseline_distance_km: Optional[float] = Field(default=None, alias="baselineDistanceKm")
    detour_factor: Optional[float] = Field(default=None, alias="detourFactor")
    calculation_time_ms: float = Field(..., alias="calculationTimeMs")

    @classmethod
    def from_stats(cls, stats: RouteStats) -> 'RouteStatsResponse':
        return cls(
            algorithm=stats.algorithm,
            total_distance_km=round(stats.total_distance_km, 4),
            direct_distance_km=round(stats.direct_distance_km, 4),
            baseline_distance_km=(round(stats.baseline_distance_km, 4)
                                  if stats.baseline_distance_km is not None else None),
            detour_factor=(round(stats.detour_factor, 4)
                           if stats.detour_factor is not None else None),
            calculation_time_ms=round(stats.calculation_time_ms, 1)
        )


class SafeRouteResponse(BaseModel):
    """Response body for a safe route."""
    model_config = ConfigDict(populate_by_name=True)

    route: List[LatLng]
    segments: List[RouteSegmentResponse]
    overall_safety_score: int = Field(..., alias="overallSafetyScore", ge=0, le=100)
    hotspots: List[HotspotResponse]
    route_stats: Optional[RouteStatsResponse] = Field(default=None, alias="routeStats")

    @classmethod
    def from_result(cls, result: SafeRouteResult) -> 'SafeRouteResponse':
        return cls(
            route=[LatLng(lat=lat, lng=lng) for lat, lng in result.route],
            segments=[RouteSegmentResponse.from_segment(s) for s in result.segments],
            overall_safety_score=result.overall_safety_score,
            hotspots=[HotspotResponse.from_hotspot(h) for h in result.hotspots],
            route_stats=RouteStatsResponse.from_stats(result.stats) if result.stats else None
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with the public camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
