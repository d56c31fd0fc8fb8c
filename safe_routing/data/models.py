"""
Core data structures shared by the routing pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Coordinate = Tuple[float, float]  # (lat, lng) in degrees


class RiskTier(Enum):
    """Risk tier of a hotspot or route segment."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class IncidentRecord:
    """A row from the incident data source (one police area or incident)."""
    name: str
    lat: Optional[float]
    lng: Optional[float]
    total_count: Optional[float] = None
    density: float = 0.0

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None

    @property
    def location(self) -> Coordinate:
        if not self.has_location:
            raise ValueError(f"Incident record '{self.name}' has no coordinates")
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Hotspot:
    """A cluster of historical incidents."""
    center: Coordinate
    radius_km: float
    incident_count: int
    risk_tier: RiskTier

    def __post_init__(self):
        if self.incident_count < 2:
            raise ValueError(f"Hotspot needs at least 2 incidents, got {self.incident_count}")


@dataclass
class GridNode:
    """
    A lattice waypoint.

    Cost fields and the predecessor are rewritten in place by the router.
    The predecessor is a flat index into the owning grid, not a node reference.
    """
    lat: float
    lng: float
    risk_value: float = 0.0
    cost_from_start: float = 0.0
    estimate_to_goal: float = 0.0
    total_cost: float = 0.0
    predecessor: Optional[int] = None

    @property
    def coordinate(self) -> Coordinate:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class RouteSegment:
    """A leg between two consecutive route points."""
    start: Coordinate
    end: Coordinate
    risk_tier: RiskTier


@dataclass(frozen=True)
class RouteStats:
    """Summary metrics for a computed route."""
    algorithm: str
    total_distance_km: float
    direct_distance_km: float
    calculation_time_ms: float
    grid_nodes: int = 0
    expanded_nodes: int = 0
    baseline_distance_km: Optional[float] = None
    detour_factor: Optional[float] = None


@dataclass(frozen=True)
class SafeRouteResult:
    """Final output of a route computation."""
    route: Tuple[Coordinate, ...]
    segments: Tuple[RouteSegment, ...]
    overall_safety_score: int
    hotspots: Tuple[Hotspot, ...]
    stats: Optional[RouteStats] = None

    def __post_init__(self):
        if len(self.route) < 2:
            raise ValueError("Route must contain at least 2 points")
        if len(self.segments) != len(self.route) - 1:
            raise ValueError(f"Expected {len(self.route) - 1} segments, got {len(self.segments)}")
        if not 0 <= self.overall_safety_score <= 100:
            raise ValueError(f"Safety score out of range: {self.overall_safety_score}")

    @property
    def high_risk_segments(self) -> int:
        return sum(1 for s in self.segments if s.risk_tier is RiskTier.HIGH)

    @property
    def medium_risk_segments(self) -> int:
        return sum(1 for s in self.segments if s.risk_tier is RiskTier.MEDIUM)
