"""
Per-segment risk classification and overall safety score for a route.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point

from ...config.routing_config import RoutingConfig
from ...data.models import Coordinate, Hotspot, RiskTier, RouteSegment
from ...exceptions import DegenerateRouteError

logger = logging.getLogger(__name__)


def min_distance_to_segment_km(point: Coordinate, start: Coordinate, end: Coordinate,
                               km_per_degree: float = 111.0) -> float:
    """
    Planar distance from a point to a segment, projected and clamped to the
    segment's endpoints, converted from degrees to km.

    Args:
        point: (lat, lng) of the hotspot center
        start: (lat, lng) of segment start
        end: (lat, lng) of segment end
        km_per_degree: Degree to kilometer factor

    Returns:
        Approximate distance in kilometers
    """
    target = Point(point)
    if start == end:
        return target.distance(Point(start)) * km_per_degree
    return target.distance(LineString([start, end])) * km_per_degree


class RouteScorer:
    """
    Classify route segments by hotspot proximity and compute a 0-100 score.
    """

    def __init__(self, hotspots: Iterable[Hotspot], config: Optional[RoutingConfig] = None):
        """
        Initialize route scorer.

        Args:
            hotspots: Hotspots to score against
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.hotspots = tuple(hotspots)

    def classify_segment(self, start: Coordinate, end: Coordinate) -> RiskTier:
        """
        Risk tier of one segment.

        HIGH if the segment passes within the safety margin of any high-risk
        hotspot, otherwise MEDIUM for a medium-risk hotspot, otherwise LOW.
        """
        tier = RiskTier.LOW

        for hotspot in self.hotspots:
            if hotspot.risk_tier is RiskTier.LOW:
                continue

            dist = min_distance_to_segment_km(hotspot.center, start, end,
                                              self.config.km_per_degree)

            if dist <= hotspot.radius_km * self.config.safety_margin:
                if hotspot.risk_tier is RiskTier.HIGH:
                    return RiskTier.HIGH
                tier = RiskTier.MEDIUM

        return tier

    def color_segments(self, points: Sequence[Coordinate]) -> List[RouteSegment]:
        """
        Split a route into consecutive segments with risk tiers.

        Raises:
            DegenerateRouteError: If fewer than two points are given
        """
        if len(points) < 2:
            raise DegenerateRouteError(f"Cannot score a route with {len(points)} point(s)")

        segments = []
        for i in range(len(points) - 1):
            start = tuple(points[i])
            end = tuple(points[i + 1])
            segments.append(RouteSegment(start=start, end=end,
                                         risk_tier=self.classify_segment(start, end)))
        return segments

    def safety_score(self, segments: Sequence[RouteSegment]) -> int:
        """
        Overall safety score in [0, 100].

        ``100 - (high * 30 + medium * 15) / total``, rounded half up and clamped.

        Raises:
            DegenerateRouteError: If there are no segments
        """
        if not segments:
            raise DegenerateRouteError("Cannot score a route with no segments")

        high = sum(1 for s in segments if s.risk_tier is RiskTier.HIGH)
        medium = sum(1 for s in segments if s.risk_tier is RiskTier.MEDIUM)

        penalty = (high * self.config.high_segment_penalty +
                   medium * self.config.medium_segment_penalty) / len(segments)
        score = math.floor(100 - penalty + 0.5)

        return max(0, min(100, score))

    def score(self, points: Sequence[Coordinate]) -> Tuple[List[RouteSegment], int]:
        """
        Classify all segments and compute the overall score.

        Args:
            points: Ordered route points

        Returns:
            (segments, overall safety score)
        """
        segments = self.color_segments(points)
        score = self.safety_score(segments)

        logger.debug(f"Scored {len(segments)} segments: score {score}")
        return segments, score
