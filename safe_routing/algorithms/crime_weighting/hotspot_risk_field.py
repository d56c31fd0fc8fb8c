"""
Continuous risk field derived from hotspots.

Each hotspot influences points within ``radius * safety_margin`` of its
center. Influence is the hotspot's tier severity decayed linearly to zero at
the margin boundary; overlapping hotspots do not add up, the strongest wins.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import haversine_distance
from ...data.models import Hotspot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskAssessment:
    """Risk of a single point."""
    is_near_any_hotspot: bool
    risk_value: float


class HotspotRiskField:
    """
    Point risk lookup over a fixed set of hotspots.
    """

    def __init__(self, hotspots: Iterable[Hotspot], config: Optional[RoutingConfig] = None):
        """
        Initialize risk field.

        Args:
            hotspots: Hotspots to evaluate against
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.hotspots = tuple(hotspots)

        logger.debug(f"HotspotRiskField initialized with {len(self.hotspots)} hotspots")

    def evaluate(self, lat: float, lng: float) -> RiskAssessment:
        """
        Calculate risk at a specific point.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            RiskAssessment with the nearest-hotspot flag and max scaled severity
        """
        is_near = False
        max_risk = 0.0

        for hotspot in self.hotspots:
            dist = haversine_distance(lat, lng, hotspot.center[0], hotspot.center[1])
            margin = hotspot.radius_km * self.config.safety_margin

            if dist <= margin:
                is_near = True
                severity = self.config.severity_weights[hotspot.risk_tier.value]

                # Zero-radius hotspots only flag their exact center
                scale = 1 - dist / margin if margin > 0 else 0.0
                risk = severity * scale

                if risk > max_risk:
                    max_risk = risk

        return RiskAssessment(is_near_any_hotspot=is_near, risk_value=max_risk)

    def get_point_risk(self, lat: float, lng: float) -> float:
        """Risk value at a point (0 when outside every hotspot margin)."""
        return self.evaluate(lat, lng).risk_value

    def is_near_hotspot(self, lat: float, lng: float) -> bool:
        return self.evaluate(lat, lng).is_near_any_hotspot
