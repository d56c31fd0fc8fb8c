"""
Density-based clustering of incident records into crime hotspots.
"""

import logging
import math
from typing import Iterable, List, Optional

import numpy as np
from sklearn.cluster import DBSCAN

from ...config.routing_config import RoutingConfig
from ...data.data_loader import BaseIncidentSource
from ...data.distance_utils import haversine_distance
from ...data.models import Hotspot, IncidentRecord, RiskTier

logger = logging.getLogger(__name__)

NOISE_LABEL = -1


class HotspotAnalyzer:
    """
    Turn raw incident records into hotspots using DBSCAN.

    Clustering runs on raw (lat, lng) degrees with a euclidean metric, so
    ``cluster_eps`` is in degrees while the resulting hotspot radius is in
    kilometers. Input order is preserved, which keeps border-point
    assignment reproducible between runs.
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        """
        Initialize hotspot analyzer.

        Args:
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()

    def analyze(self, records: Iterable[IncidentRecord]) -> List[Hotspot]:
        """
        Cluster incidents and build hotspots.

        Args:
            records: Incident records; records without coordinates are skipped

        Returns:
            Hotspots in cluster-label order
        """
        points = []
        skipped = 0
        for record in records:
            if not record.has_location:
                continue
            lat, lng = record.location
            if not (math.isfinite(lat) and math.isfinite(lng)):
                skipped += 1
                continue
            points.append((lat, lng))

        if skipped:
            logger.warning(f"Skipped {skipped} incidents with non-finite coordinates")

        if len(points) > self.config.max_incidents:
            logger.warning(f"Incident count {len(points)} exceeds limit, "
                           f"clustering first {self.config.max_incidents} only")
            points = points[:self.config.max_incidents]

        if not points:
            logger.info("No incidents with coordinates - no hotspots")
            return []

        coords = np.array(points, dtype=float)
        labels = DBSCAN(
            # sklearn counts neighbors at distance <= eps; the neighborhood is strict
            eps=float(np.nextafter(self.config.cluster_eps, 0)),
            min_samples=self.config.min_cluster_size
        ).fit_predict(coords)

        hotspots = []
        for label in sorted(set(labels.tolist()) - {NOISE_LABEL}):
            members = coords[labels == label]
            if len(members) < 2:
                continue
            hotspots.append(self._build_hotspot(members))

        noise = int(np.sum(labels == NOISE_LABEL))
        logger.info(f"Found {len(hotspots)} hotspots from {len(points)} incidents "
                    f"({noise} noise points)")
        return hotspots

    def analyze_source(self, source: BaseIncidentSource) -> List[Hotspot]:
        """
        Fetch incidents from a data source and cluster them.

        A failing source is treated as "no hotspots" so routing can continue
        on pure geometry.

        Args:
            source: Incident data collaborator

        Returns:
            Hotspots, or an empty list if the source failed
        """
        try:
            records = source.fetch_incidents()
        except Exception as e:
            logger.error(f"Error fetching incident data: {e}")
            return []

        return self.analyze(records)

    def classify(self, incident_count: int) -> RiskTier:
        """Map a cluster size to its risk tier."""
        if incident_count > self.config.high_risk_threshold:
            return RiskTier.HIGH
        if incident_count > self.config.medium_risk_threshold:
            return RiskTier.MEDIUM
        return RiskTier.LOW

    def _build_hotspot(self, members: np.ndarray) -> Hotspot:
        center_lat = float(members[:, 0].mean())
        center_lng = float(members[:, 1].mean())

        # Radius is the farthest member from the center
        radius = 0.0
        for lat, lng in members:
            dist = haversine_distance(center_lat, center_lng, float(lat), float(lng))
            if dist > radius:
                radius = dist

        return Hotspot(
            center=(center_lat, center_lng),
            radius_km=radius,
            incident_count=len(members),
            risk_tier=self.classify(len(members))
        )
