"""
Route optimizer that sequences hotspot detection, grid search and scoring.
"""

import logging
import time
from typing import Optional, Sequence

from ...config.routing_config import RoutingConfig
from ...data.data_loader import BaseIncidentSource
from ...data.distance_utils import haversine_distance
from ...data.models import Coordinate, Hotspot, RouteStats, SafeRouteResult
from ...exceptions import DegenerateRouteError
from ...mapping.grid.lattice_grid import LatticeGrid, build_lattice_grid
from ..clustering.hotspot_analyzer import HotspotAnalyzer
from ..crime_weighting.hotspot_risk_field import HotspotRiskField
from ..routing.astar_weighted import RouteDetails, WeightedAStarRouter
from ..scoring.route_scorer import RouteScorer

logger = logging.getLogger(__name__)


class SafeRouteOptimizer:
    """
    Compute a safe route for one source/destination pair.

    Holds only configuration; every grid, hotspot list and route is created
    per call, so one optimizer can serve concurrent requests.
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        """
        Initialize route optimizer.

        Args:
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.config.validate()

        self.hotspot_analyzer = HotspotAnalyzer(self.config)

        logger.info(f"SafeRouteOptimizer initialized (grid {self.config.grid_resolution}x"
                    f"{self.config.grid_resolution})")

    def find_safe_route(self, start_coords: Coordinate, end_coords: Coordinate,
                        hotspots: Optional[Sequence[Hotspot]] = None,
                        incident_source: Optional[BaseIncidentSource] = None) -> SafeRouteResult:
        """
        Find the safest route between two points.

        Args:
            start_coords: (lat, lng) of route start
            end_coords: (lat, lng) of route end
            hotspots: Precomputed hotspots; if None they are derived from incident_source
            incident_source: Incident data collaborator used when hotspots is None

        Returns:
            SafeRouteResult with route, segments, score and hotspots
        """
        start_time = time.time()
        start_coords = (float(start_coords[0]), float(start_coords[1]))
        end_coords = (float(end_coords[0]), float(end_coords[1]))

        logger.info(f"Finding safe route from {start_coords} to {end_coords}")

        # Step 1: Hotspots
        if hotspots is None:
            hotspots = self._detect_hotspots(incident_source)
        hotspots = tuple(hotspots)

        # Step 2: Route search
        grid: Optional[LatticeGrid] = None
        router: Optional[WeightedAStarRouter] = None

        if not hotspots and self.config.direct_route_without_hotspots:
            logger.info("No hotspots to avoid - using direct route")
            route = RouteDetails([start_coords, end_coords], [], "direct")
        else:
            risk_field = HotspotRiskField(hotspots, self.config)
            grid = build_lattice_grid(start_coords, end_coords, risk_field, self.config)
            router = WeightedAStarRouter(grid, self.config)
            route = router.find_route(start_coords, end_coords)

        # Step 3: Scoring
        scorer = RouteScorer(hotspots, self.config)
        try:
            segments, score = scorer.score(route.coordinates)
        except DegenerateRouteError as e:
            logger.warning(f"Degenerate route ({e}) - using direct route")
            route = RouteDetails([start_coords, end_coords], [], "direct_fallback")
            segments, score = scorer.score(route.coordinates)

        # Step 4: Statistics
        stats = self._build_stats(route, router, start_coords, end_coords,
                                  grid, time.time() - start_time)

        result = SafeRouteResult(
            route=tuple(route.coordinates),
            segments=tuple(segments),
            overall_safety_score=score,
            hotspots=hotspots,
            stats=stats
        )

        logger.info(f"Route optimization completed: {len(result.route)} points, "
                    f"score {score}, {result.high_risk_segments} high / "
                    f"{result.medium_risk_segments} medium risk segments")
        return result

    def _detect_hotspots(self, incident_source: Optional[BaseIncidentSource]) -> Sequence[Hotspot]:
        if incident_source is None:
            logger.warning("No incident source configured - routing without hotspots")
            return []
        return self.hotspot_analyzer.analyze_source(incident_source)

    def _build_stats(self, route: RouteDetails, router: Optional[WeightedAStarRouter],
                     start_coords: Coordinate, end_coords: Coordinate,
                     grid: Optional[LatticeGrid], elapsed: float) -> RouteStats:
        """Generate summary statistics, including the unweighted baseline when available."""
        baseline_distance = None
        detour_factor = None

        if (self.config.compute_baseline and router is not None
                and route.algorithm == "weighted_astar"):
            try:
                baseline = router.find_baseline_route(start_coords, end_coords)
                baseline_distance = baseline.total_distance
                if baseline_distance > 0:
                    detour_factor = route.total_distance / baseline_distance
            except RuntimeError as e:
                logger.debug(f"Could not calculate baseline route for comparison: {e}")

        return RouteStats(
            algorithm=route.algorithm,
            total_distance_km=route.total_distance,
            direct_distance_km=haversine_distance(start_coords[0], start_coords[1],
                                                  end_coords[0], end_coords[1]),
            calculation_time_ms=elapsed * 1000,
            grid_nodes=len(grid) if grid is not None else 0,
            expanded_nodes=route.expanded_nodes,
            baseline_distance_km=baseline_distance,
            detour_factor=detour_factor
        )
