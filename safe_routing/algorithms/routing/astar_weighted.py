"""
Risk-weighted A* routing over the lattice grid.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

import networkx as nx

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import calculate_route_distance, haversine_distance
from ...data.models import Coordinate
from ...mapping.grid.lattice_grid import LatticeGrid

logger = logging.getLogger(__name__)


class RouteDetails:
    """Container for detailed route information."""

    def __init__(self, coordinates: Sequence[Coordinate], nodes: Sequence[int],
                 algorithm: str = "weighted_astar"):
        """
        Initialize route details.

        Args:
            coordinates: (lat, lng) points in route order
            nodes: Grid node indices in route order (empty for fallback lines)
            algorithm: Algorithm name used
        """
        self.coordinates = list(coordinates)
        self.nodes = list(nodes)
        self.algorithm = algorithm
        self.calculation_time: Optional[float] = None
        self.expanded_nodes = 0

        self.total_distance = calculate_route_distance(self.coordinates)

    @property
    def is_fallback(self) -> bool:
        return self.algorithm == "direct_fallback"

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the route."""
        return {
            'algorithm': self.algorithm,
            'point_count': len(self.coordinates),
            'total_distance_km': round(self.total_distance, 3),
            'expanded_nodes': self.expanded_nodes,
            'calculation_time_ms': round(self.calculation_time * 1000, 1) if self.calculation_time else None
        }


class WeightedAStarRouter:
    """
    A* search on a lattice where stepping onto a risky node inflates cost.

    The accumulated cost is multiplied by ``1 + risk * risk_penalty_factor``
    of the node being entered, so risk late in a route costs more than the
    same risk near the start. Nodes are never reopened once closed;
    predecessors always point at closed nodes, which rules out cycles.
    """

    def __init__(self, grid: LatticeGrid, config: Optional[RoutingConfig] = None):
        """
        Initialize weighted A* router.

        Args:
            grid: Risk-annotated lattice owned by this computation
            config: Routing configuration parameters
        """
        self.grid = grid
        self.config = config or RoutingConfig()
        self.last_expanded_nodes = 0

    def find_route(self, start_coords: Coordinate, end_coords: Coordinate) -> RouteDetails:
        """
        Find the least-risk route between two coordinates.

        Endpoints are snapped to their nearest lattice nodes. If the search
        cannot reach the goal, a direct two-point line is returned instead.

        Args:
            start_coords: (lat, lng) of route start
            end_coords: (lat, lng) of route end

        Returns:
            RouteDetails with lattice coordinates (or the direct fallback)
        """
        start_time = time.time()

        try:
            start_node = self.grid.find_nearest_node(*start_coords)
            end_node = self.grid.find_nearest_node(*end_coords)

            logger.debug(f"Finding route from node {start_node} to {end_node}")

            path = self.search(start_node, end_node)

        except Exception as e:
            logger.error(f"Route calculation failed: {e}")
            path = None

        if path is None:
            route = self._direct_fallback(start_coords, end_coords)
        else:
            coords = [self.grid[i].coordinate for i in path]
            route = RouteDetails(coords, path, "weighted_astar")

        route.calculation_time = time.time() - start_time
        route.expanded_nodes = self.last_expanded_nodes

        logger.info(f"Route found: {len(route.coordinates)} points, "
                    f"{route.total_distance:.2f}km, {route.expanded_nodes} nodes expanded, "
                    f"calculated in {route.calculation_time * 1000:.1f}ms")
        return route

    def search(self, start_node: int, end_node: int) -> Optional[List[int]]:
        """
        Run the search between two lattice nodes.

        Args:
            start_node: Starting node index
            end_node: Goal node index

        Returns:
            Node indices from start to goal, or None if the goal was not reached
        """
        grid = self.grid
        grid.reset_search_state()
        penalty_factor = self.config.risk_penalty_factor
        max_expansions = self.config.max_search_expansions

        goal = grid[end_node]
        start = grid[start_node]
        start.cost_from_start = 0.0
        start.estimate_to_goal = self._heuristic(start_node, end_node)
        start.total_cost = start.estimate_to_goal

        # open_list keeps discovery order so min() breaks ties by first found
        open_list = [start_node]
        open_set = {start_node}
        closed = set()
        self.last_expanded_nodes = 0

        while open_list:
            lowest = min(range(len(open_list)), key=lambda k: grid[open_list[k]].total_cost)
            current_index = open_list[lowest]

            if current_index == end_node:
                return self._reconstruct_path(end_node)

            if max_expansions is not None and self.last_expanded_nodes >= max_expansions:
                logger.warning(f"Search stopped after {self.last_expanded_nodes} expansions")
                return None

            open_list.pop(lowest)
            open_set.discard(current_index)
            closed.add(current_index)
            self.last_expanded_nodes += 1

            current = grid[current_index]

            for neighbor_index in grid.neighbors(current_index):
                if neighbor_index in closed:
                    continue

                neighbor = grid[neighbor_index]
                step = haversine_distance(current.lat, current.lng, neighbor.lat, neighbor.lng)
                risk_factor = 1 + neighbor.risk_value * penalty_factor
                weighted_cost = (current.cost_from_start + step) * risk_factor

                if neighbor_index not in open_set:
                    open_list.append(neighbor_index)
                    open_set.add(neighbor_index)
                elif weighted_cost >= neighbor.cost_from_start:
                    continue

                neighbor.predecessor = current_index
                neighbor.cost_from_start = weighted_cost
                neighbor.estimate_to_goal = haversine_distance(
                    neighbor.lat, neighbor.lng, goal.lat, goal.lng
                )
                neighbor.total_cost = neighbor.cost_from_start + neighbor.estimate_to_goal

        logger.error(f"No path found from node {start_node} to {end_node}")
        return None

    def find_baseline_route(self, start_coords: Coordinate,
                            end_coords: Coordinate) -> RouteDetails:
        """
        Find the purely geometric shortest path on the same lattice.

        Used as a comparison baseline; risk is ignored.

        Args:
            start_coords: (lat, lng) of route start
            end_coords: (lat, lng) of route end

        Returns:
            RouteDetails for the shortest lattice path
        """
        start_time = time.time()

        start_node = self.grid.find_nearest_node(*start_coords)
        end_node = self.grid.find_nearest_node(*end_coords)

        try:
            path = nx.astar_path(
                self.grid.to_graph(),
                start_node,
                end_node,
                heuristic=self._heuristic,
                weight='length'
            )
        except nx.NetworkXException as e:
            raise RuntimeError(f"Shortest path calculation failed: {e}") from e

        route = RouteDetails([self.grid[i].coordinate for i in path], path, "shortest_path")
        route.calculation_time = time.time() - start_time
        return route

    def _heuristic(self, node1: int, node2: int) -> float:
        """Straight-line distance between two lattice nodes in km."""
        a = self.grid[node1]
        b = self.grid[node2]
        return haversine_distance(a.lat, a.lng, b.lat, b.lng)

    def _reconstruct_path(self, end_node: int) -> List[int]:
        """
        Follow predecessor indices back from the goal.

        Raises:
            RuntimeError: If the chain is longer than the grid (a cycle)
        """
        path = [end_node]
        index = end_node

        while self.grid[index].predecessor is not None:
            index = self.grid[index].predecessor
            path.append(index)
            if len(path) > len(self.grid):
                raise RuntimeError("Predecessor chain exceeds grid size")

        path.reverse()
        return path

    def _direct_fallback(self, start_coords: Coordinate,
                         end_coords: Coordinate) -> RouteDetails:
        logger.warning("Falling back to direct line between source and destination")
        return RouteDetails(
            [tuple(start_coords), tuple(end_coords)],
            [],
            "direct_fallback"
        )
