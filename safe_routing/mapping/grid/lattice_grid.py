"""
Rectangular lattice of candidate waypoints used as the routing search space.

The lattice stands in for a street network: nodes are evenly spaced between
the (padded) source/destination bounding box and carry a precomputed risk
value. Nodes live in a flat arena and refer to each other by index only.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

import networkx as nx
import numpy as np

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import haversine_distance, haversine_distances
from ...data.models import Coordinate, GridNode

if TYPE_CHECKING:
    from ...algorithms.crime_weighting.hotspot_risk_field import HotspotRiskField

logger = logging.getLogger(__name__)


class LatticeGrid:
    """
    Owns the GridNode arena for one route computation.

    Node (row, col) lives at flat index ``row * cols + col``; rows run along
    latitude and columns along longitude.
    """

    def __init__(self, nodes: List[GridNode], rows: int, cols: int,
                 bounds: Dict[str, float]):
        if len(nodes) != rows * cols:
            raise ValueError(f"Expected {rows * cols} nodes, got {len(nodes)}")

        self.nodes = nodes
        self.rows = rows
        self.cols = cols
        self.bounds = bounds

        self._lats = np.array([n.lat for n in nodes], dtype=float)
        self._lngs = np.array([n.lng for n in nodes], dtype=float)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> GridNode:
        return self.nodes[index]

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.cols)

    def neighbors(self, index: int) -> Iterator[int]:
        """
        Yield the up-to-8 Chebyshev-adjacent node indices.

        Order is row-major from the upper-left neighbor, clipped at edges.
        """
        row, col = self.position(index)
        for r in range(max(0, row - 1), min(self.rows - 1, row + 1) + 1):
            for c in range(max(0, col - 1), min(self.cols - 1, col + 1) + 1):
                if r == row and c == col:
                    continue
                yield self.index(r, c)

    def find_nearest_node(self, lat: float, lng: float) -> int:
        """
        Find the lattice node closest to a coordinate.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            Flat node index (first one on ties)
        """
        distances = haversine_distances(lat, lng, self._lats, self._lngs)
        return int(np.argmin(distances))

    def reset_search_state(self) -> None:
        """Clear cost fields and predecessors left by a previous search."""
        for node in self.nodes:
            node.cost_from_start = 0.0
            node.estimate_to_goal = 0.0
            node.total_cost = 0.0
            node.predecessor = None

    def to_graph(self) -> nx.Graph:
        """
        Build an undirected networkx graph of the lattice.

        Returns:
            Graph with node attributes y/x/risk and haversine 'length' edges (km)
        """
        graph = nx.Graph()

        for i, node in enumerate(self.nodes):
            graph.add_node(i, y=node.lat, x=node.lng, risk=node.risk_value)

        for i, node in enumerate(self.nodes):
            for j in self.neighbors(i):
                if j > i:
                    other = self.nodes[j]
                    graph.add_edge(i, j, length=haversine_distance(
                        node.lat, node.lng, other.lat, other.lng
                    ))

        return graph

    def get_risk_statistics(self) -> Dict[str, float]:
        risks = np.array([n.risk_value for n in self.nodes], dtype=float)
        return {
            'nodes': len(self.nodes),
            'risky_nodes': int(np.sum(risks > 0)),
            'max_risk': float(risks.max()) if len(risks) else 0.0,
            'mean_risk': float(risks.mean()) if len(risks) else 0.0
        }


def create_grid_bounds(start_coords: Coordinate, end_coords: Coordinate,
                       padding_deg: float) -> Dict[str, float]:
    """
    Create geographic bounds that encompass both endpoints with padding.

    Args:
        start_coords: (lat, lng) of route start
        end_coords: (lat, lng) of route end
        padding_deg: Padding in degrees on every side

    Returns:
        Dictionary with lat/lng bounds
    """
    return {
        'lat_min': min(start_coords[0], end_coords[0]) - padding_deg,
        'lat_max': max(start_coords[0], end_coords[0]) + padding_deg,
        'lng_min': min(start_coords[1], end_coords[1]) - padding_deg,
        'lng_max': max(start_coords[1], end_coords[1]) + padding_deg
    }


def build_lattice_grid(start_coords: Coordinate, end_coords: Coordinate,
                       risk_field: "HotspotRiskField",
                       config: Optional[RoutingConfig] = None,
                       resolution: Optional[int] = None) -> LatticeGrid:
    """
    Generate a risk-annotated lattice spanning source and destination.

    Args:
        start_coords: (lat, lng) of route start
        end_coords: (lat, lng) of route end
        risk_field: Risk lookup used to annotate each node once
        config: Routing configuration parameters
        resolution: Cells per side; overrides config.grid_resolution

    Returns:
        LatticeGrid with (resolution + 1)^2 nodes
    """
    config = config or RoutingConfig()
    if resolution is None:
        resolution = config.grid_resolution
    if resolution < 1:
        raise ValueError("Grid resolution must be at least 1")

    bounds = create_grid_bounds(start_coords, end_coords, config.grid_padding_deg)

    lat_step = (bounds['lat_max'] - bounds['lat_min']) / resolution
    lng_step = (bounds['lng_max'] - bounds['lng_min']) / resolution

    lats = bounds['lat_min'] + np.arange(resolution + 1) * lat_step
    lngs = bounds['lng_min'] + np.arange(resolution + 1) * lng_step

    nodes = []
    for lat in lats.tolist():
        for lng in lngs.tolist():
            nodes.append(GridNode(lat=lat, lng=lng,
                                  risk_value=risk_field.get_point_risk(lat, lng)))

    grid = LatticeGrid(nodes, resolution + 1, resolution + 1, bounds)

    stats = grid.get_risk_statistics()
    logger.info(f"Lattice built: {stats['nodes']} nodes, "
                f"{stats['risky_nodes']} near hotspots (max risk {stats['max_risk']:.2f})")
    return grid
