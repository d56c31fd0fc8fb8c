import pytest

from safe_routing.algorithms.crime_weighting.hotspot_risk_field import HotspotRiskField
from safe_routing.mapping.grid.lattice_grid import (
    LatticeGrid,
    build_lattice_grid,
    create_grid_bounds,
)

from .conftest import CLUSTER_CENTER, DELHI_DESTINATION, DELHI_SOURCE


@pytest.fixture
def empty_field(config):
    return HotspotRiskField([], config)


@pytest.fixture
def grid(config, empty_field):
    return build_lattice_grid(DELHI_SOURCE, DELHI_DESTINATION, empty_field, config)


def test_bounds_are_padded():
    bounds = create_grid_bounds((28.60, 77.25), (28.65, 77.20), 0.01)
    assert bounds['lat_min'] == pytest.approx(28.59)
    assert bounds['lat_max'] == pytest.approx(28.66)
    assert bounds['lng_min'] == pytest.approx(77.19)
    assert bounds['lng_max'] == pytest.approx(77.26)


def test_default_grid_has_441_nodes(grid):
    assert len(grid) == 441
    assert grid.rows == grid.cols == 21


def test_corner_nodes_sit_on_bounds(grid):
    bounds = grid.bounds
    assert grid[0].coordinate == pytest.approx((bounds['lat_min'], bounds['lng_min']))
    assert grid[len(grid) - 1].coordinate == pytest.approx((bounds['lat_max'], bounds['lng_max']))


def test_nodes_are_evenly_spaced(grid):
    lat_step = (grid.bounds['lat_max'] - grid.bounds['lat_min']) / 20
    lng_step = (grid.bounds['lng_max'] - grid.bounds['lng_min']) / 20
    node = grid[grid.index(3, 7)]
    assert node.lat == pytest.approx(grid.bounds['lat_min'] + 3 * lat_step)
    assert node.lng == pytest.approx(grid.bounds['lng_min'] + 7 * lng_step)


def test_resolution_override(config, empty_field):
    grid = build_lattice_grid(DELHI_SOURCE, DELHI_DESTINATION, empty_field, config, resolution=1)
    assert len(grid) == 4


def test_invalid_resolution_rejected(config, empty_field):
    with pytest.raises(ValueError):
        build_lattice_grid(DELHI_SOURCE, DELHI_DESTINATION, empty_field, config, resolution=0)


def test_node_count_must_match_shape(grid):
    with pytest.raises(ValueError):
        LatticeGrid(grid.nodes[:10], 21, 21, grid.bounds)


@pytest.mark.parametrize("row,col,expected", [
    (0, 0, 3),
    (20, 20, 3),
    (0, 10, 5),
    (10, 0, 5),
    (10, 10, 8),
])
def test_neighbor_counts(grid, row, col, expected):
    neighbors = list(grid.neighbors(grid.index(row, col)))
    assert len(neighbors) == expected
    assert grid.index(row, col) not in neighbors


def test_neighbors_are_row_major(grid):
    center = grid.index(5, 5)
    assert list(grid.neighbors(center)) == [
        grid.index(4, 4), grid.index(4, 5), grid.index(4, 6),
        grid.index(5, 4), grid.index(5, 6),
        grid.index(6, 4), grid.index(6, 5), grid.index(6, 6),
    ]


def test_nearest_node_of_a_node_is_itself(grid):
    index = grid.index(7, 12)
    assert grid.find_nearest_node(*grid[index].coordinate) == index


def test_risk_is_annotated_from_field(config, high_hotspot):
    field = HotspotRiskField([high_hotspot], config)
    start = (CLUSTER_CENTER[0] - 0.01, CLUSTER_CENTER[1])
    end = (CLUSTER_CENTER[0] + 0.01, CLUSTER_CENTER[1])
    grid = build_lattice_grid(start, end, field, config)

    for node in grid.nodes:
        assert node.risk_value == pytest.approx(field.get_point_risk(node.lat, node.lng))

    stats = grid.get_risk_statistics()
    assert stats['risky_nodes'] > 0
    assert stats['max_risk'] <= 5.0


def test_reset_clears_search_state(grid):
    grid[3].cost_from_start = 4.2
    grid[3].predecessor = 2
    grid.reset_search_state()
    assert grid[3].cost_from_start == 0.0
    assert grid[3].predecessor is None


def test_graph_view(grid):
    graph = grid.to_graph()
    assert graph.number_of_nodes() == 441
    # 2 * 21 * 20 straight edges plus 2 * 20 * 20 diagonals
    assert graph.number_of_edges() == 1640
    assert graph.edges[0, 1]['length'] > 0
