"""
Lattice search space.
"""

from .lattice_grid import LatticeGrid, build_lattice_grid, create_grid_bounds

__all__ = [
    'LatticeGrid',
    'build_lattice_grid',
    'create_grid_bounds'
]
