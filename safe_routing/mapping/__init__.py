"""
Search space construction.

This module contains:
- Risk-annotated lattice grid generation
- Nearest-node lookup and neighbor iteration
"""

from .grid import LatticeGrid, build_lattice_grid, create_grid_bounds

__all__ = [
    'LatticeGrid',
    'build_lattice_grid',
    'create_grid_bounds'
]
