"""
Core routing algorithms.
"""

from .astar_weighted import WeightedAStarRouter, RouteDetails

__all__ = [
    'WeightedAStarRouter',
    'RouteDetails'
]
