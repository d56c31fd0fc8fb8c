"""
Route optimization pipeline.
"""

from .safe_route_optimizer import SafeRouteOptimizer

__all__ = [
    'SafeRouteOptimizer'
]
