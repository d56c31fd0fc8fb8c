"""
Routing algorithms and optimization functionality.

This module contains:
- Hotspot clustering (DBSCAN)
- Hotspot risk field
- Risk-weighted A* over the lattice grid
- Route segment scoring
- The end-to-end route optimizer
"""

from .clustering.hotspot_analyzer import HotspotAnalyzer
from .crime_weighting.hotspot_risk_field import HotspotRiskField, RiskAssessment
from .routing.astar_weighted import WeightedAStarRouter, RouteDetails
from .scoring.route_scorer import RouteScorer
from .optimization.safe_route_optimizer import SafeRouteOptimizer

__all__ = [
    'HotspotAnalyzer',
    'HotspotRiskField',
    'RiskAssessment',
    'WeightedAStarRouter',
    'RouteDetails',
    'RouteScorer',
    'SafeRouteOptimizer'
]
