"""
Route safety scoring.
"""

from .route_scorer import RouteScorer, min_distance_to_segment_km

__all__ = [
    'RouteScorer',
    'min_distance_to_segment_km'
]
