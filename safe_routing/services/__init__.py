"""
Request-level services and external collaborators.
"""

from .route_history import BaseRouteHistoryStore, RouteHistoryEntry, SQLiteRouteHistory
from .routing_service import SafeRoutingService

__all__ = [
    'BaseRouteHistoryStore',
    'RouteHistoryEntry',
    'SQLiteRouteHistory',
    'SafeRoutingService'
]
