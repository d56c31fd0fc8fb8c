"""
Service layer for safe route requests.
"""

import logging
from typing import Any, Dict, Optional, Union

from ..algorithms.optimization.safe_route_optimizer import SafeRouteOptimizer
from ..config.routing_config import RoutingConfig
from ..data.data_loader import BaseIncidentSource
from ..data.models import SafeRouteResult
from ..schemas.routing import RouteRequest, SafeRouteResponse
from .route_history import BaseRouteHistoryStore, RouteHistoryEntry

logger = logging.getLogger(__name__)


class SafeRoutingService:
    """
    Validates route requests, runs the optimizer and records history.

    Only invalid input fails a request. Data source problems, search
    failures and history write errors all degrade to a best-effort result.
    """

    def __init__(self, incident_source: Optional[BaseIncidentSource] = None,
                 history_store: Optional[BaseRouteHistoryStore] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the routing service.

        Args:
            incident_source: Incident data collaborator (None = no hotspots)
            history_store: Route history collaborator (None = history disabled)
            config: Routing configuration parameters
        """
        self.incident_source = incident_source
        self.history_store = history_store
        self.optimizer = SafeRouteOptimizer(config)

    def find_safe_route(self, request: Union[RouteRequest, Dict[str, Any]]) -> SafeRouteResult:
        """
        Validate a request, compute its route and record history.

        Args:
            request: RouteRequest or raw request data

        Returns:
            SafeRouteResult for the request

        Raises:
            InvalidInputError: If the request coordinates are invalid
        """
        if not isinstance(request, RouteRequest):
            request = RouteRequest.parse(request)

        logger.info(f"Route calculation request from {request.source} to {request.destination}")

        result = self.optimizer.find_safe_route(
            request.source,
            request.destination,
            incident_source=self.incident_source
        )

        if request.user_id:
            self._store_route_history(request, SafeRouteResponse.from_result(result))

        return result

    def calculate_route(self, request: Union[RouteRequest, Dict[str, Any]]) -> SafeRouteResponse:
        """
        Calculate a safe route and convert it to the response format.

        Raises:
            InvalidInputError: If the request coordinates are invalid
        """
        return SafeRouteResponse.from_result(self.find_safe_route(request))

    def _store_route_history(self, request: RouteRequest, response: SafeRouteResponse) -> None:
        """Record the route for the user; failures are logged and ignored."""
        if self.history_store is None:
            logger.debug("Route history disabled - skipping write")
            return

        try:
            self.history_store.record(RouteHistoryEntry(
                user_id=request.user_id,
                source_lat=request.source_lat,
                source_lng=request.source_lng,
                destination_lat=request.dest_lat,
                destination_lng=request.dest_lng,
                route_data=response.to_payload()
            ))
        except Exception as e:
            logger.error(f"Error storing route history: {e}")
