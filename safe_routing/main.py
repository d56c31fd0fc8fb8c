#!/usr/bin/env python3
"""
Safe Routing Engine - Command Line Interface

Computes a safe route from an incident file and prints the result as JSON.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import geojson

from .config import RoutingConfig
from .data import create_incident_source, route_to_geojson
from .schemas import RouteRequest, SafeRouteResponse
from .services import SafeRoutingService, SQLiteRouteHistory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a crime-aware safe route")
    parser.add_argument("--incidents", help="Incident data file (.geojson/.json or .csv)")
    parser.add_argument("--src", required=True, help="Source as 'lat,lng'")
    parser.add_argument("--dst", required=True, help="Destination as 'lat,lng'")
    parser.add_argument("--grid-resolution", type=int, default=None,
                        help="Lattice cells per side (default 20)")
    parser.add_argument("--geojson", help="Also write the route as GeoJSON to this file")
    parser.add_argument("--history-db", help="SQLite file for route history")
    parser.add_argument("--user-id", help="User id to record the route under")
    parser.add_argument("--log-level", default="info",
                        choices=["debug", "info", "warning", "error"], help="Log level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a single route computation."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = RoutingConfig()
    if args.grid_resolution is not None:
        config.grid_resolution = args.grid_resolution

    try:
        config.validate()
        request = RouteRequest.from_query(args.src, args.dst, args.user_id)
        incident_source = create_incident_source(args.incidents) if args.incidents else None
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2

    history_store = SQLiteRouteHistory(args.history_db) if args.history_db else None

    service = SafeRoutingService(incident_source, history_store, config)
    result = service.find_safe_route(request)
    payload = SafeRouteResponse.from_result(result).to_payload()

    if args.geojson:
        with open(args.geojson, 'w') as f:
            geojson.dump(route_to_geojson(result), f)
        logger.info(f"GeoJSON written to {args.geojson}")

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
