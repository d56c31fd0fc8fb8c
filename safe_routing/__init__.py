"""
Safe Routing Engine

Computes routes between two points that steer clear of historically
crime-dense areas, and rates every leg of the result.

## Quick Start

```python
from safe_routing import SafeRouteOptimizer, RoutingConfig, GeoJSONIncidentSource

# Create configuration
config = RoutingConfig.create_default_config()

# Initialize optimizer
optimizer = SafeRouteOptimizer(config)

# Find route
result = optimizer.find_safe_route(
    start_coords=(28.6129, 77.2295),  # India Gate
    end_coords=(28.6304, 77.2177),    # Connaught Place
    incident_source=GeoJSONIncidentSource("path/to/incidents.geojson")
)
print(result.overall_safety_score)
```

## Main Components

- **HotspotAnalyzer**: DBSCAN clustering of incidents into hotspots
- **HotspotRiskField**: Point risk from hotspot proximity
- **LatticeGrid**: Risk-annotated waypoint lattice
- **WeightedAStarRouter**: Risk-weighted A* search on the lattice
- **RouteScorer**: Segment risk tiers and 0-100 safety score
- **SafeRouteOptimizer**: End-to-end pipeline
- **SafeRoutingService**: Request validation and route history

## Architecture

- `algorithms/`: Clustering, risk weighting, routing, scoring and optimization
- `mapping/`: Lattice grid construction
- `data/`: Data model, incident sources and distance utilities
- `schemas/`: Request/response models
- `services/`: Request handling and route history
- `config/`: Configuration management
"""

# Main public API - expose the most commonly used classes
from .algorithms import (
    HotspotAnalyzer,
    HotspotRiskField,
    WeightedAStarRouter,
    RouteScorer,
    SafeRouteOptimizer
)
from .config import RoutingConfig
from .mapping import LatticeGrid, build_lattice_grid
from .data import (
    RiskTier,
    IncidentRecord,
    Hotspot,
    RouteSegment,
    SafeRouteResult,
    haversine_distance,
    InMemoryIncidentSource,
    GeoJSONIncidentSource,
    CSVIncidentSource,
    route_to_geojson
)
from .schemas import RouteRequest, SafeRouteResponse
from .services import SafeRoutingService, SQLiteRouteHistory
from .exceptions import (
    SafeRoutingError,
    InvalidInputError,
    DataSourceError,
    DegenerateRouteError,
    PersistenceError
)

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    # Main interfaces
    'SafeRouteOptimizer',
    'SafeRoutingService',
    'RoutingConfig',

    # Pipeline components
    'HotspotAnalyzer',
    'HotspotRiskField',
    'LatticeGrid',
    'build_lattice_grid',
    'WeightedAStarRouter',
    'RouteScorer',

    # Data model
    'RiskTier',
    'IncidentRecord',
    'Hotspot',
    'RouteSegment',
    'SafeRouteResult',
    'RouteRequest',
    'SafeRouteResponse',

    # Collaborators
    'InMemoryIncidentSource',
    'GeoJSONIncidentSource',
    'CSVIncidentSource',
    'SQLiteRouteHistory',

    # Utilities
    'haversine_distance',
    'route_to_geojson',

    # Errors
    'SafeRoutingError',
    'InvalidInputError',
    'DataSourceError',
    'DegenerateRouteError',
    'PersistenceError',

    # Metadata
    '__version__'
]
