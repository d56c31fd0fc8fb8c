"""
Configuration management for safe routing parameters.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class RoutingConfig:
    """Configuration parameters for hotspot detection, grid search and scoring."""

    # Hotspot Clustering (DBSCAN over raw lat/lng degrees)
    cluster_eps: float = 0.01  # degrees - neighbourhood radius
    min_cluster_size: int = 2  # min incidents for a hotspot
    high_risk_threshold: int = 10  # more incidents than this -> high
    medium_risk_threshold: int = 5  # more incidents than this -> medium
    max_incidents: int = 10000  # cap on incidents fed to the clusterer

    # Risk Field
    safety_margin: float = 1.5  # multiple of hotspot radius that counts as "near"
    severity_weights: Dict[str, float] = field(default_factory=lambda: {
        'low': 1.0,
        'medium': 3.0,
        'high': 5.0
    })

    # Grid
    grid_resolution: int = 20  # cells per side -> (n+1)^2 nodes
    grid_padding_deg: float = 0.01  # degrees added around source/destination

    # Search Behavior
    risk_penalty_factor: float = 0.5  # cost multiplier is 1 + risk * factor
    max_search_expansions: Optional[int] = None  # None = bounded by grid size only
    direct_route_without_hotspots: bool = True  # skip the grid when nothing to avoid
    compute_baseline: bool = True  # unweighted lattice path for detour stats

    # Scoring
    km_per_degree: float = 111.0  # planar degree -> km approximation
    high_segment_penalty: float = 30.0
    medium_segment_penalty: float = 15.0

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.cluster_eps <= 0:
            raise ValueError("cluster_eps must be positive")
        if self.min_cluster_size < 2:
            raise ValueError("min_cluster_size must be at least 2")
        if self.medium_risk_threshold > self.high_risk_threshold:
            raise ValueError("medium_risk_threshold must not exceed high_risk_threshold")
        if self.max_incidents < 1:
            raise ValueError("max_incidents must be at least 1")
        if self.safety_margin <= 0:
            raise ValueError("safety_margin must be positive")
        missing = {'low', 'medium', 'high'} - set(self.severity_weights)
        if missing:
            raise ValueError(f"severity_weights missing tiers: {sorted(missing)}")
        if self.grid_resolution < 1:
            raise ValueError("grid_resolution must be at least 1")
        if self.grid_padding_deg < 0:
            raise ValueError("grid_padding_deg must be non-negative")
        if self.risk_penalty_factor < 0:
            raise ValueError("risk_penalty_factor must be non-negative")
        if self.max_search_expansions is not None and self.max_search_expansions < 1:
            raise ValueError("max_search_expansions must be at least 1 when set")

    @classmethod
    def create_default_config(cls) -> 'RoutingConfig':
        """Create the standard 20x20 configuration."""
        return cls()

    @classmethod
    def create_fine_grid_config(cls) -> 'RoutingConfig':
        """
        Create configuration with a denser lattice.

        Trades search time for smoother detours around small hotspots.
        """
        return cls(
            grid_resolution=40,
            grid_padding_deg=0.015
        )

    @classmethod
    def create_risk_averse_config(cls) -> 'RoutingConfig':
        """
        Create configuration that penalizes risky waypoints more heavily.

        Wider safety margin and a steeper cost multiplier push the search
        further away from hotspots at the price of longer routes.
        """
        return cls(
            safety_margin=2.0,
            risk_penalty_factor=1.5,
            grid_padding_deg=0.02,
            grid_resolution=30
        )
