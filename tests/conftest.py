# tests/conftest.py
import pytest

from safe_routing.config import RoutingConfig
from safe_routing.data.models import Hotspot, IncidentRecord, RiskTier

# India Gate -> Connaught Place
DELHI_SOURCE = (28.6129, 77.2295)
DELHI_DESTINATION = (28.6304, 77.2177)

CLUSTER_CENTER = (28.6453, 77.2182)

# Offsets (degrees) of a tight 12-incident cluster around CLUSTER_CENTER
CLUSTER_OFFSETS = [
    (0.0, 0.0), (0.0003, 0.0), (-0.0003, 0.0), (0.0, 0.0003),
    (0.0, -0.0003), (0.0002, 0.0002), (-0.0002, -0.0002), (0.0002, -0.0002),
    (-0.0002, 0.0002), (0.0004, 0.0001), (-0.0004, -0.0001), (0.0001, 0.0004),
]


def make_cluster(center, count, prefix="ps"):
    """Incident records packed around a center."""
    return [
        IncidentRecord(
            name=f"{prefix}-{i}",
            lat=center[0] + dlat,
            lng=center[1] + dlng,
            total_count=10.0,
            density=1.5,
        )
        for i, (dlat, dlng) in enumerate(CLUSTER_OFFSETS[:count])
    ]


@pytest.fixture
def config():
    return RoutingConfig()


@pytest.fixture
def cluster_records():
    return make_cluster(CLUSTER_CENTER, 12)


@pytest.fixture
def high_hotspot():
    return Hotspot(center=CLUSTER_CENTER, radius_km=0.5, incident_count=12,
                   risk_tier=RiskTier.HIGH)


@pytest.fixture
def medium_hotspot():
    return Hotspot(center=CLUSTER_CENTER, radius_km=0.5, incident_count=7,
                   risk_tier=RiskTier.MEDIUM)


@pytest.fixture
def low_hotspot():
    return Hotspot(center=CLUSTER_CENTER, radius_km=0.5, incident_count=3,
                   risk_tier=RiskTier.LOW)
