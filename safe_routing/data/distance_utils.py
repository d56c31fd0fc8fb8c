"""
Distance calculation utilities.
"""

import math
from typing import Sequence, Tuple

import numpy as np

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in kilometers (NaN if any input is NaN)
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    # Rounding can push a past 1 for antipodal points; min() keeps NaN as-is
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def haversine_distances(lat: float, lon: float,
                        lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """
    Vectorized haversine from one point to many.

    Args:
        lat, lon: Reference point in degrees
        lats, lons: Arrays of target coordinates in degrees

    Returns:
        Array of distances in kilometers
    """
    lat_rad = np.radians(lat)
    lats_rad = np.radians(lats)
    delta_lat = np.radians(lats - lat)
    delta_lon = np.radians(lons - lon)

    a = (np.sin(delta_lat / 2) ** 2 +
         np.cos(lat_rad) * np.cos(lats_rad) * np.sin(delta_lon / 2) ** 2)
    a = np.minimum(a, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def calculate_route_distance(points: Sequence[Tuple[float, float]]) -> float:
    """
    Calculate the total geometric distance of a route.

    Args:
        points: Ordered (lat, lng) waypoints

    Returns:
        Total distance in kilometers
    """
    total_distance = 0.0

    for i in range(len(points) - 1):
        lat1, lon1 = points[i]
        lat2, lon2 = points[i + 1]
        total_distance += haversine_distance(lat1, lon1, lat2, lon2)

    return total_distance
