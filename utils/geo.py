"""
Geolocation Utilities
Distance calculations and distance labels
"""

import math
from numbers import Real
from typing import Dict, Optional

from config import EARTH_RADIUS_MILES, MILES_PER_DEGREE_LAT


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float,
                       radius: float = EARTH_RADIUS_MILES) -> float:
    """
    Calculate distance between two points using Haversine formula

    Args:
        lat1: Latitude of point 1
        lon1: Longitude of point 1
        lat2: Latitude of point 2
        lon2: Longitude of point 2
        radius: Sphere radius; the default gives miles

    Returns:
        Distance in miles (non-negative, symmetric)
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    # Haversine Formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))
    return c * radius


def _is_coordinate(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def distance_miles(lat1, lng1, lat2, lng2) -> Optional[float]:
    """
    Distance in miles, or None unless all four coordinates are finite numbers
    """
    if not all(_is_coordinate(v) for v in (lat1, lng1, lat2, lng2)):
        return None
    return haversine_distance(lat1, lng1, lat2, lng2)


def format_distance(miles: Optional[float]) -> Optional[str]:
    """
    Format a distance for list cards

    Examples: 0.05 → "<0.1 mi", 4.24 → "4.2 mi", 12.6 → "13 mi"
    """
    if miles is None:
        return None
    if miles < 0.1:
        return "<0.1 mi"
    if miles < 10:
        return f"{miles:.1f} mi"
    # Half rounds up
    return f"{int(math.floor(miles + 0.5))} mi"


def calculate_bounding_box(lat: float, lon: float, radius_miles: float) -> Dict[str, float]:
    """
    Calculate bounding box for geo filtering

    Args:
        lat: Center latitude
        lon: Center longitude
        radius_miles: Radius in miles

    Returns:
        Dictionary with min/max lat/lon
    """
    lat_delta = radius_miles / MILES_PER_DEGREE_LAT
    lon_delta = radius_miles / (MILES_PER_DEGREE_LAT * max(math.cos(math.radians(lat)), 1e-6))

    return {
        'lat_min': lat - lat_delta,
        'lat_max': lat + lat_delta,
        'lon_min': lon - lon_delta,
        'lon_max': lon + lon_delta
    }


def in_bounding_box(lat: float, lon: float, box: Dict[str, float]) -> bool:
    """Whether a point lies inside a bounding box from calculate_bounding_box"""
    return box['lat_min'] <= lat <= box['lat_max'] and box['lon_min'] <= lon <= box['lon_max']
