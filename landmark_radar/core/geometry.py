"""
Spherical geometry functions for the landmark radar.

Provides distance and bearing calculations using the haversine formula
for great-circle distance between coordinates, plus the circular helpers
(angle normalization, circular mean) the layout engine builds on.
"""
import math
from typing import Iterable, Tuple

import numpy as np

from landmark_radar.utils.exceptions import GeometryError


# Earth's radius in kilometres (mean radius)
EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point (decimal degrees)
        lon1: Longitude of first point (decimal degrees)
        lat2: Latitude of second point (decimal degrees)
        lon2: Longitude of second point (decimal degrees)

    Returns:
        Distance in kilometres (0 for coincident points, never negative)

    Example:
        >>> # One degree of latitude along a meridian
        >>> distance = haversine_distance(0.0, 0.0, 1.0, 0.0)
        >>> print(f"{distance:.1f} km")
        111.2 km

    References:
        https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2)) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * (math.sin(dlon / 2)) ** 2
    # Rounding can push a marginally outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate initial bearing (forward azimuth) from point 1 to point 2.

    The bearing is the angle (in degrees) measured clockwise from north
    to the direction of point 2 from point 1. The bearing from a point to
    itself is degenerate and comes out as 0.

    Args:
        lat1: Latitude of starting point (decimal degrees)
        lon1: Longitude of starting point (decimal degrees)
        lat2: Latitude of destination point (decimal degrees)
        lon2: Longitude of destination point (decimal degrees)

    Returns:
        Bearing in degrees [0, 360), where:
        - 0° = North
        - 90° = East
        - 180° = South
        - 270° = West

    References:
        https://www.movable-type.co.uk/scripts/latlong.html
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    y = math.sin(dlon) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - \
        math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon)

    bearing_deg = math.degrees(math.atan2(y, x))

    bearing_deg = (bearing_deg + 360.0) % 360.0
    # (-tiny + 360) % 360 rounds to 360.0
    if bearing_deg >= 360.0:
        bearing_deg = 0.0

    return bearing_deg


def get_distance_and_bearing(lat1: float, lon1: float,
                             lat2: float, lon2: float) -> Tuple[float, float]:
    """
    Calculate both distance and bearing between two points.

    Returns:
        Tuple of (distance_km, bearing_degrees)
    """
    distance = haversine_distance(lat1, lon1, lat2, lon2)
    bearing = calculate_bearing(lat1, lon1, lat2, lon2)

    return distance, bearing


def haversine_distance_vec(lat1: float, lon1: float,
                           lat2: np.ndarray, lon2: np.ndarray) -> np.ndarray:
    """Vectorized haversine_distance from one point to many (km)."""
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlat = np.radians(np.asarray(lat2, dtype=float) - lat1)
    dlon = np.radians(np.asarray(lon2, dtype=float) - lon1)

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def calculate_bearing_vec(lat1: float, lon1: float,
                          lat2: np.ndarray, lon2: np.ndarray) -> np.ndarray:
    """Vectorized calculate_bearing from one point to many, in [0, 360)."""
    phi1 = np.radians(lat1)
    phi2 = np.radians(np.asarray(lat2, dtype=float))
    dlon = np.radians(np.asarray(lon2, dtype=float) - lon1)

    y = np.sin(dlon) * np.cos(phi2)
    x = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(dlon)

    brng = (np.degrees(np.arctan2(y, x)) + 360.0) % 360.0
    return np.where(brng >= 360.0, 0.0, brng)


def normalize_angle_diff(angle: float) -> float:
    """
    Reduce an angle difference to its shortest signed representation.

    Args:
        angle: Any real angle or angle difference (degrees)

    Returns:
        Equivalent angle in (-180, 180]

    Example:
        >>> normalize_angle_diff(350)
        -10.0
        >>> normalize_angle_diff(-180)
        180.0
    """
    x = (angle + 180.0) % 360.0 - 180.0
    if x <= -180.0:
        x += 360.0
    return x


def bearing_difference(bearing1: float, bearing2: float) -> float:
    """
    Calculate the absolute angular difference between two bearings.

    This accounts for the circular nature of bearings (e.g., the difference
    between 10° and 350° is 20°, not 340°).

    Returns:
        Absolute difference in degrees [0, 180]
    """
    return abs(normalize_angle_diff(bearing1 - bearing2))


def circular_mean(angles: Iterable[float]) -> float:
    """
    Mean of a set of angles, handling wrap-around at 360°/0°.

    Sums the unit vectors at each angle and returns the direction of the
    resultant.

    Args:
        angles: Angles in degrees (any range)

    Returns:
        Mean angle in degrees [0, 360)

    Raises:
        GeometryError: If no angles are given

    Example:
        >>> round(circular_mean([350, 10]), 6) % 360
        0.0
    """
    values = np.asarray(list(angles), dtype=float)
    if values.size == 0:
        raise GeometryError("Circular mean of an empty set of angles is undefined")
    if values.size == 1:
        mean_deg = float(values[0]) % 360.0
    else:
        rad = np.radians(values)
        x = float(np.sum(np.cos(rad)))
        y = float(np.sum(np.sin(rad)))
        mean_deg = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0

    if mean_deg >= 360.0:
        mean_deg = 0.0
    return mean_deg
