"""
Shared fixtures for the test suite.
"""
import math

import pytest

from landmark_radar.core.geometry import EARTH_RADIUS_KM
from landmark_radar.data.schemas import Landmark


def _make_landmark(idx=0, title=None, latitude=0.0, longitude=0.0, audio_path=None):
    return Landmark(
        id=idx,
        title=title or f"Landmark {idx + 1}",
        latitude=latitude,
        longitude=longitude,
        audio_path=audio_path,
    )


def _destination(lat, lon, bearing_deg, distance_km):
    delta = distance_km / EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(lat)
    lam1 = math.radians(lon)

    phi2 = math.asin(math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta))
    lam2 = lam1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return math.degrees(phi2), math.degrees(lam2)


@pytest.fixture
def make_landmark():
    """Factory for landmarks with sensible defaults."""
    return _make_landmark


@pytest.fixture
def destination():
    """Great-circle destination point for (lat, lon, bearing, distance_km)."""
    return _destination


@pytest.fixture
def north_landmark():
    """Landmark one degree north of the origin (~111.2 km)."""
    return _make_landmark(0, "North", latitude=1.0, longitude=0.0)
