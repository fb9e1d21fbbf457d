"""
Shared sensor state.

The latest user position and heading live in a single store. Producers
replace whole values; consumers read an immutable SensorSnapshot, so a
frame is always built from one consistent view even if new readings
arrive afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

from landmark_radar.utils.error_handling import is_finite_number
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

INITIAL_FIX_MAX_AGE_MS = 10000
WATCH_FIX_MAX_AGE_MS = 5000


class GeoPosition(NamedTuple):
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PositionFix:
    """A position reading and the time (ms) it was taken."""
    latitude: float
    longitude: float
    timestamp_ms: float

    @property
    def position(self) -> GeoPosition:
        return GeoPosition(self.latitude, self.longitude)


@dataclass(frozen=True)
class SensorSnapshot:
    """Immutable view of the sensor state at one instant."""
    position: Optional[GeoPosition] = None
    heading: Optional[float] = None
    position_timestamp_ms: Optional[float] = None
    heading_timestamp_ms: Optional[float] = None

    @property
    def is_ready(self) -> bool:
        """Both a position and a heading have been observed."""
        return self.position is not None and self.heading is not None


def heading_from_orientation(compass_heading: Optional[float] = None,
                             alpha: Optional[float] = None) -> Optional[float]:
    """
    Convert a device-orientation reading into a compass heading.

    A native compass heading (0 = north, clockwise) wins; otherwise the
    counter-clockwise ``alpha`` rotation is flipped to ``(360 - alpha) % 360``.

    Returns:
        Heading in [0, 360), or None when the reading carries neither value
    """
    if is_finite_number(compass_heading):
        return float(compass_heading) % 360.0
    if is_finite_number(alpha):
        return (360.0 - float(alpha)) % 360.0
    return None


class SensorStateStore:
    """
    Holder of the current SensorSnapshot.

    Args:
        initial_fix_max_age_ms: Oldest fix accepted before any position is known
        watch_fix_max_age_ms: Oldest fix accepted once a position is known
    """

    def __init__(self,
                 initial_fix_max_age_ms: float = INITIAL_FIX_MAX_AGE_MS,
                 watch_fix_max_age_ms: float = WATCH_FIX_MAX_AGE_MS):
        self.initial_fix_max_age_ms = initial_fix_max_age_ms
        self.watch_fix_max_age_ms = watch_fix_max_age_ms
        self._snapshot = SensorSnapshot()

    def snapshot(self) -> SensorSnapshot:
        return self._snapshot

    def replace_position(self, fix: PositionFix, now_ms: float) -> bool:
        """
        Replace the position with ``fix`` if it is fresh and valid.

        Returns:
            True if the fix was accepted
        """
        if not (is_finite_number(fix.latitude) and is_finite_number(fix.longitude)) \
                or abs(fix.latitude) > 90 or abs(fix.longitude) > 180:
            logger.warning("invalid_position_fix_rejected", latitude=fix.latitude, longitude=fix.longitude)
            return False

        max_age = self.initial_fix_max_age_ms if self._snapshot.position is None else self.watch_fix_max_age_ms
        age = now_ms - fix.timestamp_ms
        if age > max_age:
            logger.warning("stale_position_fix_rejected", age_ms=age, max_age_ms=max_age)
            return False

        self._snapshot = replace(
            self._snapshot,
            position=fix.position,
            position_timestamp_ms=fix.timestamp_ms,
        )
        return True

    def replace_heading(self, heading: float, now_ms: float) -> bool:
        """Replace the heading (normalized to [0, 360)); non-finite values are rejected."""
        if not is_finite_number(heading):
            logger.warning("invalid_heading_rejected", heading=heading)
            return False

        self._snapshot = replace(
            self._snapshot,
            heading=float(heading) % 360.0,
            heading_timestamp_ms=now_ms,
        )
        return True
