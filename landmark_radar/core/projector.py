"""
Radar projection of (display angle, distance) pairs onto screen space.

Angles follow the radar convention: 0° points straight up (forward) and
angles grow clockwise. Screen y grows downwards, so a line of length L at
angle θ ends at (cx + sin θ·L, cy − cos θ·L).

Line length shrinks with distance:

    ratio  = max(min_ratio, 1 - min(d, max_d) / max_d)
    length = max(min_length, max_length * ratio)

so nearer landmarks draw longer lines and no line vanishes or leaves the
canvas.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from landmark_radar.data.schemas import Landmark
from landmark_radar.utils.error_handling import is_finite_number
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

MIN_LENGTH_RATIO = 0.05
MIN_LINE_LENGTH = 40.0
LABEL_POSITION_RATIO = 0.6


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class LayoutBounds:
    """Drawing area and distance scale for one frame."""
    center: Point
    max_length: float
    max_display_distance_km: float = 200.0
    min_ratio: float = MIN_LENGTH_RATIO
    min_length: float = MIN_LINE_LENGTH
    label_ratio: float = LABEL_POSITION_RATIO

    def __post_init__(self):
        if self.max_length <= 0:
            raise ValueError("max_length must be positive")
        if self.max_display_distance_km <= 0:
            raise ValueError("max_display_distance_km must be positive")
        if not 0 <= self.min_ratio <= 1:
            raise ValueError("min_ratio must be in [0, 1]")
        if self.min_length < 0:
            raise ValueError("min_length must be non-negative")

    @classmethod
    def from_canvas(
        cls,
        width: float,
        height: float,
        line_max_length: float = 260.0,
        margin: float = 20.0,
        **kwargs,
    ) -> 'LayoutBounds':
        """
        Bounds centered on a canvas, lines kept ``margin`` away from its edge.

        The max length is min(line_max_length, min(width, height)/2 - margin).
        """
        max_length = min(line_max_length, min(width, height) / 2 - margin)
        return cls(center=Point(width / 2, height / 2), max_length=max_length, **kwargs)


@dataclass(frozen=True)
class ProjectedSegment:
    """A landmark's line on the radar for the current frame."""
    landmark: Landmark
    start: Point
    end: Point
    label_point: Point
    length: float
    distance_km: float
    display_angle: float
    is_aligned: bool
    label_text: str


def format_distance(distance_km: float) -> str:
    """Distance label text, e.g. '12.3 km'."""
    return f"{distance_km:.1f} km"


class RadarProjector:
    """
    Maps display angles and distances into bounded screen segments.

    Pure function of (display angle, distance, bounds); holds no state
    beyond its bounds.
    """

    def __init__(self, bounds: LayoutBounds):
        self.bounds = bounds

    def line_length(self, distance_km: float) -> float:
        """Line length for a distance, clamped to [min_length, max_length]."""
        b = self.bounds
        ratio = max(b.min_ratio, 1 - min(distance_km, b.max_display_distance_km) / b.max_display_distance_km)
        return max(b.min_length, b.max_length * ratio)

    def point_at(self, display_angle: float, length: float) -> Point:
        """Screen point ``length`` away from the center along ``display_angle``."""
        theta = math.radians(display_angle)
        return Point(
            self.bounds.center.x + math.sin(theta) * length,
            self.bounds.center.y - math.cos(theta) * length,
        )

    def project(
        self,
        landmark: Landmark,
        display_angle: float,
        distance_km: float,
        is_aligned: bool = False,
    ) -> Optional[ProjectedSegment]:
        """
        Project one landmark.

        Returns:
            The segment, or None when the angle or distance is not a finite
            number (or the distance is negative) and the segment is hidden
        """
        if not is_finite_number(display_angle) or not is_finite_number(distance_km) or distance_km < 0:
            logger.debug(
                "segment_hidden",
                landmark_id=landmark.id,
                display_angle=display_angle,
                distance_km=distance_km,
            )
            return None

        length = self.line_length(distance_km)
        return ProjectedSegment(
            landmark=landmark,
            start=self.bounds.center,
            end=self.point_at(display_angle, length),
            label_point=self.point_at(display_angle, length * self.bounds.label_ratio),
            length=length,
            distance_km=distance_km,
            display_angle=display_angle,
            is_aligned=is_aligned,
            label_text=format_distance(distance_km),
        )
