"""
Per-tick frame assembly.

Runs the whole layout pipeline for one (position, heading) pair:

  1) Observations: distance and bearing from the user to every landmark
  2) Relative angles: bearing minus heading, normalized to (-180, 180]
  3) Clustering and display-angle layout
  4) Projection to screen segments and alignment hit-test
  5) An immutable Frame holding draw commands and the aligned selection

Nothing is carried over between ticks.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from landmark_radar.core.alignment import AlignedGroup, AlignmentDetector, AlignmentPolicy
from landmark_radar.core.cluster_layout import ClusterLayout
from landmark_radar.core.clustering import CircularClusterer, JoinPolicy, RelativeAngle
from landmark_radar.core.geometry import (
    calculate_bearing_vec,
    haversine_distance_vec,
    normalize_angle_diff,
)
from landmark_radar.core.projector import LayoutBounds, Point, ProjectedSegment, RadarProjector
from landmark_radar.data.schemas import Landmark
from landmark_radar.utils.error_handling import is_finite_number
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Observation:
    """Distance and bearing from the user to one landmark."""
    landmark: Landmark
    distance_km: float
    bearing_deg: Optional[float]   # None when the landmark coincides with the user


# -----------------------------
# Draw commands
# -----------------------------

@dataclass(frozen=True)
class LineCommand:
    start: Point
    end: Point
    color: str
    width: float
    kind: str = "line"


@dataclass(frozen=True)
class MarkerCommand:
    center: Point
    radius: float
    color: str
    kind: str = "marker"


@dataclass(frozen=True)
class LabelCommand:
    position: Point
    text: str
    color: str
    font: str
    kind: str = "label"


DrawCommand = Union[LineCommand, MarkerCommand, LabelCommand]


@dataclass(frozen=True)
class DrawStyle:
    """Colors and sizes used for draw commands."""
    aligned_color: str = "#000"
    idle_color: str = "#666"
    aligned_line_width: float = 5.0
    idle_line_width: float = 2.0
    aligned_marker_color: str = "#000"
    idle_marker_color: str = "#444"
    aligned_marker_radius: float = 6.0
    idle_marker_radius: float = 4.0
    label_color: str = "#222"
    label_font: str = "12px system-ui"
    label_offset: float = 4.0
    axis_color: str = "#eee"
    reference_color: str = "#19a75b"
    reference_line_width: float = 3.0
    reference_top_margin: float = 10.0


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs for one refresh."""
    timestamp_ms: float
    heading: float
    segments: Tuple[ProjectedSegment, ...]
    commands: Tuple[DrawCommand, ...]
    aligned: Optional[AlignedGroup] = None

    @property
    def has_alignment(self) -> bool:
        return self.aligned is not None


# -----------------------------
# Pipeline stages
# -----------------------------

def compute_observations(
    landmarks: Sequence[Landmark],
    latitude: float,
    longitude: float,
) -> List[Observation]:
    """
    Distance (km) and bearing from the user position to each landmark.

    Landmarks at the user's exact position get distance 0 and no bearing.
    """
    if not landmarks:
        return []

    lats = np.array([lm.latitude for lm in landmarks], dtype=float)
    lons = np.array([lm.longitude for lm in landmarks], dtype=float)

    distances = haversine_distance_vec(latitude, longitude, lats, lons)
    bearings = calculate_bearing_vec(latitude, longitude, lats, lons)
    coincident = (lats == latitude) & (lons == longitude)

    return [
        Observation(
            landmark=lm,
            distance_km=float(distances[i]),
            bearing_deg=None if coincident[i] else float(bearings[i]),
        )
        for i, lm in enumerate(landmarks)
    ]


def compute_relative_angles(observations: Sequence[Observation], heading: float) -> List[RelativeAngle]:
    """Heading-relative angles for every observation that has a bearing."""
    relative = []
    for obs in observations:
        if obs.bearing_deg is None or not is_finite_number(obs.bearing_deg):
            continue
        relative.append(RelativeAngle(
            landmark=obs.landmark,
            angle=normalize_angle_diff(obs.bearing_deg - heading),
            distance_km=obs.distance_km,
        ))
    return relative


class FrameBuilder:
    """
    Builds immutable frames from the landmark catalog and sensor values.

    Args:
        landmarks: Catalog, read-only
        bounds: Drawing area and distance scale
        spacing_deg: Cluster join threshold and spread spacing
        tolerance_deg: Alignment band half-width
        join_policy: Clustering join policy
        alignment_policy: Resolution of multiple aligned groups
        style: Draw-command styling
    """

    def __init__(
        self,
        landmarks: Sequence[Landmark],
        bounds: LayoutBounds,
        spacing_deg: float = 3.0,
        tolerance_deg: float = 5.0,
        join_policy: JoinPolicy = JoinPolicy.FIRST_MATCH,
        alignment_policy: AlignmentPolicy = AlignmentPolicy.LAST,
        style: Optional[DrawStyle] = None,
    ):
        self.landmarks = tuple(landmarks)
        self.bounds = bounds
        self.clusterer = CircularClusterer(spacing_deg, join_policy)
        self.layout = ClusterLayout(spacing_deg)
        self.projector = RadarProjector(bounds)
        self.detector = AlignmentDetector(tolerance_deg, alignment_policy)
        self.style = style or DrawStyle()

    @classmethod
    def from_config(cls, landmarks: Sequence[Landmark], config, bounds: Optional[LayoutBounds] = None) -> 'FrameBuilder':
        """Builder wired from a RadarConfig; bounds default to a square canvas."""
        if bounds is None:
            bounds = LayoutBounds.from_canvas(
                config.canvas_size,
                config.canvas_size,
                line_max_length=config.line_max_length,
                margin=config.canvas_margin,
                max_display_distance_km=config.max_display_distance_km,
                min_ratio=config.min_length_ratio,
                min_length=config.min_line_length,
                label_ratio=config.label_position_ratio,
            )
        return cls(
            landmarks,
            bounds,
            spacing_deg=config.group_spacing_deg,
            tolerance_deg=config.alignment_tolerance_deg,
            join_policy=config.join_policy,
            alignment_policy=config.alignment_policy,
            style=DrawStyle(**config.style.model_dump()),
        )

    def build(
        self,
        latitude: float,
        longitude: float,
        heading: float,
        timestamp_ms: Optional[float] = None,
    ) -> Frame:
        """
        Build the frame for one tick.

        Example:
            >>> builder = FrameBuilder(landmarks, LayoutBounds(Point(360, 360), 260))
            >>> frame = builder.build(50.63, 3.06, heading=90.0)
            >>> frame.has_alignment
            True
        """
        if timestamp_ms is None:
            timestamp_ms = time.monotonic() * 1000.0

        observations = compute_observations(self.landmarks, latitude, longitude)
        relative = compute_relative_angles(observations, heading)
        clusters = self.clusterer.cluster(relative)

        grouped: List[List[ProjectedSegment]] = []
        for assignments in self.layout.assign_all(clusters):
            group = []
            for assignment in assignments:
                segment = self.projector.project(
                    assignment.landmark,
                    assignment.display_angle,
                    assignment.member.distance_km,
                    is_aligned=self.detector.is_aligned(assignment.display_angle),
                )
                if segment is not None:
                    group.append(segment)
            if group:
                grouped.append(group)

        segments = tuple(s for group in grouped for s in group)
        aligned = self.detector.select(grouped)

        frame = Frame(
            timestamp_ms=timestamp_ms,
            heading=heading,
            segments=segments,
            commands=tuple(self._background_commands()) + tuple(self._segment_commands(segments)),
            aligned=aligned,
        )
        logger.debug(
            "frame_built",
            landmarks=len(self.landmarks),
            clusters=len(clusters),
            segments=len(segments),
            aligned=aligned.titles if aligned else None,
        )
        return frame

    def _background_commands(self) -> List[DrawCommand]:
        s = self.style
        cx, cy = self.bounds.center
        width, height = 2 * cx, 2 * cy
        return [
            LineCommand(Point(cx, 0.0), Point(cx, height), s.axis_color, 1.0),
            LineCommand(Point(0.0, cy), Point(width, cy), s.axis_color, 1.0),
            LineCommand(Point(cx, cy), Point(cx, s.reference_top_margin), s.reference_color, s.reference_line_width),
        ]

    def _segment_commands(self, segments: Sequence[ProjectedSegment]) -> List[DrawCommand]:
        s = self.style
        commands: List[DrawCommand] = []
        for seg in segments:
            if seg.is_aligned:
                line_color, line_width = s.aligned_color, s.aligned_line_width
                marker_color, marker_radius = s.aligned_marker_color, s.aligned_marker_radius
            else:
                line_color, line_width = s.idle_color, s.idle_line_width
                marker_color, marker_radius = s.idle_marker_color, s.idle_marker_radius

            commands.append(LineCommand(seg.start, seg.end, line_color, line_width))
            commands.append(LabelCommand(
                Point(seg.label_point.x + s.label_offset, seg.label_point.y + s.label_offset),
                seg.label_text,
                s.label_color,
                s.label_font,
            ))
            commands.append(MarkerCommand(seg.end, marker_radius, marker_color))
        return commands
