"""
Tests for radar projection.
"""
import math

import pytest

from landmark_radar.core.projector import (
    LayoutBounds,
    Point,
    RadarProjector,
    format_distance,
)


@pytest.fixture
def bounds():
    return LayoutBounds(center=Point(360.0, 360.0), max_length=260.0, max_display_distance_km=200.0)


@pytest.fixture
def projector(bounds):
    return RadarProjector(bounds)


class TestLineLength:
    """Distance to length mapping."""

    def test_zero_distance_is_max_length(self, projector):
        assert projector.line_length(0.0) == 260.0

    def test_at_max_distance_is_clamped(self, projector):
        """At the max display distance, length = max(40, 260 * 0.05) = 40."""
        assert projector.line_length(200.0) == 40.0

    def test_beyond_max_distance_is_clamped(self, projector):
        assert projector.line_length(5000.0) == 40.0

    def test_min_ratio_wins_over_min_length(self):
        """With a long max length the 5% ratio floor is the binding clamp."""
        projector = RadarProjector(LayoutBounds(Point(0, 0), max_length=1000.0))
        assert projector.line_length(200.0) == pytest.approx(50.0)

    def test_intermediate_distance(self, projector):
        assert projector.line_length(111.2) == pytest.approx(260 * (1 - 111.2 / 200))

    def test_nearer_is_longer(self, projector):
        lengths = [projector.line_length(d) for d in (0, 20, 50, 100, 150)]
        assert lengths == sorted(lengths, reverse=True)


class TestCoordinates:
    """Angle to screen-point mapping (0 = up, clockwise positive)."""

    @pytest.mark.parametrize("angle,expected", [
        (0, (360.0, 100.0)),
        (90, (620.0, 360.0)),
        (180, (360.0, 620.0)),
        (-90, (100.0, 360.0)),
    ])
    def test_cardinal_directions(self, projector, angle, expected):
        point = projector.point_at(angle, 260.0)
        assert point.x == pytest.approx(expected[0], abs=1e-9)
        assert point.y == pytest.approx(expected[1], abs=1e-9)

    def test_segment_geometry(self, projector, make_landmark):
        segment = projector.project(make_landmark(0), 30.0, 50.0)
        length = projector.line_length(50.0)
        theta = math.radians(30.0)

        assert segment.start == Point(360.0, 360.0)
        assert segment.end.x == pytest.approx(360 + math.sin(theta) * length)
        assert segment.end.y == pytest.approx(360 - math.cos(theta) * length)
        assert segment.label_point.x == pytest.approx(360 + math.sin(theta) * length * 0.6)
        assert segment.label_point.y == pytest.approx(360 - math.cos(theta) * length * 0.6)
        assert segment.length == length
        assert segment.distance_km == 50.0
        assert segment.display_angle == 30.0
        assert segment.is_aligned is False

    def test_label_text(self, projector, make_landmark):
        segment = projector.project(make_landmark(0), 0.0, 111.19)
        assert segment.label_text == "111.2 km"

    def test_deterministic(self, projector, make_landmark):
        landmark = make_landmark(0)
        assert projector.project(landmark, 12.0, 34.0, True) == projector.project(landmark, 12.0, 34.0, True)


class TestHiddenSegments:
    """Invalid inputs hide the segment instead of producing NaN coordinates."""

    @pytest.mark.parametrize("angle,distance", [
        (float('nan'), 10.0),
        (0.0, float('nan')),
        (float('inf'), 10.0),
        (0.0, float('inf')),
        (0.0, -1.0),
        (None, 10.0),
    ])
    def test_hidden(self, projector, make_landmark, angle, distance):
        assert projector.project(make_landmark(0), angle, distance) is None


class TestLayoutBounds:
    """Bounds construction and validation."""

    def test_from_canvas_default_size(self):
        bounds = LayoutBounds.from_canvas(720, 720, line_max_length=260, margin=20)
        assert bounds.center == Point(360.0, 360.0)
        assert bounds.max_length == 260

    def test_from_canvas_small_screen(self):
        """Small canvases shrink the max length to fit."""
        bounds = LayoutBounds.from_canvas(300, 400, line_max_length=260, margin=20)
        assert bounds.center == Point(150.0, 200.0)
        assert bounds.max_length == 130

    def test_from_canvas_passes_scale(self):
        bounds = LayoutBounds.from_canvas(720, 720, max_display_distance_km=50.0)
        assert bounds.max_display_distance_km == 50.0

    @pytest.mark.parametrize("kwargs", [
        {'max_length': 0},
        {'max_length': 100, 'max_display_distance_km': 0},
        {'max_length': 100, 'min_ratio': 1.5},
        {'max_length': 100, 'min_length': -1},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            LayoutBounds(center=Point(0, 0), **kwargs)

    def test_format_distance(self):
        assert format_distance(0) == "0.0 km"
        assert format_distance(12.345) == "12.3 km"
