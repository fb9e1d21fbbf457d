"""
Tests for sensor track replay.
"""
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from landmark_radar.core.frame_builder import FrameBuilder
from landmark_radar.core.projector import LayoutBounds, Point
from landmark_radar.sensors.dispatcher import RadarDispatcher
from landmark_radar.sensors.replay import (
    frames_to_dataframe,
    load_track,
    prepare_track,
    replay_track,
)
from landmark_radar.utils.exceptions import DataLoadError, DataValidationError


@pytest.fixture
def dispatcher(north_landmark):
    builder = FrameBuilder([north_landmark], LayoutBounds(Point(360.0, 360.0), 260.0))
    return RadarDispatcher(builder, update_interval_ms=60, clock=lambda: 0.0)


def make_track(timestamps, headings=None):
    headings = headings if headings is not None else [0.0] * len(timestamps)
    return pd.DataFrame({
        'timestamp_ms': timestamps,
        'latitude': [0.0] * len(timestamps),
        'longitude': [0.0] * len(timestamps),
        'heading': headings,
    })


class TestPrepareTrack:
    """Validation, coercion and ordering."""

    def test_sorted_by_timestamp(self):
        track = prepare_track(make_track([60, 0, 30]))
        assert track['timestamp_ms'].tolist() == [0, 30, 60]

    def test_missing_columns(self):
        df = pd.DataFrame({'timestamp_ms': [0], 'latitude': [0.0]})
        with pytest.raises(DataValidationError, match="missing required columns"):
            prepare_track(df)

    def test_too_many_invalid_rows(self):
        df = make_track([0, 30, 60, 90, 120])
        df.loc[1, 'latitude'] = 95.0
        with pytest.raises(DataValidationError) as exc_info:
            prepare_track(df)
        assert exc_info.value.invalid_rows == 1

    def test_few_invalid_rows_dropped(self):
        df = make_track(list(range(0, 20 * 60, 60)))
        df['latitude'] = df['latitude'].astype(object)
        df.loc[3, 'latitude'] = "north"

        track = prepare_track(df)
        assert len(track) == 19

    def test_blank_heading_kept(self):
        track = prepare_track(make_track([0, 60], headings=[10.0, None]))
        assert len(track) == 2
        assert pd.isna(track.loc[1, 'heading'])


class TestReplay:
    """Frames produced while replaying a track."""

    def test_throttled_to_interval(self, dispatcher):
        frames = replay_track(dispatcher, prepare_track(make_track([0, 30, 60, 120])))
        assert [f.timestamp_ms for f in frames] == [0, 60, 120]

    def test_blank_heading_keeps_previous(self, dispatcher):
        frames = replay_track(dispatcher, prepare_track(make_track([0, 60], headings=[180.0, None])))

        assert len(frames) == 2
        assert frames[1].heading == 180.0

    def test_no_heading_no_frames(self, dispatcher):
        frames = replay_track(dispatcher, prepare_track(make_track([0, 60], headings=[None, None])))
        assert frames == []


class TestLoadTrack:
    """CSV loading."""

    def test_missing_file(self):
        with pytest.raises(DataLoadError):
            load_track(Path("/nonexistent/track.csv"))

    def test_load_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "track.csv"
            make_track([60, 0]).to_csv(path, index=False)

            track = load_track(path)

        assert track['timestamp_ms'].tolist() == [0, 60]


class TestFramesToDataFrame:
    """Tabular export of frames."""

    def test_columns_and_rows(self, dispatcher):
        frames = replay_track(dispatcher, prepare_track(make_track([0, 60])))
        df = frames_to_dataframe(frames)

        assert len(df) == 2
        assert list(df.columns) == [
            'timestamp_ms', 'heading', 'landmark_id', 'title', 'distance_km', 'display_angle',
            'length', 'end_x', 'end_y', 'is_aligned', 'aligned_selection',
        ]
        assert df['title'].tolist() == ["North", "North"]
        assert df['is_aligned'].all()
        assert df.loc[0, 'aligned_selection'] == "North at 111.2 km"

    def test_empty(self):
        df = frames_to_dataframe([])
        assert df.empty
        assert 'landmark_id' in df.columns
