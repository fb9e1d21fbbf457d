"""
Sensor track replay.

Feeds a recorded track of positions and headings through a
RadarDispatcher, tick by tick, so layouts can be reproduced offline.

Expected CSV columns:
- timestamp_ms: Reading time (milliseconds, any monotonic origin)
- latitude, longitude: Position fix (decimal degrees)
- heading: Compass heading (degrees, 0 = north); blank keeps the last value
"""
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from landmark_radar.core.frame_builder import Frame
from landmark_radar.sensors.dispatcher import RadarDispatcher
from landmark_radar.utils.error_handling import validate_columns_exist
from landmark_radar.utils.exceptions import DataLoadError, DataValidationError
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

TRACK_COLUMNS = {'timestamp_ms', 'latitude', 'longitude', 'heading'}

# Fail the replay if more than this share of rows is unusable
MAX_INVALID_ROW_RATE = 0.10


def load_track(file_path: Path) -> pd.DataFrame:
    """
    Load and validate a sensor track CSV.

    Args:
        file_path: Path to the track CSV

    Returns:
        DataFrame sorted by timestamp, rows without a usable timestamp or
        position dropped

    Raises:
        DataLoadError: If the file is missing or unreadable
        DataValidationError: If columns are missing or too many rows are invalid
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"Track file not found: {file_path}")

    try:
        df = pd.read_csv(file_path)
    except Exception as e:
        raise DataLoadError(f"Failed to read track CSV: {e}") from e

    logger.info("track_loaded", file=str(file_path), rows=len(df))
    return prepare_track(df)


def prepare_track(df: pd.DataFrame) -> pd.DataFrame:
    """Validate, coerce and sort a track DataFrame."""
    validate_columns_exist(df, TRACK_COLUMNS, "Track")

    df = df.copy()
    for col in TRACK_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors='coerce')

    valid = df['timestamp_ms'].notna() & df['latitude'].between(-90, 90) & df['longitude'].between(-180, 180)
    invalid_rows = int((~valid).sum())

    if invalid_rows:
        error_rate = invalid_rows / len(df)
        logger.warning(
            "track_validation_errors",
            total_rows=len(df),
            invalid_rows=invalid_rows,
            error_rate=f"{error_rate:.2%}",
        )
        if error_rate > MAX_INVALID_ROW_RATE:
            raise DataValidationError(
                f"Track validation failed: {invalid_rows} invalid rows",
                invalid_rows=invalid_rows,
                details={'total_rows': len(df), 'error_rate': error_rate},
            )

    return df[valid].sort_values('timestamp_ms', kind='stable').reset_index(drop=True)


def replay_track(dispatcher: RadarDispatcher, track: pd.DataFrame) -> List[Frame]:
    """
    Drive the dispatcher with every track row and collect rebuilt frames.

    Each row submits its position (timestamped at the row time) and heading,
    then ticks the dispatcher at the row time, so the refresh interval
    throttles rows that arrive faster than it.
    """
    frames = []
    for row in track.itertuples(index=False):
        timestamp_ms = float(row.timestamp_ms)
        dispatcher.submit_position(float(row.latitude), float(row.longitude), timestamp_ms=timestamp_ms)
        if pd.notna(row.heading):
            dispatcher.submit_heading(float(row.heading))

        frame = dispatcher.tick(now_ms=timestamp_ms)
        if frame is not None:
            frames.append(frame)

    logger.info("track_replayed", rows=len(track), frames=len(frames))
    return frames


def frames_to_dataframe(frames: Sequence[Frame]) -> pd.DataFrame:
    """One row per projected segment across all frames."""
    rows = []
    for frame in frames:
        for seg in frame.segments:
            rows.append({
                'timestamp_ms': frame.timestamp_ms,
                'heading': frame.heading,
                'landmark_id': seg.landmark.id,
                'title': seg.landmark.title,
                'distance_km': seg.distance_km,
                'display_angle': seg.display_angle,
                'length': seg.length,
                'end_x': seg.end.x,
                'end_y': seg.end.y,
                'is_aligned': seg.is_aligned,
                'aligned_selection': frame.aligned.title_text if frame.aligned else None,
            })

    columns = [
        'timestamp_ms', 'heading', 'landmark_id', 'title', 'distance_km', 'display_angle',
        'length', 'end_x', 'end_y', 'is_aligned', 'aligned_selection',
    ]
    return pd.DataFrame(rows, columns=columns)
