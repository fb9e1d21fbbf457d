"""
Sensor state, tick dispatching and track replay.
"""
from landmark_radar.sensors.state import (
    GeoPosition,
    PositionFix,
    SensorSnapshot,
    SensorStateStore,
    heading_from_orientation,
)
from landmark_radar.sensors.dispatcher import RadarDispatcher

__all__ = [
    'GeoPosition',
    'PositionFix',
    'SensorSnapshot',
    'SensorStateStore',
    'heading_from_orientation',
    'RadarDispatcher',
]
