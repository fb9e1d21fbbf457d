"""Audio selection for aligned landmarks."""

from landmark_radar.playback.audio import AudioController, AudioPlayer

__all__ = [
    'AudioController',
    'AudioPlayer',
]
