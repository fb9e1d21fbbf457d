"""
Audio selection for the aligned landmark.

Actual playback belongs to an external player; this module decides what
to play and keeps at most one landmark's audio running. Starting a landmark
stops everything else first. Players are created lazily, one per landmark,
and reused.
"""
from typing import Callable, Dict, Optional, Protocol

from landmark_radar.core.alignment import AlignedGroup
from landmark_radar.data.schemas import Landmark
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)


class AudioPlayer(Protocol):
    """What the controller needs from a platform audio player."""

    def play(self) -> None:
        ...

    def stop(self, fade_ms: int = 0) -> None:
        ...


PlayerFactory = Callable[[str], AudioPlayer]


class AudioController:
    """
    Plays the audio of one landmark at a time.

    Args:
        player_factory: Creates a looping player for an audio path
        fade_ms: Fade applied when stopping
    """

    def __init__(self, player_factory: PlayerFactory, fade_ms: int = 150):
        self.player_factory = player_factory
        self.fade_ms = fade_ms
        self._players: Dict[int, AudioPlayer] = {}
        self.playing: Optional[Landmark] = None

    def play_for(self, landmark: Optional[Landmark]) -> bool:
        """
        Stop all audio, then start ``landmark``'s audio if it has any.

        Returns:
            True if playback was started
        """
        if landmark is None or not landmark.audio_path:
            return False

        self.stop_all()

        player = self._players.get(landmark.id)
        if player is None:
            player = self.player_factory(landmark.audio_path)
            self._players[landmark.id] = player

        try:
            player.play()
        except Exception as e:
            # Playback failures (autoplay policy, missing file) are not fatal
            logger.warning("audio_play_failed", landmark_id=landmark.id, path=landmark.audio_path, error=str(e))
            return False

        self.playing = landmark
        logger.info("audio_started", landmark_id=landmark.id, title=landmark.title)
        return True

    def play_selection(self, selection: Optional[AlignedGroup]) -> bool:
        """Play the first member of the aligned selection."""
        if selection is None:
            return False
        return self.play_for(selection.primary)

    def stop_all(self) -> None:
        """Stop every player that has been created."""
        for landmark_id, player in self._players.items():
            try:
                player.stop(fade_ms=self.fade_ms)
            except Exception as e:
                logger.warning("audio_stop_failed", landmark_id=landmark_id, error=str(e))
        self.playing = None
