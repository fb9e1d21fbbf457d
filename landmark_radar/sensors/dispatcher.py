"""
Single-threaded tick dispatcher.

Position and heading producers never touch the state directly: they
submit replace-operations which the dispatcher applies, in arrival order
and each to completion, at the start of the next tick. The frame builder
then works from one immutable snapshot. No locks are needed because only
the dispatcher's thread mutates the store.

A tick rebuilds only when both a position and a heading are known and the
refresh interval has elapsed since the previous rebuild; any other tick is
a no-op.
"""
from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Optional

from landmark_radar.core.frame_builder import Frame, FrameBuilder
from landmark_radar.sensors.state import (
    PositionFix,
    SensorSnapshot,
    SensorStateStore,
    heading_from_orientation,
)
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

POSITION_TIMEOUT_MS = 10000


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class RadarDispatcher:
    """
    Owns the sensor state and drives frame rebuilds.

    Args:
        builder: Frame builder for the loaded catalog
        update_interval_ms: Minimum time between rebuilds
        store: Sensor state store (a fresh one by default)
        position_timeout_ms: Time without a first fix before warning
        clock: Millisecond clock, monotonic by default
    """

    def __init__(
        self,
        builder: FrameBuilder,
        update_interval_ms: float = 60,
        store: Optional[SensorStateStore] = None,
        position_timeout_ms: float = POSITION_TIMEOUT_MS,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.builder = builder
        self.update_interval_ms = update_interval_ms
        self.store = store or SensorStateStore()
        self.position_timeout_ms = position_timeout_ms
        self.clock = clock

        self._pending: Deque[Callable[[float], None]] = deque()
        self._started_ms = clock()
        self._last_render_ms: Optional[float] = None
        self._timeout_reported = False
        self._running = False
        self.last_frame: Optional[Frame] = None

    @classmethod
    def from_config(cls, builder: FrameBuilder, config, **kwargs) -> 'RadarDispatcher':
        """Dispatcher wired from a RadarConfig."""
        store = SensorStateStore(
            initial_fix_max_age_ms=config.timing.initial_fix_max_age_ms,
            watch_fix_max_age_ms=config.timing.watch_fix_max_age_ms,
        )
        return cls(
            builder,
            update_interval_ms=config.update_interval_ms,
            store=store,
            position_timeout_ms=config.timing.position_timeout_ms,
            **kwargs,
        )

    # -----------------------------
    # Producers
    # -----------------------------

    def submit_position(self, latitude: float, longitude: float, timestamp_ms: Optional[float] = None) -> None:
        """Queue a position replacement; the fix is timestamped now unless given."""
        fix = PositionFix(latitude, longitude, self.clock() if timestamp_ms is None else timestamp_ms)
        self._pending.append(lambda now: self.store.replace_position(fix, now))

    def submit_heading(self, heading: float) -> None:
        """Queue a heading replacement (degrees, 0 = north, clockwise)."""
        self._pending.append(lambda now: self.store.replace_heading(heading, now))

    def submit_orientation(self, compass_heading: Optional[float] = None, alpha: Optional[float] = None) -> None:
        """Queue a heading derived from a device-orientation reading, if it has one."""
        heading = heading_from_orientation(compass_heading, alpha)
        if heading is not None:
            self.submit_heading(heading)

    # -----------------------------
    # Consumer
    # -----------------------------

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def position_timed_out(self) -> bool:
        """No position arrived within the timeout (reported once)."""
        return self._timeout_reported

    def snapshot(self) -> SensorSnapshot:
        return self.store.snapshot()

    def tick(self, now_ms: Optional[float] = None) -> Optional[Frame]:
        """
        Apply pending updates, then rebuild if ready and due.

        Returns:
            The new Frame, or None when nothing changed this tick
        """
        if now_ms is None:
            now_ms = self.clock()

        while self._pending:
            self._pending.popleft()(now_ms)

        snapshot = self.store.snapshot()
        if snapshot.position is None:
            self._check_position_timeout(now_ms)
        if not snapshot.is_ready:
            return None

        if self._last_render_ms is not None and now_ms - self._last_render_ms < self.update_interval_ms:
            return None

        frame = self.builder.build(
            snapshot.position.latitude,
            snapshot.position.longitude,
            snapshot.heading,
            timestamp_ms=now_ms,
        )
        self._last_render_ms = now_ms
        self.last_frame = frame
        return frame

    def _check_position_timeout(self, now_ms: float) -> None:
        if not self._timeout_reported and now_ms - self._started_ms >= self.position_timeout_ms:
            self._timeout_reported = True
            logger.warning("position_fix_timeout", waited_ms=now_ms - self._started_ms)

    # -----------------------------
    # Loop
    # -----------------------------

    def run(
        self,
        on_frame: Callable[[Frame], None],
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Tick at the refresh interval until stopped.

        Args:
            on_frame: Called with every rebuilt frame
            max_ticks: Stop after this many ticks (run until stop() if None)
            sleep: Sleep function taking seconds

        Returns:
            Number of frames delivered
        """
        self._running = True
        ticks = 0
        delivered = 0
        logger.info("dispatcher_started", update_interval_ms=self.update_interval_ms)

        while self._running and (max_ticks is None or ticks < max_ticks):
            frame = self.tick()
            ticks += 1
            if frame is not None:
                on_frame(frame)
                delivered += 1
            if self._running and (max_ticks is None or ticks < max_ticks):
                sleep(self.update_interval_ms / 1000.0)

        self._running = False
        logger.info("dispatcher_stopped", ticks=ticks, frames=delivered)
        return delivered

    def stop(self) -> None:
        """Stop the run loop after the current tick."""
        self._running = False
