"""Qt timer that feeds elapsed time into a PlaybackEngine."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Signal, Slot

from ..core.playback import PlaybackEngine

logger = logging.getLogger(__name__)


class PlaybackTicker(QObject):
    """Runs only while the engine is playing.

    Stopping the timer drops any pending tick, so nothing stale fires after
    the selection changes.
    """

    ticked = Signal(object)  # tuple of committed steps
    playing_changed = Signal(bool)

    def __init__(self, engine: PlaybackEngine, interval_ms: int = 16, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.engine = engine
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._clock = QElapsedTimer()
        engine.add_state_listener(self._on_state_change)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self.engine.is_playing or self._timer.isActive():
            return
        self._clock.start()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._clock.invalidate()

    @Slot()
    def _on_timeout(self) -> None:
        delta = self._clock.restart()
        visited = self.engine.tick(float(delta))
        if visited:
            self.ticked.emit(visited)

    def _on_state_change(self, playing: bool) -> None:
        if playing:
            self.start()
        else:
            self.stop()
        logger.debug("Playback %s", "started" if playing else "stopped")
        self.playing_changed.emit(playing)
