"""Drive a playback engine with synthetic clock ticks."""

from __future__ import annotations

import logging

import numpy as np

from .playback import PlaybackEngine

logger = logging.getLogger(__name__)
MAX_PREVIEW_MS = 10 * 60 * 1000


def compute_tick_times(total_ms: float, tick_ms: float) -> list[float]:
    """Timestamps of each tick, ending exactly at ``total_ms``."""

    if tick_ms <= 0:
        raise ValueError("Tick interval must be greater than zero")
    total = min(max(0.0, float(total_ms)), MAX_PREVIEW_MS)
    if total == 0:
        return []
    times = np.arange(tick_ms, total, tick_ms, dtype=float).tolist()
    times.append(total)
    return times


def simulate(engine: PlaybackEngine, total_ms: float, tick_ms: float = 16.0) -> list[int]:
    """Play for ``total_ms`` and return every step shown, starting with the current one."""

    if not engine.is_playable:
        return []
    engine.play()
    sequence = [engine.current_step]
    times = compute_tick_times(total_ms, tick_ms)
    deltas = np.diff(np.asarray([0.0, *times]))
    for delta in deltas:
        if not engine.is_playing:
            break
        sequence.extend(engine.tick(float(delta)))
    logger.debug("Simulated %s ticks, %s steps", len(times), len(sequence))
    return sequence
