"""Playback state machine for previewing one animation.

The engine never schedules itself. Whoever owns the clock calls
:meth:`PlaybackEngine.tick` with the milliseconds elapsed since its previous
call, and stops calling when playback is paused.

Example:
    engine = PlaybackEngine()
    engine.select(animation)
    engine.play()

    # In the timer callback:
    engine.tick(16.0)
    frame = engine.resolve_frame(frames)
    if frame:
        display(frame)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from . import MIN_DURATION_MS, Animation, AnimationFrame, Frame, LoopStrategy
from .frame_resolver import find_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackState:
    """Position within the selected animation.

    ``elapsed_us`` is the time accumulated since the last committed step, in
    whole microseconds so that many small ticks add up exactly.
    ``direction`` only changes under ping-pong playback.
    """

    step_index: int = 0
    direction: int = 1
    elapsed_us: int = 0
    playing: bool = False

    @property
    def elapsed(self) -> float:
        """Accumulated time in milliseconds."""
        return self.elapsed_us / 1000


def to_microseconds(ms: float) -> int:
    return round(ms * 1000)


def clamp_duration(duration: float) -> float:
    """Durations below the floor would stall the catch-up loop."""

    return duration if duration >= MIN_DURATION_MS else MIN_DURATION_MS


def next_step(step: int, direction: int, count: int, strategy: LoopStrategy) -> tuple[int, int, bool]:
    """Apply a single transition.

    Returns ``(step, direction, still_playing)``.
    """

    last = count - 1
    if strategy is LoopStrategy.PING_PONG:
        step += direction
        if step > last:
            return max(count - 2, 0), -1, True
        if step < 0:
            return min(1, last), 1, True
        return step, direction, True
    if strategy is LoopStrategy.LOOP:
        return (step + 1) % count, direction, True
    if step < last:
        return step + 1, direction, True
    if strategy is LoopStrategy.FREEZE:
        return last, direction, True
    # End: hold the last frame and stop
    return last, direction, False


class PlaybackEngine:
    """Advance the current step of the selected animation over time."""

    def __init__(self, animation: Optional[Animation] = None) -> None:
        self._animation: Optional[Animation] = None
        self._state = PlaybackState()
        self._on_state_change: list[Callable[[bool], None]] = []
        if animation is not None:
            self.select(animation)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def animation(self) -> Optional[Animation]:
        return self._animation

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_step(self) -> int:
        return self._state.step_index

    @property
    def direction(self) -> int:
        return self._state.direction

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    @property
    def is_playable(self) -> bool:
        """Whether an animation with at least one frame is selected."""
        return self._animation is not None and self._animation.is_playable

    @property
    def current_animation_frame(self) -> Optional[AnimationFrame]:
        if not self.is_playable:
            return None
        return self._animation.frames[self._state.step_index]

    @property
    def current_frame_index(self) -> Optional[int]:
        step = self.current_animation_frame
        return step.frame_index if step else None

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, animation: Optional[Animation]) -> None:
        """Switch to another animation (or the same one) and rewind."""

        self._animation = animation
        self._rewind()

    def sync(self, animation: Optional[Animation]) -> None:
        """Pick up edits to the selected animation.

        Duration or strategy edits keep the current position; a change in the
        number of frames rewinds.
        """

        previous = self._animation
        self._animation = animation
        if previous is None or animation is None or len(previous.frames) != len(animation.frames):
            self._rewind()

    # -------------------------------------------------------------------------
    # Playback control
    # -------------------------------------------------------------------------

    def play(self) -> None:
        if not self.is_playable:
            logger.debug("Nothing to play")
            return
        self._set_playing(True)

    def pause(self) -> None:
        self._set_playing(False)

    def toggle(self) -> None:
        if self._state.playing:
            self.pause()
        else:
            self.play()

    def restart(self) -> None:
        """Rewind to the first step and stop."""

        self._state = replace(PlaybackState(), playing=self._state.playing)
        self._set_playing(False)

    def add_state_listener(self, callback: Callable[[bool], None]) -> None:
        """Register a callback invoked with the new playing flag when it flips."""

        self._on_state_change.append(callback)

    def tick(self, delta_ms: float) -> tuple[int, ...]:
        """Consume elapsed time and return the steps committed, in order.

        Several steps may be committed by one tick; none are skipped.
        """

        if not self._state.playing or not self.is_playable:
            return ()
        if delta_ms < 0:
            logger.debug("Ignoring negative tick %s", delta_ms)
            delta_ms = 0.0

        frames = self._animation.frames
        strategy = self._animation.loop_strategy
        count = len(frames)
        step = self._state.step_index
        direction = self._state.direction
        elapsed = self._state.elapsed_us + to_microseconds(delta_ms)
        playing = True
        visited: list[int] = []

        while True:
            duration = to_microseconds(clamp_duration(frames[step].duration))
            if elapsed < duration:
                break
            elapsed -= duration
            new_step, new_direction, playing = next_step(step, direction, count, strategy)
            if not playing:
                elapsed = 0
                break
            if new_step == step and (new_direction == direction or count == 1):
                # fixed point: Freeze on its last frame or any single-frame animation
                repeats = elapsed // duration
                elapsed -= repeats * duration
                visited.extend([step] * (repeats + 1))
                break
            visited.append(new_step)
            step, direction = new_step, new_direction

        self._state = PlaybackState(step_index=step, direction=direction, elapsed_us=elapsed, playing=True)
        if not playing:
            logger.debug("%s reached its end", self._animation.name)
            self._set_playing(False)
        return tuple(visited)

    def resolve_frame(self, frames: Sequence[Frame]) -> Optional[Frame]:
        """Frame for the current step, or None when the reference dangles."""

        frame_index = self.current_frame_index
        if frame_index is None:
            return None
        frame = find_frame(frames, frame_index)
        if frame is None:
            logger.debug("Frame %s not found; skipping step %s", frame_index, self._state.step_index)
        return frame

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _rewind(self) -> None:
        playing = self._state.playing and self.is_playable
        self._state = PlaybackState(playing=self._state.playing)
        self._set_playing(playing)

    def _set_playing(self, playing: bool) -> None:
        if self._state.playing == playing:
            return
        self._state = replace(self._state, playing=playing)
        for callback in self._on_state_change:
            callback(playing)
