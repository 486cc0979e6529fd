"""In-memory collection of animations and the current selection."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from . import DEFAULT_DURATION_MS, Animation, AnimationFrame, LoopStrategy

logger = logging.getLogger(__name__)


def renumber_selection(selected: Optional[int], removed: int) -> Optional[int]:
    """Adjust a selected position after the animation at ``removed`` is deleted."""

    if selected is None or selected == removed:
        return None
    if selected > removed:
        return selected - 1
    return selected


class AnimationModel:
    """Ordered animations with whole-record replacement on every edit.

    ``animations`` is always a fresh tuple after a mutation, so a caller
    holding the previous value never observes a partial edit.
    """

    def __init__(self, default_duration: int = DEFAULT_DURATION_MS) -> None:
        self.default_duration = default_duration
        self.animations: tuple[Animation, ...] = ()
        self.selected: Optional[int] = None

    def __len__(self) -> int:
        return len(self.animations)

    def get(self, index: int) -> Animation:
        return self.animations[self._check(index)]

    @property
    def selected_animation(self) -> Optional[Animation]:
        if self.selected is None:
            return None
        return self.animations[self.selected]

    def select(self, index: Optional[int]) -> None:
        self.selected = None if index is None else self._check(index)

    def create(self) -> int:
        """Add an empty looping animation and select it."""

        animation = Animation(name=f"Animation{len(self.animations) + 1}")
        self.animations = (*self.animations, animation)
        self.selected = len(self.animations) - 1
        logger.debug("Created %s", animation.name)
        return self.selected

    def rename(self, index: int, name: str) -> None:
        self._update(index, name=name)

    def delete(self, index: int) -> None:
        self._check(index)
        self.animations = tuple(anim for idx, anim in enumerate(self.animations) if idx != index)
        self.selected = renumber_selection(self.selected, index)

    def append_frame(self, index: int, frame_index: int, duration: Optional[int] = None) -> None:
        """Reference a frame by index; its existence is checked at playback time."""

        anim = self.get(index)
        step = AnimationFrame(frame_index=frame_index, duration=self.default_duration if duration is None else duration)
        self._update(index, frames=(*anim.frames, step))

    def remove_frame(self, index: int, position: int) -> None:
        anim = self.get(index)
        if not 0 <= position < len(anim.frames):
            raise IndexError(f"{anim.name} has no frame at position {position}")
        self._update(index, frames=tuple(f for idx, f in enumerate(anim.frames) if idx != position))

    def update_duration(self, index: int, position: int, duration: int) -> None:
        anim = self.get(index)
        if not 0 <= position < len(anim.frames):
            raise IndexError(f"{anim.name} has no frame at position {position}")
        frames = list(anim.frames)
        frames[position] = replace(frames[position], duration=duration)
        self._update(index, frames=tuple(frames))

    def set_loop_strategy(self, index: int, strategy: LoopStrategy) -> None:
        self._update(index, loop_strategy=LoopStrategy(strategy))

    def _update(self, index: int, **changes) -> None:
        self._check(index)
        updated = list(self.animations)
        updated[index] = replace(updated[index], **changes)
        self.animations = tuple(updated)

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self.animations):
            raise IndexError(f"No animation at position {index}")
        return index
