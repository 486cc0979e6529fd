"""Core data model for sprite sheet frames and animations."""

__all__ = [
    "Point",
    "ImageDimensions",
    "GridConfig",
    "SourceView",
    "Frame",
    "AnimationFrame",
    "Animation",
    "LoopStrategy",
    "ParseMode",
    "ProjectState",
    "EditorSettings",
    "DEFAULT_DURATION_MS",
    "DEFAULT_GROUP_NAME",
    "DEFAULT_IMAGE_PATH",
    "MIN_DURATION_MS",
    "MIN_SOURCE_VIEW_SIZE",
]

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_DURATION_MS = 150
DEFAULT_GROUP_NAME = "PlayerAnimations"
DEFAULT_IMAGE_PATH = "path/to/spritesheet.png"
DEFAULT_PREVIEW_SCALE = 4
MIN_DURATION_MS = 1
MIN_SOURCE_VIEW_SIZE = 5


class LoopStrategy(str, Enum):
    """What playback does when it reaches the end of an animation."""

    FREEZE = "Freeze"
    END = "End"
    LOOP = "Loop"
    PING_PONG = "PingPong"


class ParseMode(str, Enum):
    """How frames are derived from the sprite image."""

    GRID = "grid"
    SOURCE_VIEW = "sourceview"


@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of the loaded sprite image."""

    width: int
    height: int


@dataclass(frozen=True)
class GridConfig:
    """Uniform tiling of an image into frames."""

    sprite_width: int = 32
    sprite_height: int = 32
    rows: int = 1
    columns: int = 1
    origin_offset: Point = field(default_factory=Point)
    margin: Point = field(default_factory=Point)

    @property
    def is_valid(self) -> bool:
        return self.rows > 0 and self.columns > 0 and self.sprite_width > 0 and self.sprite_height > 0

    @property
    def has_spacing(self) -> bool:
        return any((self.origin_offset.x, self.origin_offset.y, self.margin.x, self.margin.y))


@dataclass(frozen=True)
class SourceView:
    """An author-drawn rectangle used for irregular frame layouts."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_usable(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class Frame:
    """A resolved region of the sprite image."""

    index: int
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass(frozen=True)
class AnimationFrame:
    """One step of an animation.

    ``frame_index`` is a plain key into the current frame list, not a reference
    to a ``Frame``. It may point at a frame that no longer exists.
    """

    frame_index: int
    duration: int = DEFAULT_DURATION_MS


@dataclass(frozen=True)
class Animation:
    """A named, ordered sequence of frame references."""

    name: str
    frames: tuple[AnimationFrame, ...] = ()
    loop_strategy: LoopStrategy = LoopStrategy.LOOP

    @property
    def is_playable(self) -> bool:
        return len(self.frames) > 0


@dataclass(frozen=True)
class ProjectState:
    """Snapshot of everything needed to emit a configuration."""

    image_path: str = DEFAULT_IMAGE_PATH
    image_size: Optional[ImageDimensions] = None
    parse_mode: Optional[ParseMode] = None
    grid: GridConfig = field(default_factory=GridConfig)
    source_views: tuple[SourceView, ...] = ()
    animations: tuple[Animation, ...] = ()
    group_name: str = DEFAULT_GROUP_NAME


@dataclass
class EditorSettings:
    """User-configurable defaults for the editor and CLI."""

    default_duration: int = DEFAULT_DURATION_MS
    group_name: str = DEFAULT_GROUP_NAME
    image_path: str = DEFAULT_IMAGE_PATH
    preview_scale: int = DEFAULT_PREVIEW_SCALE
