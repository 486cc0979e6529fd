"""Request models for project descriptions supplied to the CLI."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .core import (
    DEFAULT_DURATION_MS,
    DEFAULT_GROUP_NAME,
    MIN_SOURCE_VIEW_SIZE,
    Animation,
    AnimationFrame,
    GridConfig,
    ImageDimensions,
    LoopStrategy,
    ParseMode,
    Point,
    ProjectState,
    SourceView,
)
from .utils import validators

_MODE_ALIASES = {
    "grid": ParseMode.GRID,
    "sourceview": ParseMode.SOURCE_VIEW,
    "source_view": ParseMode.SOURCE_VIEW,
    "sourceviews": ParseMode.SOURCE_VIEW,
    "views": ParseMode.SOURCE_VIEW,
}


def _coerce_point(value):
    if value in (None, "", "null"):
        return (0, 0)
    if isinstance(value, str):
        point = validators.parse_point(value, "Point")
        return (point.x, point.y)
    if isinstance(value, dict):
        return (value.get("x", 0), value.get("y", 0))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return tuple(value)
    raise ValueError("Point must be X,Y")


class GridRequest(BaseModel):
    """Grid tiling parameters."""

    sprite_width: int = Field(32, ge=1)
    sprite_height: int = Field(32, ge=1)
    rows: int = Field(1, ge=1)
    columns: int = Field(1, ge=1)
    origin_offset: tuple[int, int] = (0, 0)
    margin: tuple[int, int] = (0, 0)

    @field_validator("origin_offset", "margin", mode="before")
    @classmethod
    def _parse_point(cls, value):
        return _coerce_point(value)

    def to_config(self) -> GridConfig:
        return GridConfig(
            sprite_width=self.sprite_width,
            sprite_height=self.sprite_height,
            rows=self.rows,
            columns=self.columns,
            origin_offset=Point(*self.origin_offset),
            margin=Point(*self.margin),
        )


class SourceViewRequest(BaseModel):
    """A hand-drawn rectangle."""

    x: int = 0
    y: int = 0
    width: int = Field(..., gt=MIN_SOURCE_VIEW_SIZE)
    height: int = Field(..., gt=MIN_SOURCE_VIEW_SIZE)

    def to_view(self) -> SourceView:
        return SourceView(x=self.x, y=self.y, width=self.width, height=self.height)


class AnimationFrameRequest(BaseModel):
    frame_index: int = Field(..., ge=0)
    duration: int = Field(DEFAULT_DURATION_MS, gt=0)


class AnimationRequest(BaseModel):
    """An animation; frames may be given as bare indices."""

    name: str = Field(..., min_length=1)
    frames: list[AnimationFrameRequest] = Field(default_factory=list)
    loop_strategy: LoopStrategy = LoopStrategy.LOOP

    @field_validator("loop_strategy", mode="before")
    @classmethod
    def _parse_strategy(cls, value):
        if isinstance(value, LoopStrategy):
            return value
        return validators.parse_loop_strategy(value)

    @field_validator("frames", mode="before")
    @classmethod
    def _expand_indices(cls, value):
        if not isinstance(value, list):
            return value
        return [{"frame_index": item} if isinstance(item, int) else item for item in value]

    def to_animation(self, default_duration: Optional[int] = None) -> Animation:
        steps = []
        for step in self.frames:
            duration = step.duration
            if default_duration is not None and "duration" not in step.model_fields_set:
                duration = default_duration
            steps.append(AnimationFrame(frame_index=step.frame_index, duration=duration))
        return Animation(name=self.name, frames=tuple(steps), loop_strategy=self.loop_strategy)


class ProjectRequest(BaseModel):
    """Everything needed to resolve frames and emit a config."""

    image_path: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    grid: Optional[GridRequest] = None
    source_views: list[SourceViewRequest] = Field(default_factory=list)
    animations: list[AnimationRequest] = Field(default_factory=list)
    group_name: str = Field(DEFAULT_GROUP_NAME, min_length=1)

    @field_validator("parse_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value):
        if value in (None, ""):
            return None
        if isinstance(value, ParseMode):
            return value
        try:
            return _MODE_ALIASES[str(value).strip().lower()]
        except KeyError:
            raise ValueError("Parse mode must be 'grid' or 'sourceview'") from None

    @model_validator(mode="after")
    def _infer_mode(self):
        if self.parse_mode is None:
            if self.grid is not None:
                self.parse_mode = ParseMode.GRID
            elif self.source_views:
                self.parse_mode = ParseMode.SOURCE_VIEW
        return self

    def to_state(
        self,
        image_size: Optional[ImageDimensions],
        image_path: str,
        default_duration: Optional[int] = None,
    ) -> ProjectState:
        return ProjectState(
            image_path=self.image_path or image_path,
            image_size=image_size,
            parse_mode=self.parse_mode,
            grid=self.grid.to_config() if self.grid else GridConfig(),
            source_views=tuple(view.to_view() for view in self.source_views),
            animations=tuple(anim.to_animation(default_duration) for anim in self.animations),
            group_name=self.group_name,
        )
