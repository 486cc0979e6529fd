"""Validation helpers for user inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..core import MIN_SOURCE_VIEW_SIZE, Animation, AnimationFrame, GridConfig, LoopStrategy, Point, SourceView
from ..core.errors import InvalidImageError, ValidationError


ALLOWED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"}

_STRATEGY_ALIASES = {strategy.value.lower(): strategy for strategy in LoopStrategy}
_STRATEGY_ALIASES["ping_pong"] = LoopStrategy.PING_PONG
_STRATEGY_ALIASES["ping-pong"] = LoopStrategy.PING_PONG


def validate_image_path(path: Path) -> Path:
    """Ensure the image path exists and appears to be a supported format."""

    if not path:
        raise InvalidImageError(Path("<unset>"), reason="No path provided")
    if not path.exists():
        raise InvalidImageError(path, reason="File not found")
    if path.suffix.lower() not in ALLOWED_IMAGE_EXTENSIONS:
        raise InvalidImageError(path, reason="Unsupported format")
    return path


def parse_int(value: str, field: str) -> int:
    """Parse any integer, negative values included."""

    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be an integer") from exc


def parse_optional_int(value: str | None, field: str) -> Optional[int]:
    """Parse a positive integer from a string value, if provided."""

    if value is None or value == "":
        return None
    parsed = parse_int(value, field)
    if parsed <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return parsed


def parse_point(value: str | None, field: str) -> Point:
    """Parse an 'x,y' pair. Blank means the origin."""

    if value is None or value.strip() == "":
        return Point()
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ValidationError(f"{field} must be X,Y")
    x, y = (parse_int(p, field) for p in parts)
    return Point(x, y)


def parse_loop_strategy(value: str | None) -> LoopStrategy:
    """Accept strategy names in any case; blank means Loop."""

    if value is None or value.strip() == "":
        return LoopStrategy.LOOP
    try:
        return _STRATEGY_ALIASES[value.strip().lower()]
    except KeyError:
        choices = ", ".join(s.value for s in LoopStrategy)
        raise ValidationError(f"Loop strategy must be one of {choices}") from None


def validate_grid(grid: GridConfig) -> None:
    """Ensure grid dimensions are positive."""

    if grid.rows <= 0 or grid.columns <= 0:
        raise ValidationError("Rows and columns must be greater than zero")
    if grid.sprite_width <= 0 or grid.sprite_height <= 0:
        raise ValidationError("Sprite width and height must be greater than zero")


def validate_source_view(view: SourceView) -> None:
    """Reject slivers too small to be a deliberate selection."""

    if view.width <= MIN_SOURCE_VIEW_SIZE or view.height <= MIN_SOURCE_VIEW_SIZE:
        raise ValidationError(
            f"Source views must be larger than {MIN_SOURCE_VIEW_SIZE}px in both directions "
            f"(got {view.width}x{view.height})"
        )


def validate_duration(duration: int, field: str = "Duration") -> None:
    if duration <= 0:
        raise ValidationError(f"{field} must be greater than zero")


def parse_animation_spec(spec: str, default_duration: int) -> Animation:
    """Parse 'Name[=Strategy]:frame[@ms],frame[@ms],...'.

    Example: 'Walk=PingPong:0@120,1,2@90'. The frame list may be empty.
    """

    head, sep, body = spec.partition(":")
    if not sep:
        raise ValidationError(f"Animation '{spec}' must look like Name[=Strategy]:0,1,2")
    name, _, strategy = head.partition("=")
    name = name.strip()
    if not name:
        raise ValidationError("Animation name must not be empty")

    frames = []
    for item in filter(None, (part.strip() for part in body.split(","))):
        index_text, at, duration_text = item.partition("@")
        frame_index = parse_int(index_text, f"{name} frame")
        duration = parse_int(duration_text, f"{name} duration") if at else default_duration
        validate_duration(duration, f"{name} duration")
        frames.append(AnimationFrame(frame_index=frame_index, duration=duration))

    return Animation(name=name, frames=tuple(frames), loop_strategy=parse_loop_strategy(strategy))
