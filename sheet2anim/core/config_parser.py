"""Regex-based reader for generated Excalibur configuration.

Recovers the sprite sheet geometry and animation definitions so that an
emitted file can be checked against, or loaded back into, the editor.
Lines that match no known pattern are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from . import (
    DEFAULT_GROUP_NAME,
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
from .errors import ConfigParseError


@dataclass
class ParsedConfig:
    image_path: str = ""
    parse_mode: Optional[ParseMode] = None
    grid: Optional[GridConfig] = None
    source_views: tuple[SourceView, ...] = ()
    group_name: str = DEFAULT_GROUP_NAME
    animations: tuple[Animation, ...] = field(default_factory=tuple)

    def to_state(self, image_size: ImageDimensions) -> ProjectState:
        return ProjectState(
            image_path=self.image_path,
            image_size=image_size,
            parse_mode=self.parse_mode,
            grid=self.grid or GridConfig(),
            source_views=self.source_views,
            animations=self.animations,
            group_name=self.group_name,
        )


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_INT = r"(-?\d+)"
_RE_IMAGE = re.compile(r"new\s+ImageSource\s*\(\s*'([^']*)'\s*\)")
_RE_GRID_SHEET = re.compile(r"SpriteSheet\.fromImageSource\s*\(")
_RE_VIEW_SHEET = re.compile(r"SpriteSheet\.fromImageSourceWithSourceViews\s*\(")
_RE_GRID_FIELD = re.compile(r"\b(rows|columns|spriteWidth|spriteHeight)\s*:\s*" + _INT)
_RE_SPACING = re.compile(r"\b(originOffset|margin)\s*:\s*\{\s*x\s*:\s*" + _INT + r"\s*,\s*y\s*:\s*" + _INT + r"\s*\}")
_RE_VIEW = re.compile(
    r"\{\s*x\s*:\s*" + _INT + r"\s*,\s*y\s*:\s*" + _INT
    + r"\s*,\s*width\s*:\s*" + _INT + r"\s*,\s*height\s*:\s*" + _INT + r"\s*\}"
)
_RE_GROUP = re.compile(r"export\s+const\s+(.+?)\s*=\s*\{")
_RE_ANIMATION = re.compile(r"^(\S.*?)\s*:\s*new\s+Animation\s*\(\s*\{")
_RE_STEP = re.compile(r"spriteSheet\.sprites\[" + _INT + r"\]\s*,\s*duration\s*:\s*" + _INT)
_RE_STRATEGY = re.compile(r"strategy\s*:\s*AnimationStrategy\.(\w+)")

_GRID_KEYS = {
    "rows": "rows",
    "columns": "columns",
    "spriteWidth": "sprite_width",
    "spriteHeight": "sprite_height",
}


def parse_config(text: str) -> ParsedConfig:
    """Parse emitted configuration text.

    Raises ConfigParseError when no sprite sheet descriptor is present.
    """

    parsed = ParsedConfig()
    grid_fields: dict[str, object] = {}
    views: list[SourceView] = []
    animations: list[Animation] = []
    current: Optional[dict] = None

    def _flush() -> None:
        if current is not None:
            animations.append(
                Animation(
                    name=current["name"],
                    frames=tuple(current["frames"]),
                    loop_strategy=current["strategy"],
                )
            )

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("//"):
            continue

        m = _RE_IMAGE.search(stripped)
        if m:
            parsed.image_path = m.group(1)
            continue

        if _RE_VIEW_SHEET.search(stripped):
            parsed.parse_mode = ParseMode.SOURCE_VIEW
            continue
        if _RE_GRID_SHEET.search(stripped):
            parsed.parse_mode = ParseMode.GRID
            continue

        m = _RE_GROUP.search(stripped)
        if m:
            parsed.group_name = m.group(1)
            continue

        m = _RE_ANIMATION.search(stripped)
        if m:
            _flush()
            current = {"name": m.group(1), "frames": [], "strategy": LoopStrategy.LOOP}
            continue

        if current is not None:
            m = _RE_STEP.search(stripped)
            if m:
                current["frames"].append(AnimationFrame(frame_index=int(m.group(1)), duration=int(m.group(2))))
                continue
            m = _RE_STRATEGY.search(stripped)
            if m:
                try:
                    current["strategy"] = LoopStrategy(m.group(1))
                except ValueError as exc:
                    raise ConfigParseError(f"Unknown animation strategy: {m.group(1)}", line=lineno) from exc
                continue

        if parsed.parse_mode is ParseMode.GRID:
            m = _RE_SPACING.search(stripped)
            if m:
                key = "origin_offset" if m.group(1) == "originOffset" else "margin"
                grid_fields[key] = Point(int(m.group(2)), int(m.group(3)))
                continue
            m = _RE_GRID_FIELD.search(stripped)
            if m:
                grid_fields[_GRID_KEYS[m.group(1)]] = int(m.group(2))
                continue
        elif parsed.parse_mode is ParseMode.SOURCE_VIEW:
            m = _RE_VIEW.search(stripped)
            if m:
                views.append(SourceView(*(int(g) for g in m.groups())))
                continue

    _flush()

    if parsed.parse_mode is None:
        raise ConfigParseError("No sprite sheet definition found")
    if parsed.parse_mode is ParseMode.GRID:
        missing = [name for name in _GRID_KEYS.values() if name not in grid_fields]
        if missing:
            raise ConfigParseError(f"Grid definition is missing: {', '.join(missing)}")
        parsed.grid = GridConfig(**grid_fields)
    parsed.source_views = tuple(views)
    parsed.animations = tuple(animations)
    return parsed
