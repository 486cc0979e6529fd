"""Generate Excalibur TypeScript from the current project state."""

from __future__ import annotations

from typing import Sequence

from . import Animation, GridConfig, ParseMode, ProjectState, SourceView
from .frame_resolver import resolve_frames

IMPORT_LINE = "import { ImageSource, SpriteSheet, Animation, AnimationStrategy } from 'excalibur';"


def _grid_lines(grid: GridConfig) -> list[str]:
    lines = [
        "const spriteSheet = SpriteSheet.fromImageSource({",
        "  image: imageSource,",
        "  grid: {",
        f"    rows: {int(grid.rows)},",
        f"    columns: {int(grid.columns)},",
        f"    spriteWidth: {int(grid.sprite_width)},",
        f"    spriteHeight: {int(grid.sprite_height)}",
    ]
    if grid.has_spacing:
        offset, margin = grid.origin_offset, grid.margin
        lines += [
            "  },",
            "  spacing: {",
            f"    originOffset: {{ x: {int(offset.x)}, y: {int(offset.y)} }},",
            f"    margin: {{ x: {int(margin.x)}, y: {int(margin.y)} }}",
            "  }",
        ]
    else:
        lines.append("  }")
    lines.append("});")
    return lines


def _source_view_lines(views: Sequence[SourceView]) -> list[str]:
    lines = [
        "const spriteSheet = SpriteSheet.fromImageSourceWithSourceViews({",
        "  image: imageSource,",
        "  sourceViews: [",
    ]
    for idx, view in enumerate(views):
        sep = "," if idx < len(views) - 1 else ""
        lines.append(
            f"    {{ x: {int(view.x)}, y: {int(view.y)}, width: {int(view.width)}, height: {int(view.height)} }}{sep}"
        )
    lines += ["  ]", "});"]
    return lines


def _animation_lines(group_name: str, animations: Sequence[Animation]) -> list[str]:
    lines = [f"export const {group_name} = {{"]
    for idx, anim in enumerate(animations):
        lines.append(f"  {anim.name}: new Animation({{")
        lines.append("    frames: [")
        for pos, step in enumerate(anim.frames):
            sep = "," if pos < len(anim.frames) - 1 else ""
            lines.append(
                f"      {{ graphic: spriteSheet.sprites[{int(step.frame_index)}], duration: {int(step.duration)} }}{sep}"
            )
        lines.append("    ],")
        lines.append(f"    strategy: AnimationStrategy.{anim.loop_strategy.value}")
        lines.append("  })," if idx < len(animations) - 1 else "  })")
    lines.append("};")
    return lines


def generate_config(state: ProjectState) -> str:
    """Render the whole project; empty when no frames have been resolved.

    Identical state always yields identical text.
    """

    frames = resolve_frames(state.parse_mode, state.grid, state.source_views, state.image_size)
    if not frames:
        return ""

    lines = [
        IMPORT_LINE,
        "",
        f"const imageSource = new ImageSource('{state.image_path}');",
        "await imageSource.load();",
        "",
    ]
    if state.parse_mode is ParseMode.GRID:
        lines += _grid_lines(state.grid)
    else:
        lines += _source_view_lines(state.source_views)
    lines.append("")
    lines += _animation_lines(state.group_name, state.animations)
    return "\n".join(lines) + "\n"
