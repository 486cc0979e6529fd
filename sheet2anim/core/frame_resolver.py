"""Turn a grid description or a list of source views into frames."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from . import Frame, GridConfig, ImageDimensions, ParseMode, SourceView

logger = logging.getLogger(__name__)


def resolve_grid_frames(grid: GridConfig) -> tuple[Frame, ...]:
    """Tile the image row by row.

    Frames past the image edge are kept; the display shows them out of bounds.
    """

    if not grid.is_valid:
        logger.debug("Ignoring invalid grid %s", grid)
        return ()

    step_x = grid.sprite_width + grid.margin.x
    step_y = grid.sprite_height + grid.margin.y
    frames = []
    for row in range(grid.rows):
        for col in range(grid.columns):
            frames.append(
                Frame(
                    index=row * grid.columns + col,
                    x=grid.origin_offset.x + col * step_x,
                    y=grid.origin_offset.y + row * step_y,
                    width=grid.sprite_width,
                    height=grid.sprite_height,
                )
            )
    return tuple(frames)


def resolve_source_view_frames(views: Iterable[SourceView]) -> tuple[Frame, ...]:
    """One frame per source view, indexed by list position."""

    return tuple(
        Frame(index=idx, x=view.x, y=view.y, width=view.width, height=view.height)
        for idx, view in enumerate(views)
    )


def resolve_frames(
    mode: Optional[ParseMode],
    grid: GridConfig,
    views: Sequence[SourceView],
    dimensions: Optional[ImageDimensions],
) -> tuple[Frame, ...]:
    """Resolve the full frame list for the active parse mode.

    Without an image or a parse mode there is nothing to resolve.
    """

    if dimensions is None or mode is None:
        return ()
    if mode is ParseMode.GRID:
        frames = resolve_grid_frames(grid)
    else:
        frames = resolve_source_view_frames(views)
    logger.debug("Resolved %s frames in %s mode", len(frames), mode.value)
    return frames


def find_frame(frames: Sequence[Frame], frame_index: int) -> Optional[Frame]:
    """Look up a frame by index value; misses return None."""

    if 0 <= frame_index < len(frames) and frames[frame_index].index == frame_index:
        return frames[frame_index]
    for frame in frames:
        if frame.index == frame_index:
            return frame
    return None


def frame_at_point(frames: Sequence[Frame], x: int, y: int) -> Optional[Frame]:
    """Return the first frame whose rectangle contains the point (edges inclusive)."""

    for frame in frames:
        if frame.contains(x, y):
            return frame
    return None
