"""Edits to the source view list. Every edit returns a new tuple."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from . import GridConfig, SourceView

logger = logging.getLogger(__name__)


def add_source_view(views: Sequence[SourceView], grid: GridConfig) -> tuple[tuple[SourceView, ...], int]:
    """Append a view at the origin sized like one grid sprite.

    Returns the new list and the index of the added view.
    """

    view = SourceView(x=0, y=0, width=grid.sprite_width, height=grid.sprite_height)
    updated = (*views, view)
    return updated, len(updated) - 1


def update_source_view(views: Sequence[SourceView], index: int, **changes: int) -> tuple[SourceView, ...]:
    """Replace selected fields of one view."""

    if not 0 <= index < len(views):
        raise IndexError(f"No source view at position {index}")
    updated = list(views)
    updated[index] = replace(updated[index], **changes)
    return tuple(updated)


def remove_source_view(views: Sequence[SourceView], index: int) -> tuple[SourceView, ...]:
    """Drop a view.

    Animation frames that referenced later views keep their old indices and
    now point one position further along (or nowhere).
    """

    if not 0 <= index < len(views):
        raise IndexError(f"No source view at position {index}")
    logger.debug("Removing source view %s of %s", index, len(views))
    return tuple(view for idx, view in enumerate(views) if idx != index)
