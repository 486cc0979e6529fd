"""Preview rendering of frames using Pillow."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from PIL import Image, ImageDraw

from . import DEFAULT_PREVIEW_SCALE, Frame, SourceView
from .playback import PlaybackEngine

logger = logging.getLogger(__name__)

OVERLAY_OUTLINE = (0, 255, 0, 255)
OVERLAY_FILL = (0, 255, 0, 51)
HIGHLIGHT_OUTLINE = (255, 0, 255, 255)


def crop_frame(image: Image.Image, frame: Frame, scale: int = DEFAULT_PREVIEW_SCALE) -> Image.Image:
    """Cut one frame out of the sheet and enlarge it without smoothing.

    Areas outside the image come out transparent.
    """

    region = image.convert("RGBA").crop((frame.x, frame.y, frame.x + frame.width, frame.y + frame.height))
    scale = max(1, scale)
    if scale == 1:
        return region
    return region.resize((frame.width * scale, frame.height * scale), Image.Resampling.NEAREST)


def render_current_frame(
    image: Image.Image,
    frames: Sequence[Frame],
    engine: PlaybackEngine,
    scale: int = DEFAULT_PREVIEW_SCALE,
) -> Optional[Image.Image]:
    """Render the engine's current step, or None when there is nothing to show."""

    frame = engine.resolve_frame(frames)
    if frame is None or frame.width <= 0 or frame.height <= 0:
        return None
    return crop_frame(image, frame, scale)


def render_overlay(
    image: Image.Image,
    frames: Sequence[Frame],
    highlight: Optional[SourceView] = None,
) -> Image.Image:
    """Draw frame rectangles and their indices over a copy of the sheet."""

    base = image.convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for frame in frames:
        if frame.width <= 0 or frame.height <= 0:
            continue
        box = (frame.x, frame.y, frame.x + frame.width - 1, frame.y + frame.height - 1)
        draw.rectangle(box, fill=OVERLAY_FILL, outline=OVERLAY_OUTLINE, width=2)
        draw.text((frame.x + 4, frame.y + 2), str(frame.index), fill=OVERLAY_OUTLINE)
    if highlight is not None and highlight.is_usable:
        box = (highlight.x, highlight.y, highlight.x + highlight.width - 1, highlight.y + highlight.height - 1)
        draw.rectangle(box, outline=HIGHLIGHT_OUTLINE, width=3)
    return Image.alpha_composite(base, layer)
