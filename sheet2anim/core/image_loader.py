"""Image loading and dimension discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from . import ImageDimensions
from .errors import InvalidImageError
from ..utils import validators

logger = logging.getLogger(__name__)


def load_dimensions(image_path: Path) -> ImageDimensions:
    """Return the pixel size of the sprite image without decoding its pixels."""

    validated_path = validators.validate_image_path(image_path)
    try:
        with Image.open(validated_path) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImageError(validated_path, reason=f"Could not read image: {exc}") from exc

    logger.info("Loaded %s -> %sx%s", validated_path, width, height)
    return ImageDimensions(width=width, height=height)


def load_image(image_path: Path) -> Image.Image:
    """Load the sprite image as RGBA for previews."""

    validated_path = validators.validate_image_path(image_path)
    try:
        with Image.open(validated_path) as image:
            return image.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImageError(validated_path, reason=f"Could not read image: {exc}") from exc


def dimensions_of(image: Image.Image | None) -> ImageDimensions | None:
    if image is None:
        return None
    return ImageDimensions(width=image.width, height=image.height)
