"""Filesystem helpers."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = ".ts"


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def format_output_filename(group_name: str) -> str:
    """Config files are named after the exported group."""

    return f"{group_name}{CONFIG_SUFFIX}"


def default_output_path(image_path: Path, group_name: str) -> Path:
    """Return a default config path next to the sprite image."""

    return image_path.parent / format_output_filename(group_name)
