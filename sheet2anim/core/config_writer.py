"""Config file writing logic."""

from __future__ import annotations

import logging
from pathlib import Path

from . import ProjectState
from .config_emitter import generate_config
from ..utils import file_tools

logger = logging.getLogger(__name__)


def write_config(state: ProjectState, output_path: Path) -> Path:
    """Write the generated TypeScript for ``state`` to ``output_path``.

    Raises ValueError when there is nothing to write yet.
    """

    code = generate_config(state)
    if not code:
        raise ValueError("No frames resolved; load an image and pick a parse mode first.")

    file_tools.ensure_directory(output_path.parent)
    output_path.write_text(code, encoding="utf-8")
    logger.info("Wrote animation config to %s", output_path)
    return output_path
