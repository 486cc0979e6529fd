"""Editor defaults, overridable through the environment."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from . import EditorSettings
from ..utils import validators

logger = logging.getLogger(__name__)

ENV_PREFIX = "S2A_"


def load_editor_settings(environ: Optional[Mapping[str, str]] = None) -> EditorSettings:
    """Build settings from S2A_* variables, falling back to the built-in defaults."""

    env = os.environ if environ is None else environ
    settings = EditorSettings()

    duration = validators.parse_optional_int(env.get(f"{ENV_PREFIX}DEFAULT_DURATION_MS"), "S2A_DEFAULT_DURATION_MS")
    if duration is not None:
        settings.default_duration = duration
    scale = validators.parse_optional_int(env.get(f"{ENV_PREFIX}PREVIEW_SCALE"), "S2A_PREVIEW_SCALE")
    if scale is not None:
        settings.preview_scale = scale
    group = env.get(f"{ENV_PREFIX}GROUP_NAME", "").strip()
    if group:
        settings.group_name = group
    image_path = env.get(f"{ENV_PREFIX}IMAGE_PATH", "").strip()
    if image_path:
        settings.image_path = image_path

    logger.debug("Editor settings: %s", settings)
    return settings
