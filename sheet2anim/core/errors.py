"""Exceptions raised at the edges of the animation builder.

The core itself degrades to empty results; these come from reading files and
checking user input. All derive from ValueError so pydantic validators can
raise them directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class InvalidImageError(ValueError):
    """The sprite sheet path cannot be used as an image source."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot use {path} as a sprite sheet{detail}")


class ValidationError(ValueError):
    """Raised when editor or command-line input is rejected."""


class ConfigParseError(ValueError):
    """Configuration text could not be read back.

    ``line`` is the 1-based line that triggered the error, when one did.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
