from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def sheet_png(tmp_path) -> Path:
    """A 64x32 sheet: left half red, right half blue."""

    image = Image.new("RGBA", (64, 32), (255, 0, 0, 255))
    image.paste((0, 0, 255, 255), (32, 0, 64, 32))
    path = tmp_path / "hero.png"
    image.save(path)
    return path
