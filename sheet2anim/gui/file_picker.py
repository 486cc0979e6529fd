"""Native file picker helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QWidget

from ..utils.validators import ALLOWED_IMAGE_EXTENSIONS


def open_image_file_dialog(parent: QWidget) -> Optional[Path]:
    """Open a native file dialog and return the selected sprite sheet path."""

    patterns = " ".join(f"*{ext}" for ext in sorted(ALLOWED_IMAGE_EXTENSIONS))
    dialog = QFileDialog(parent, caption="Select Sprite Sheet")
    dialog.setFileMode(QFileDialog.ExistingFile)
    dialog.setNameFilters([
        f"Image Files ({patterns})",
        "All Files (*.*)",
    ])
    if dialog.exec():
        selected = dialog.selectedFiles()
        if selected:
            return Path(selected[0])
    return None


def open_config_file_dialog(parent: QWidget) -> Optional[Path]:
    filename, _ = QFileDialog.getOpenFileName(
        parent, "Import Animation Config", "", "TypeScript (*.ts);;All Files (*.*)"
    )
    return Path(filename) if filename else None


def save_config_file_dialog(parent: QWidget, suggested: Path) -> Optional[Path]:
    """Ask where to save the generated config."""

    filename, _ = QFileDialog.getSaveFileName(
        parent, "Save Animation Config", str(suggested), "TypeScript (*.ts);;All Files (*.*)"
    )
    return Path(filename) if filename else None
