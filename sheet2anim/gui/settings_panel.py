"""Grid settings panel."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QSize, Signal
from PySide6.QtWidgets import QFormLayout, QHBoxLayout, QSpinBox, QVBoxLayout, QWidget

from ..core import GridConfig, Point

logger = logging.getLogger(__name__)

MAX_PIXELS = 16384
MAX_CELLS = 1024


def _spin(parent: QWidget, low: int, high: int, value: int) -> QSpinBox:
    box = QSpinBox(parent)
    box.setRange(low, high)
    box.setValue(value)
    return box


class GridSettingsPanel(QWidget):
    """Collects grid tiling parameters from the user.

    Zero sizes are allowed while typing; they simply resolve to no frames.
    """

    changed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        defaults = GridConfig()
        self.sprite_width = _spin(self, 0, MAX_PIXELS, defaults.sprite_width)
        self.sprite_height = _spin(self, 0, MAX_PIXELS, defaults.sprite_height)
        self.rows = _spin(self, 0, MAX_CELLS, defaults.rows)
        self.columns = _spin(self, 0, MAX_CELLS, defaults.columns)
        self.offset_x = _spin(self, -MAX_PIXELS, MAX_PIXELS, 0)
        self.offset_y = _spin(self, -MAX_PIXELS, MAX_PIXELS, 0)
        self.margin_x = _spin(self, -MAX_PIXELS, MAX_PIXELS, 0)
        self.margin_y = _spin(self, -MAX_PIXELS, MAX_PIXELS, 0)

        self._build_layout()
        for box in (
            self.sprite_width,
            self.sprite_height,
            self.rows,
            self.columns,
            self.offset_x,
            self.offset_y,
            self.margin_x,
            self.margin_y,
        ):
            box.valueChanged.connect(self.changed.emit)

    def _build_layout(self) -> None:
        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.addRow("Sprite width", self.sprite_width)
        form_layout.addRow("Sprite height", self.sprite_height)
        form_layout.addRow("Rows", self.rows)
        form_layout.addRow("Columns", self.columns)

        offset_row = QHBoxLayout()
        offset_row.addWidget(self.offset_x)
        offset_row.addWidget(self.offset_y)
        form_layout.addRow("Origin offset (x, y)", offset_row)

        margin_row = QHBoxLayout()
        margin_row.addWidget(self.margin_x)
        margin_row.addWidget(self.margin_y)
        form_layout.addRow("Margin (x, y)", margin_row)

        layout.addLayout(form_layout)
        layout.addStretch(1)

    def gather_grid(self) -> GridConfig:
        """Build a GridConfig from the current field values."""

        grid = GridConfig(
            sprite_width=self.sprite_width.value(),
            sprite_height=self.sprite_height.value(),
            rows=self.rows.value(),
            columns=self.columns.value(),
            origin_offset=Point(self.offset_x.value(), self.offset_y.value()),
            margin=Point(self.margin_x.value(), self.margin_y.value()),
        )
        logger.debug("Collected grid: %s", grid)
        return grid

    def sizeHint(self) -> QSize:  # pragma: no cover - Qt paints this
        return QSize(280, 260)
