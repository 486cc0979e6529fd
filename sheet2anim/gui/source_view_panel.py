"""Editor for irregular source view rectangles."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..core import GridConfig, SourceView
from ..core import source_views
from ..core.errors import ValidationError
from ..utils import validators

logger = logging.getLogger(__name__)

MAX_PIXELS = 16384


class SourceViewPanel(QWidget):
    """Lists source views and edits the selected one."""

    views_changed = Signal(object)  # tuple[SourceView, ...]
    selection_changed = Signal(object)  # int | None
    rejected = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.views: tuple[SourceView, ...] = ()
        self._grid = GridConfig()
        self.view_list = QListWidget(self)
        self.add_button = QPushButton("Add view", self)
        self.remove_button = QPushButton("Remove view", self)
        self.empty_label = QLabel("No source views defined.", self)
        self.fields = {}
        for name in ("x", "y", "width", "height"):
            box = QSpinBox(self)
            box.setRange(-MAX_PIXELS, MAX_PIXELS)
            self.fields[name] = box

        self._build_layout()
        self.add_button.clicked.connect(self._on_add)
        self.remove_button.clicked.connect(self._on_remove)
        self.view_list.currentRowChanged.connect(self._on_row_changed)
        for name, box in self.fields.items():
            box.valueChanged.connect(lambda value, field=name: self._on_field_changed(field, value))
        self._sync_fields()

    def _build_layout(self) -> None:
        layout = QVBoxLayout(self)
        buttons = QHBoxLayout()
        buttons.addWidget(self.add_button)
        buttons.addWidget(self.remove_button)
        layout.addLayout(buttons)
        layout.addWidget(self.view_list, 1)
        layout.addWidget(self.empty_label)
        form_layout = QFormLayout()
        for name, box in self.fields.items():
            form_layout.addRow(name.capitalize(), box)
        layout.addLayout(form_layout)

    @property
    def selected(self) -> Optional[int]:
        row = self.view_list.currentRow()
        return row if 0 <= row < len(self.views) else None

    def set_grid(self, grid: GridConfig) -> None:
        """New views take the grid's sprite size."""

        self._grid = grid

    def set_views(self, views: tuple[SourceView, ...], selected: Optional[int] = None) -> None:
        self.views = tuple(views)
        self.view_list.blockSignals(True)
        self.view_list.clear()
        for idx, view in enumerate(self.views):
            self.view_list.addItem(f"INDEX {idx}: {view.x},{view.y} {view.width}x{view.height}")
        if selected is not None and 0 <= selected < len(self.views):
            self.view_list.setCurrentRow(selected)
        self.view_list.blockSignals(False)
        self.empty_label.setVisible(not self.views)
        self._sync_fields()

    @Slot()
    def _on_add(self) -> None:
        views, index = source_views.add_source_view(self.views, self._grid)
        try:
            validators.validate_source_view(views[index])
        except ValidationError as exc:
            self.rejected.emit(str(exc))
            return
        self.set_views(views, index)
        self.views_changed.emit(self.views)
        self.selection_changed.emit(index)

    @Slot()
    def _on_remove(self) -> None:
        index = self.selected
        if index is None:
            return
        self.set_views(source_views.remove_source_view(self.views, index))
        self.views_changed.emit(self.views)
        self.selection_changed.emit(None)

    @Slot(int)
    def _on_row_changed(self, row: int) -> None:
        self._sync_fields()
        self.selection_changed.emit(self.selected)

    def _on_field_changed(self, field: str, value: int) -> None:
        index = self.selected
        if index is None or getattr(self.views[index], field) == value:
            return
        self.set_views(source_views.update_source_view(self.views, index, **{field: value}), index)
        self.views_changed.emit(self.views)

    def _sync_fields(self) -> None:
        index = self.selected
        for name, box in self.fields.items():
            box.blockSignals(True)
            box.setEnabled(index is not None)
            box.setValue(getattr(self.views[index], name) if index is not None else 0)
            box.blockSignals(False)
        self.remove_button.setEnabled(index is not None)
