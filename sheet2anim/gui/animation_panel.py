"""Animation list and per-animation frame editor."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..core import LoopStrategy
from ..core.animation_model import AnimationModel

logger = logging.getLogger(__name__)

MAX_DURATION_MS = 60_000


class AnimationPanel(QWidget):
    """Edits an :class:`AnimationModel` in place.

    ``animations_changed`` fires after any edit to the collection;
    ``selection_changed`` fires with the newly selected position.
    """

    animations_changed = Signal()
    selection_changed = Signal(object)  # int | None

    def __init__(self, model: AnimationModel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.model = model

        self.animation_list = QListWidget(self)
        self.add_button = QPushButton("New animation", self)
        self.delete_button = QPushButton("Delete", self)
        self.name_edit = QLineEdit(self)
        self.strategy_combo = QComboBox(self)
        for strategy in LoopStrategy:
            self.strategy_combo.addItem(strategy.value, strategy.value)
        self.default_duration = QSpinBox(self)
        self.default_duration.setRange(1, MAX_DURATION_MS)
        self.default_duration.setSuffix(" ms")
        self.default_duration.setValue(model.default_duration)

        self.frame_list = QListWidget(self)
        self.frame_duration = QSpinBox(self)
        self.frame_duration.setRange(1, MAX_DURATION_MS)
        self.frame_duration.setSuffix(" ms")
        self.remove_frame_button = QPushButton("Remove frame", self)
        self.hint_label = QLabel("Click a frame on the sheet to append it.", self)

        self._build_layout()
        self.add_button.clicked.connect(self._on_add)
        self.delete_button.clicked.connect(self._on_delete)
        self.animation_list.currentRowChanged.connect(self._on_animation_row)
        self.name_edit.editingFinished.connect(self._on_rename)
        self.strategy_combo.currentIndexChanged.connect(self._on_strategy)
        self.default_duration.valueChanged.connect(self._on_default_duration)
        self.frame_list.currentRowChanged.connect(self._on_frame_row)
        self.frame_duration.valueChanged.connect(self._on_frame_duration)
        self.remove_frame_button.clicked.connect(self._on_remove_frame)
        self.refresh()

    def _build_layout(self) -> None:
        layout = QVBoxLayout(self)
        buttons = QHBoxLayout()
        buttons.addWidget(self.add_button)
        buttons.addWidget(self.delete_button)
        layout.addLayout(buttons)
        layout.addWidget(self.animation_list, 1)

        form_layout = QFormLayout()
        form_layout.addRow("Name", self.name_edit)
        form_layout.addRow("Loop strategy", self.strategy_combo)
        form_layout.addRow("Default duration", self.default_duration)
        layout.addLayout(form_layout)

        layout.addWidget(QLabel("Frames", self))
        layout.addWidget(self.frame_list, 1)
        frame_row = QHBoxLayout()
        frame_row.addWidget(self.frame_duration)
        frame_row.addWidget(self.remove_frame_button)
        layout.addLayout(frame_row)
        layout.addWidget(self.hint_label)

    def refresh(self) -> None:
        """Redraw every widget from the model."""

        selected = self.model.selected
        self.animation_list.blockSignals(True)
        self.animation_list.clear()
        for anim in self.model.animations:
            self.animation_list.addItem(f"{anim.name} ({len(anim.frames)} frames, {anim.loop_strategy.value})")
        if selected is not None:
            self.animation_list.setCurrentRow(selected)
        self.animation_list.blockSignals(False)

        anim = self.model.selected_animation
        has_selection = anim is not None
        for widget in (self.delete_button, self.name_edit, self.strategy_combo, self.frame_list):
            widget.setEnabled(has_selection)

        self.name_edit.blockSignals(True)
        self.name_edit.setText(anim.name if anim else "")
        self.name_edit.blockSignals(False)

        self.strategy_combo.blockSignals(True)
        if anim:
            self.strategy_combo.setCurrentIndex(self.strategy_combo.findData(anim.loop_strategy.value))
        self.strategy_combo.blockSignals(False)

        self.frame_list.blockSignals(True)
        previous_row = self.frame_list.currentRow()
        self.frame_list.clear()
        if anim:
            for position, step in enumerate(anim.frames):
                self.frame_list.addItem(f"{position}: frame {step.frame_index} for {step.duration} ms")
            if 0 <= previous_row < len(anim.frames):
                self.frame_list.setCurrentRow(previous_row)
        self.frame_list.blockSignals(False)
        self._sync_frame_editor()

    def _current_frame_position(self) -> Optional[int]:
        anim = self.model.selected_animation
        row = self.frame_list.currentRow()
        if anim is None or not 0 <= row < len(anim.frames):
            return None
        return row

    def _sync_frame_editor(self) -> None:
        position = self._current_frame_position()
        self.frame_duration.blockSignals(True)
        self.frame_duration.setEnabled(position is not None)
        self.remove_frame_button.setEnabled(position is not None)
        if position is not None:
            self.frame_duration.setValue(self.model.selected_animation.frames[position].duration)
        self.frame_duration.blockSignals(False)

    def _changed(self) -> None:
        self.refresh()
        self.animations_changed.emit()

    @Slot()
    def _on_add(self) -> None:
        index = self.model.create()
        self._changed()
        self.selection_changed.emit(index)

    @Slot()
    def _on_delete(self) -> None:
        if self.model.selected is None:
            return
        self.model.delete(self.model.selected)
        self._changed()
        self.selection_changed.emit(self.model.selected)

    @Slot(int)
    def _on_animation_row(self, row: int) -> None:
        self.model.select(row if 0 <= row < len(self.model) else None)
        self.frame_list.setCurrentRow(-1)
        self.refresh()
        self.selection_changed.emit(self.model.selected)

    @Slot()
    def _on_rename(self) -> None:
        name = self.name_edit.text().strip()
        anim = self.model.selected_animation
        if anim is None or not name or name == anim.name:
            return
        self.model.rename(self.model.selected, name)
        self._changed()

    @Slot(int)
    def _on_strategy(self, combo_index: int) -> None:
        if self.model.selected is None or combo_index < 0:
            return
        self.model.set_loop_strategy(self.model.selected, self.strategy_combo.itemData(combo_index))
        self._changed()

    @Slot(int)
    def _on_default_duration(self, value: int) -> None:
        self.model.default_duration = value

    @Slot(int)
    def _on_frame_row(self, row: int) -> None:
        self._sync_frame_editor()

    @Slot(int)
    def _on_frame_duration(self, value: int) -> None:
        position = self._current_frame_position()
        if position is None:
            return
        self.model.update_duration(self.model.selected, position, value)
        self._changed()

    @Slot()
    def _on_remove_frame(self) -> None:
        position = self._current_frame_position()
        if position is None:
            return
        self.model.remove_frame(self.model.selected, position)
        self._changed()

    def append_frame(self, frame_index: int) -> bool:
        """Append a clicked frame to the selected animation."""

        if self.model.selected is None:
            return False
        self.model.append_frame(self.model.selected, frame_index)
        logger.debug("Appended frame %s to %s", frame_index, self.model.selected_animation.name)
        self._changed()
        return True
