"""Main application window wiring the editor panels to the core model."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QEvent, Qt, Slot
from PySide6.QtGui import QAction, QGuiApplication, QPixmap
from PySide6.QtWidgets import (
    QButtonGroup,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..core import EditorSettings, Frame, ParseMode, ProjectState
from ..core import config_emitter, config_parser, config_writer, frame_renderer, frame_resolver, image_loader
from ..core.animation_model import AnimationModel
from ..core.errors import ConfigParseError, InvalidImageError, ValidationError
from ..core.playback import PlaybackEngine
from ..core.settings import load_editor_settings
from ..gui.animation_panel import AnimationPanel
from ..gui.file_picker import open_config_file_dialog, open_image_file_dialog, save_config_file_dialog
from ..gui.playback_ticker import PlaybackTicker
from ..gui.settings_panel import GridSettingsPanel
from ..gui.source_view_panel import SourceViewPanel
from ..utils import file_tools

logger = logging.getLogger(__name__)


def _pixmap_from_image(image: Image.Image) -> QPixmap:
    return QPixmap.fromImage(ImageQt(image))


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(self, settings: Optional[EditorSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle("Sprite Sheet Animation Builder")
        self.setMinimumSize(1100, 720)

        if settings is None:
            try:
                settings = load_editor_settings()
            except ValidationError as exc:
                logger.warning("Ignoring environment overrides: %s", exc)
                settings = EditorSettings()
        self.settings = settings

        self.image: Optional[Image.Image] = None
        self.image_file: Optional[Path] = None
        self.parse_mode: Optional[ParseMode] = None
        self.frames: tuple[Frame, ...] = ()
        self.model = AnimationModel(settings.default_duration)
        self.engine = PlaybackEngine()
        self.ticker = PlaybackTicker(self.engine, parent=self)

        self.status_bar = QStatusBar(self)
        self.setStatusBar(self.status_bar)

        self.open_button = QPushButton("Open sprite sheet", self)
        self.image_label = QLabel("No image loaded", self)
        self.grid_mode_button = QPushButton("Grid", self)
        self.view_mode_button = QPushButton("Source views", self)
        self.mode_group = QButtonGroup(self)
        for button in (self.grid_mode_button, self.view_mode_button):
            button.setCheckable(True)
            self.mode_group.addButton(button)
        self.image_path_input = QLineEdit(settings.image_path, self)
        self.group_name_input = QLineEdit(settings.group_name, self)

        self.grid_panel = GridSettingsPanel(self)
        self.view_panel = SourceViewPanel(self)
        self.animation_panel = AnimationPanel(self.model, self)

        self.sheet_label = QLabel("Load a sprite sheet to begin", self)
        self.sheet_label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.sheet_scroll = QScrollArea(self)
        self.sheet_scroll.setWidget(self.sheet_label)
        self.sheet_scroll.setWidgetResizable(False)

        self.preview_label = QLabel("No frame", self)
        self.preview_label.setAlignment(Qt.AlignCenter)
        self.preview_label.setMinimumSize(160, 160)
        self.play_button = QPushButton("Play", self)
        self.restart_button = QPushButton("Restart", self)
        self.step_label = QLabel("", self)

        self.code_view = QPlainTextEdit(self)
        self.code_view.setReadOnly(True)
        self.code_view.setPlaceholderText("Generated code appears once frames are defined.")
        self.copy_button = QPushButton("Copy", self)
        self.save_button = QPushButton("Save .ts", self)

        self._build_menu()
        self._build_layout()
        self._wire_signals()
        self._refresh_mode_widgets()
        self._refresh_code()
        self._refresh_preview()

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        open_action = QAction("Open sprite sheet", self)
        open_action.triggered.connect(self._on_open_image)
        import_action = QAction("Import config", self)
        import_action.triggered.connect(self._on_import_config)
        save_action = QAction("Save config", self)
        save_action.triggered.connect(self._on_save)
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(open_action)
        file_menu.addAction(import_action)
        file_menu.addAction(save_action)
        file_menu.addSeparator()
        file_menu.addAction(exit_action)

        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _build_layout(self) -> None:
        splitter = QSplitter(Qt.Horizontal, self)

        left = QWidget(self)
        left_layout = QVBoxLayout(left)
        left_layout.addWidget(self.open_button)
        left_layout.addWidget(self.image_label)
        mode_row = QHBoxLayout()
        mode_row.addWidget(QLabel("Parse mode:", self))
        mode_row.addWidget(self.grid_mode_button)
        mode_row.addWidget(self.view_mode_button)
        left_layout.addLayout(mode_row)
        left_layout.addWidget(self.grid_panel)
        left_layout.addWidget(self.view_panel)
        output_box = QGroupBox("Output", self)
        output_layout = QVBoxLayout(output_box)
        output_layout.addWidget(QLabel("Image path in code:", self))
        output_layout.addWidget(self.image_path_input)
        output_layout.addWidget(QLabel("Group name:", self))
        output_layout.addWidget(self.group_name_input)
        left_layout.addWidget(output_box)
        splitter.addWidget(left)

        splitter.addWidget(self.sheet_scroll)

        right = QWidget(self)
        right_layout = QVBoxLayout(right)
        anim_box = QGroupBox("Animations", self)
        QVBoxLayout(anim_box).addWidget(self.animation_panel)
        right_layout.addWidget(anim_box, 2)
        preview_box = QGroupBox("Preview", self)
        preview_layout = QVBoxLayout(preview_box)
        preview_layout.addWidget(self.preview_label, 1)
        controls = QHBoxLayout()
        controls.addWidget(self.play_button)
        controls.addWidget(self.restart_button)
        controls.addWidget(self.step_label, 1)
        preview_layout.addLayout(controls)
        right_layout.addWidget(preview_box, 1)
        code_box = QGroupBox("Generated code", self)
        code_layout = QVBoxLayout(code_box)
        code_layout.addWidget(self.code_view, 1)
        code_buttons = QHBoxLayout()
        code_buttons.addWidget(self.copy_button)
        code_buttons.addWidget(self.save_button)
        code_layout.addLayout(code_buttons)
        right_layout.addWidget(code_box, 2)
        splitter.addWidget(right)

        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

    def _wire_signals(self) -> None:
        self.open_button.clicked.connect(self._on_open_image)
        self.grid_mode_button.clicked.connect(lambda: self._set_parse_mode(ParseMode.GRID))
        self.view_mode_button.clicked.connect(lambda: self._set_parse_mode(ParseMode.SOURCE_VIEW))
        self.grid_panel.changed.connect(self._on_grid_changed)
        self.view_panel.views_changed.connect(self._on_views_changed)
        self.view_panel.selection_changed.connect(self._on_view_selected)
        self.view_panel.rejected.connect(self._show_warning)
        self.animation_panel.selection_changed.connect(self._on_animation_selected)
        self.animation_panel.animations_changed.connect(self._on_animations_changed)
        self.image_path_input.textChanged.connect(self._refresh_code)
        self.group_name_input.textChanged.connect(self._refresh_code)
        self.play_button.clicked.connect(self.engine.toggle)
        self.restart_button.clicked.connect(self._on_restart)
        self.ticker.ticked.connect(self._on_ticked)
        self.ticker.playing_changed.connect(self._on_playing_changed)
        self.copy_button.clicked.connect(self._on_copy)
        self.save_button.clicked.connect(self._on_save)
        self.sheet_label.installEventFilter(self)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def current_state(self) -> ProjectState:
        """Snapshot everything the code generator needs."""

        return ProjectState(
            image_path=self.image_path_input.text().strip() or self.settings.image_path,
            image_size=image_loader.dimensions_of(self.image),
            parse_mode=self.parse_mode,
            grid=self.grid_panel.gather_grid(),
            source_views=self.view_panel.views,
            animations=self.model.animations,
            group_name=self.group_name_input.text().strip() or self.settings.group_name,
        )

    def _recompute_frames(self) -> None:
        self.frames = frame_resolver.resolve_frames(
            self.parse_mode,
            self.grid_panel.gather_grid(),
            self.view_panel.views,
            image_loader.dimensions_of(self.image),
        )
        logger.debug("Resolved %s frames", len(self.frames))
        self._refresh_sheet()
        self._refresh_preview()
        self._refresh_code()

    # ------------------------------------------------------------------
    # Image and mode
    # ------------------------------------------------------------------

    @Slot()
    def _on_open_image(self) -> None:
        chosen = open_image_file_dialog(self)
        if chosen is not None:
            self.load_image(chosen)

    def load_image(self, path: Path) -> None:
        try:
            image = image_loader.load_image(path)
        except (InvalidImageError, ValidationError) as exc:
            self._show_warning(str(exc))
            return
        self.image = image
        self.image_file = path
        self.image_label.setText(f"{path.name} ({image.width}x{image.height})")
        self.parse_mode = None
        self.view_panel.set_views(())
        self._refresh_mode_widgets()
        self._recompute_frames()
        self.status_bar.showMessage(f"Loaded {path}")

    def _set_parse_mode(self, mode: ParseMode) -> None:
        if self.image is None:
            self._show_warning("Load a sprite sheet before choosing a parse mode.")
            self._refresh_mode_widgets()
            return
        self.parse_mode = mode
        self._refresh_mode_widgets()
        self._recompute_frames()

    def _refresh_mode_widgets(self) -> None:
        # an exclusive group refuses to uncheck its last checked button
        self.mode_group.setExclusive(False)
        self.grid_mode_button.setChecked(self.parse_mode is ParseMode.GRID)
        self.view_mode_button.setChecked(self.parse_mode is ParseMode.SOURCE_VIEW)
        self.mode_group.setExclusive(True)
        self.grid_panel.setVisible(self.parse_mode is ParseMode.GRID)
        self.view_panel.setVisible(self.parse_mode is ParseMode.SOURCE_VIEW)

    @Slot()
    def _on_grid_changed(self) -> None:
        self.view_panel.set_grid(self.grid_panel.gather_grid())
        if self.parse_mode is ParseMode.GRID:
            self._recompute_frames()

    @Slot(object)
    def _on_views_changed(self, views) -> None:
        if self.parse_mode is ParseMode.SOURCE_VIEW:
            self._recompute_frames()

    @Slot(object)
    def _on_view_selected(self, index) -> None:
        self._refresh_sheet()

    # ------------------------------------------------------------------
    # Sheet overlay
    # ------------------------------------------------------------------

    def _refresh_sheet(self) -> None:
        if self.image is None:
            self.sheet_label.setText("Load a sprite sheet to begin")
            self.sheet_label.adjustSize()
            return
        highlight = None
        if self.parse_mode is ParseMode.SOURCE_VIEW and self.view_panel.selected is not None:
            highlight = self.view_panel.views[self.view_panel.selected]
        overlay = frame_renderer.render_overlay(self.image, self.frames, highlight)
        self.sheet_label.setPixmap(_pixmap_from_image(overlay))
        self.sheet_label.adjustSize()

    def handle_sheet_click(self, event) -> None:  # pragma: no cover - UI callback
        """Append the clicked frame to the selected animation."""

        pos = event.position().toPoint()
        frame = frame_resolver.frame_at_point(self.frames, pos.x(), pos.y())
        if frame is None:
            return
        if not self.animation_panel.append_frame(frame.index):
            self.status_bar.showMessage("Create or select an animation first.")
            return
        self.status_bar.showMessage(f"Added frame {frame.index}")

    def eventFilter(self, obj, event):  # pragma: no cover - UI hook
        if obj is self.sheet_label and event.type() == QEvent.MouseButtonPress:
            self.handle_sheet_click(event)
        return super().eventFilter(obj, event)

    # ------------------------------------------------------------------
    # Animations and playback
    # ------------------------------------------------------------------

    @Slot(object)
    def _on_animation_selected(self, index) -> None:
        self.engine.select(self.model.selected_animation)
        self._refresh_preview()

    @Slot()
    def _on_animations_changed(self) -> None:
        self.engine.sync(self.model.selected_animation)
        self._refresh_preview()
        self._refresh_code()

    @Slot()
    def _on_restart(self) -> None:
        self.engine.restart()
        self._refresh_preview()

    @Slot(object)
    def _on_ticked(self, steps) -> None:
        self._refresh_preview()

    @Slot(bool)
    def _on_playing_changed(self, playing: bool) -> None:
        self.play_button.setText("Pause" if playing else "Play")

    def _refresh_preview(self) -> None:
        self.play_button.setEnabled(self.engine.is_playable)
        rendered = None
        if self.image is not None:
            rendered = frame_renderer.render_current_frame(
                self.image, self.frames, self.engine, self.settings.preview_scale
            )
        if rendered is None:
            self.preview_label.clear()
            self.preview_label.setText("No frame")
        else:
            self.preview_label.setPixmap(_pixmap_from_image(rendered))
        anim = self.engine.animation
        if anim is not None and anim.frames:
            self.step_label.setText(
                f"{self.engine.current_step + 1}/{len(anim.frames)} (frame {self.engine.current_frame_index})"
            )
        else:
            self.step_label.setText("")

    # ------------------------------------------------------------------
    # Code output
    # ------------------------------------------------------------------

    @Slot()
    def _refresh_code(self) -> None:
        self.code_view.setPlainText(config_emitter.generate_config(self.current_state()))
        has_code = bool(self.code_view.toPlainText())
        self.copy_button.setEnabled(has_code)
        self.save_button.setEnabled(has_code)

    @Slot()
    def _on_copy(self) -> None:
        QGuiApplication.clipboard().setText(self.code_view.toPlainText())
        self.status_bar.showMessage("Copied to clipboard")

    @Slot()
    def _on_save(self) -> None:
        state = self.current_state()
        if self.image_file is not None:
            suggested = file_tools.default_output_path(self.image_file, state.group_name)
        else:
            suggested = Path(file_tools.format_output_filename(state.group_name))
        target = save_config_file_dialog(self, suggested)
        if target is None:
            return
        try:
            config_writer.write_config(state, target)
        except (OSError, ValueError) as exc:
            self._show_warning(str(exc))
            return
        self.status_bar.showMessage(f"Saved {target}")

    @Slot()
    def _on_import_config(self) -> None:
        if self.image is None:
            self._show_warning("Load the sprite sheet the config refers to first.")
            return
        chosen = open_config_file_dialog(self)
        if chosen is None:
            return
        try:
            parsed = config_parser.parse_config(chosen.read_text(encoding="utf-8"))
        except (OSError, ConfigParseError) as exc:
            self._show_warning(str(exc))
            return
        self.apply_parsed_config(parsed)
        self.status_bar.showMessage(f"Imported {len(parsed.animations)} animations from {chosen.name}")

    def apply_parsed_config(self, parsed: config_parser.ParsedConfig) -> None:
        if parsed.grid is not None:
            panel = self.grid_panel
            for box, value in (
                (panel.sprite_width, parsed.grid.sprite_width),
                (panel.sprite_height, parsed.grid.sprite_height),
                (panel.rows, parsed.grid.rows),
                (panel.columns, parsed.grid.columns),
                (panel.offset_x, parsed.grid.origin_offset.x),
                (panel.offset_y, parsed.grid.origin_offset.y),
                (panel.margin_x, parsed.grid.margin.x),
                (panel.margin_y, parsed.grid.margin.y),
            ):
                box.blockSignals(True)
                box.setValue(value)
                box.blockSignals(False)
        self.view_panel.set_views(parsed.source_views)
        self.image_path_input.setText(parsed.image_path)
        self.group_name_input.setText(parsed.group_name)
        self.model.animations = parsed.animations
        self.model.selected = None
        self.engine.select(None)
        self.animation_panel.refresh()
        self.parse_mode = parsed.parse_mode
        self._refresh_mode_widgets()
        self._recompute_frames()

    # ------------------------------------------------------------------

    @Slot(str)
    def _show_warning(self, message: str) -> None:
        logger.warning("%s", message)
        QMessageBox.warning(self, "Sprite Sheet Animation Builder", message)

    def _show_about(self) -> None:
        QMessageBox.information(
            self,
            "About",
            "Sheet2Anim\nSlice sprite sheets into frames and generate Excalibur animation code.",
        )

    def closeEvent(self, event) -> None:  # pragma: no cover - Qt lifecycle
        self.ticker.stop()
        super().closeEvent(event)
