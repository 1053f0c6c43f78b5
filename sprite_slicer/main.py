import sys
import logging
from pathlib import Path
from PyQt6.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout,
                              QHBoxLayout, QPushButton, QFileDialog, QMessageBox,
                              QLabel, QGroupBox, QSpinBox, QCheckBox, QComboBox,
                              QSplitter, QGridLayout)
from PyQt6.QtCore import Qt

from .core import (SheetEditor, SlicerConfig, GifBuilder, ImageLoadError, Axis,
                   MAX_GRID)
from .widgets import SlicerCanvas, PreviewWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: SlicerConfig = None):
        super().__init__()

        self.editor = SheetEditor(config or SlicerConfig())
        self.gif_builder = GifBuilder()

        # Remember last used directories
        self.last_image_dir = ""
        self.last_export_dir = ""

        self.init_ui()
        self.create_menu_bar()
        self.setWindowTitle("Sprite Slicer - Sprite Sheet Animator")
        self.resize(1400, 900)

        self.refresh_controls()

    def init_ui(self):
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.create_left_panel())

        self.canvas = SlicerCanvas(self.editor)
        self.canvas.editor_changed.connect(self.refresh_controls)
        splitter.addWidget(self.canvas)

        splitter.addWidget(self.create_right_panel())
        splitter.setStretchFactor(1, 1)

        self.setCentralWidget(splitter)
        self.status_label = QLabel("Open a sprite sheet to begin")
        self.statusBar().addWidget(self.status_label)

    def create_left_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout()

        # Grid
        grid_group = QGroupBox("Grid Layout")
        grid_layout = QGridLayout()

        grid_layout.addWidget(QLabel("Rows:"), 0, 0)
        self.rows_spinbox = QSpinBox()
        self.rows_spinbox.setMinimum(1)
        self.rows_spinbox.setMaximum(MAX_GRID)
        self.rows_spinbox.setValue(self.editor.rows)
        self.rows_spinbox.valueChanged.connect(self.on_grid_changed)
        grid_layout.addWidget(self.rows_spinbox, 0, 1)

        grid_layout.addWidget(QLabel("Cols:"), 1, 0)
        self.cols_spinbox = QSpinBox()
        self.cols_spinbox.setMinimum(1)
        self.cols_spinbox.setMaximum(MAX_GRID)
        self.cols_spinbox.setValue(self.editor.cols)
        self.cols_spinbox.valueChanged.connect(self.on_grid_changed)
        grid_layout.addWidget(self.cols_spinbox, 1, 1)

        grid_group.setLayout(grid_layout)
        layout.addWidget(grid_group)

        # Selection
        selection_group = QGroupBox("Frames")
        selection_layout = QGridLayout()

        self.select_all_button = QPushButton("Select All")
        self.select_all_button.clicked.connect(self.editor.selection.select_all)
        selection_layout.addWidget(self.select_all_button, 0, 0)

        self.clear_selection_button = QPushButton("Clear Selection")
        self.clear_selection_button.clicked.connect(self.editor.selection.clear_selection)
        selection_layout.addWidget(self.clear_selection_button, 0, 1)

        self.include_button = QPushButton("Include")
        self.include_button.clicked.connect(lambda: self.editor.selection.set_active(True))
        selection_layout.addWidget(self.include_button, 1, 0)

        self.exclude_button = QPushButton("Exclude")
        self.exclude_button.clicked.connect(lambda: self.editor.selection.set_active(False))
        selection_layout.addWidget(self.exclude_button, 1, 1)

        selection_group.setLayout(selection_layout)
        layout.addWidget(selection_group)

        # Micro adjust
        offset_group = QGroupBox("Micro Adjust")
        offset_layout = QGridLayout()

        offset_buttons = [
            ("↑", 0, 1, Axis.VERTICAL, -1),
            ("←", 1, 0, Axis.HORIZONTAL, -1),
            ("→", 1, 2, Axis.HORIZONTAL, 1),
            ("↓", 2, 1, Axis.VERTICAL, 1),
        ]
        self.offset_buttons = []
        for text, row, col, axis, delta in offset_buttons:
            button = QPushButton(text)
            button.setMaximumWidth(40)
            button.clicked.connect(lambda checked, a=axis, d=delta: self.editor.selection.adjust_offset(a, d))
            offset_layout.addWidget(button, row, col)
            self.offset_buttons.append(button)

        self.offset_label = QLabel("Click a grid cell to select it")
        self.offset_label.setWordWrap(True)
        offset_layout.addWidget(self.offset_label, 3, 0, 1, 3)

        offset_group.setLayout(offset_layout)
        layout.addWidget(offset_group)

        # Sequence
        sequence_group = QGroupBox("Playback Order")
        sequence_layout = QHBoxLayout()

        self.move_earlier_button = QPushButton("◀ Earlier")
        self.move_earlier_button.clicked.connect(lambda: self.editor.sequence.move_in_sequence(-1))
        sequence_layout.addWidget(self.move_earlier_button)

        self.move_later_button = QPushButton("Later ▶")
        self.move_later_button.clicked.connect(lambda: self.editor.sequence.move_in_sequence(1))
        sequence_layout.addWidget(self.move_later_button)

        self.reset_order_button = QPushButton("Reset")
        self.reset_order_button.clicked.connect(self.editor.sequence.reset_order)
        sequence_layout.addWidget(self.reset_order_button)

        sequence_group.setLayout(sequence_layout)
        layout.addWidget(sequence_group)

        layout.addStretch()
        panel.setLayout(layout)
        panel.setMaximumWidth(300)
        return panel

    def create_right_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout()

        self.preview_widget = PreviewWidget(self.editor, self.gif_builder)
        self.preview_widget.frame_info_changed.connect(self.on_preview_frame_info_changed)
        layout.addWidget(self.preview_widget)

        fps_layout = QHBoxLayout()
        fps_layout.addWidget(QLabel("FPS:"))
        self.fps_spinbox = QSpinBox()
        self.fps_spinbox.setMinimum(1)
        self.fps_spinbox.setMaximum(60)
        self.fps_spinbox.setValue(self.editor.preview.fps)
        self.fps_spinbox.valueChanged.connect(self.editor.set_fps)
        fps_layout.addWidget(self.fps_spinbox)
        fps_layout.addStretch()
        layout.addLayout(fps_layout)

        self.preview_info_label = QLabel("Frame: 0/0")
        layout.addWidget(self.preview_info_label)

        export_group = QGroupBox("Export Settings")
        export_layout = QGridLayout()

        self.transparent_bg_checkbox = QCheckBox("Transparent Background")
        self.transparent_bg_checkbox.setChecked(self.editor.config.transparent_background)
        export_layout.addWidget(self.transparent_bg_checkbox, 0, 0, 1, 2)

        export_layout.addWidget(QLabel("Colors:"), 1, 0)
        self.color_palette_combo = QComboBox()
        self.color_palette_combo.addItems(["256", "128", "64", "32", "16"])
        self.color_palette_combo.setCurrentText(str(self.editor.config.color_count))
        export_layout.addWidget(self.color_palette_combo, 1, 1)

        export_layout.addWidget(QLabel("Loop (0 = forever):"), 2, 0)
        self.loop_spinbox = QSpinBox()
        self.loop_spinbox.setMinimum(0)
        self.loop_spinbox.setMaximum(100)
        self.loop_spinbox.setValue(self.editor.config.loop)
        export_layout.addWidget(self.loop_spinbox, 2, 1)

        self.export_gif_button = QPushButton("Export GIF")
        self.export_gif_button.clicked.connect(self.export_gif)
        export_layout.addWidget(self.export_gif_button, 3, 0, 1, 2)

        export_group.setLayout(export_layout)
        layout.addWidget(export_group)

        layout.addStretch()
        panel.setLayout(layout)
        return panel

    def create_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        file_menu.addAction("Open Image", self.open_image)
        file_menu.addSeparator()
        file_menu.addAction("Export GIF", self.export_gif)
        file_menu.addAction("Export Frames", self.export_frames)
        file_menu.addSeparator()
        file_menu.addAction("Exit", self.close)

        help_menu = menubar.addMenu("Help")
        help_menu.addAction("About", self.show_about)

    def open_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Sprite Sheet",
            self.last_image_dir,
            "Image Files (*.png *.jpg *.jpeg *.bmp *.gif *.webp)"
        )

        if file_path:
            self.load_image_from_path(file_path)

    def load_image_from_path(self, file_path: str) -> bool:
        try:
            self.editor.load_image(file_path)
        except ImageLoadError as e:
            QMessageBox.critical(self, "Error", f"Failed to load image:\n{str(e)}")
            return False

        self.last_image_dir = str(Path(file_path).parent)
        self.canvas.set_source_image(self.editor.source.image)
        self.status_label.setText(f"{Path(file_path).name}  {self.editor.source.width}×{self.editor.source.height}")
        self.refresh_controls()
        return True

    def on_grid_changed(self):
        self.editor.resize(self.rows_spinbox.value(), self.cols_spinbox.value())

    def on_preview_frame_info_changed(self, current: int, total: int, interval_ms: int):
        self.preview_info_label.setText(f"Frame: {current}/{total}  ({interval_ms} ms)")

    def refresh_controls(self):
        editor = self.editor
        has_frames = bool(editor.frames)
        selected = editor.selected_frames()

        for button in (self.select_all_button, self.reset_order_button):
            button.setEnabled(has_frames)
        for button in [self.clear_selection_button, self.include_button, self.exclude_button] + self.offset_buttons:
            button.setEnabled(bool(selected))

        can_reorder = len(selected) == 1 and selected[0].active
        self.move_earlier_button.setEnabled(can_reorder)
        self.move_later_button.setEnabled(can_reorder)
        self.export_gif_button.setEnabled(bool(editor.export_plan()))

        if len(selected) == 1:
            frame = selected[0]
            number = editor.sequence.sequence_number(frame.id)
            order_text = f"#{number}" if number is not None else "excluded"
            self.offset_label.setText(
                f"Frame {frame.id} ({frame.row},{frame.col})  {order_text}\n"
                f"Offset X: {frame.offset_x}  Offset Y: {frame.offset_y}\n"
                f"Use arrow keys to nudge"
            )
        elif selected:
            self.offset_label.setText(f"{len(selected)} frames selected")
        else:
            self.offset_label.setText("Click a grid cell to select it")

    def apply_export_settings(self):
        if self.transparent_bg_checkbox.isChecked():
            self.gif_builder.set_background_color(0, 0, 0, 0)
        else:
            self.gif_builder.set_background_color(255, 255, 255, 255)
        self.gif_builder.set_color_count(int(self.color_palette_combo.currentText()))
        self.gif_builder.set_loop(self.loop_spinbox.value())

    def export_gif(self):
        plan = self.editor.export_plan()
        if not plan:
            QMessageBox.warning(self, "Warning", "No active frames to export!")
            return

        default_path = "animation.gif"
        if self.last_export_dir:
            default_path = str(Path(self.last_export_dir) / default_path)

        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save GIF",
            default_path,
            "GIF Files (*.gif)"
        )

        if file_path:
            try:
                self.last_export_dir = str(Path(file_path).parent)
                self.apply_export_settings()
                self.gif_builder.build_from_plan(self.editor.source, plan, self.editor.preview.fps, file_path)
                self.status_label.setText(f"Exported {len(plan)} frames to {Path(file_path).name}")
            except ValueError as e:
                logger.warning("GIF export failed: %s", e)
                QMessageBox.critical(self, "Error", f"Failed to export GIF:\n{str(e)}")

    def export_frames(self):
        plan = self.editor.export_plan()
        if not plan:
            QMessageBox.warning(self, "Warning", "No active frames to export!")
            return

        directory = QFileDialog.getExistingDirectory(self, "Select Export Folder", self.last_export_dir)

        if directory:
            try:
                self.last_export_dir = directory
                self.apply_export_settings()
                prefix = self.editor.source.name or "frame"
                paths = self.gif_builder.export_slices(self.editor.source, plan, directory, prefix)
                QMessageBox.information(self, "Success", f"Exported {len(paths)} frames!")
            except (ValueError, OSError) as e:
                logger.warning("Frame export failed: %s", e)
                QMessageBox.critical(self, "Error", f"Failed to export frames:\n{str(e)}")

    def show_about(self):
        QMessageBox.about(
            self,
            "About Sprite Slicer",
            "Sprite Slicer\n\n"
            "1. Grid: set rows/cols, drag the lines to fit the sheet.\n"
            "2. Select: click a frame or drag a box over several.\n"
            "3. Adjust: nudge offsets with the arrow keys, exclude frames, reorder playback.\n"
            "4. Export: save an animated GIF or the individual frames."
        )


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    app = QApplication(sys.argv)

    app.setStyle('Fusion')

    window = MainWindow()
    window.show()

    if len(sys.argv) > 1:
        window.load_image_from_path(sys.argv[1])

    sys.exit(app.exec())


if __name__ == '__main__':
    main()
