from PyQt6.QtWidgets import QWidget, QLabel, QVBoxLayout, QPushButton, QHBoxLayout
from PyQt6.QtCore import QTimer, Qt, pyqtSignal

from ..core import GifBuilder, SheetEditor
from .pixmap import pil_to_pixmap


class PreviewWidget(QWidget):
    # Signal to emit frame info: (current_frame, total_frames, interval_ms)
    frame_info_changed = pyqtSignal(int, int, int)

    PREVIEW_SIZE = 256

    def __init__(self, editor: SheetEditor, renderer: GifBuilder, parent=None):
        super().__init__(parent)

        self.editor = editor
        self.renderer = renderer
        self.scheduler = editor.preview

        self.init_ui()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.next_frame)

        self.scheduler.add_restart_listener(self.restart_timer)
        self.editor.add_listener(self.show_current_frame)
        self.restart_timer(self.scheduler.interval_ms)

    def init_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(8)

        control_layout = QHBoxLayout()

        self.play_button = QPushButton("⏸ Pause")
        self.play_button.clicked.connect(self.toggle_play)
        control_layout.addWidget(self.play_button)

        self.stop_button = QPushButton("⏹ Stop")
        self.stop_button.clicked.connect(self.stop)
        control_layout.addWidget(self.stop_button)

        self.prev_button = QPushButton("⏮ Prev")
        self.prev_button.clicked.connect(self.prev_frame)
        control_layout.addWidget(self.prev_button)

        self.next_button = QPushButton("⏭ Next")
        self.next_button.clicked.connect(self.manual_next_frame)
        control_layout.addWidget(self.next_button)

        layout.addLayout(control_layout)

        self.preview_label = QLabel("No Preview")
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setFixedSize(self.PREVIEW_SIZE, self.PREVIEW_SIZE)
        self.preview_label.setScaledContents(False)
        # Checker-free light background so transparent areas stay visible
        self.preview_label.setStyleSheet("QLabel { background-color: #e8e8e8; border: 2px solid #ccc; }")
        layout.addWidget(self.preview_label)

        self.setLayout(layout)

    def restart_timer(self, interval_ms: int):
        self.timer.stop()
        if self.scheduler.is_playing:
            self.timer.start(interval_ms)
        self.play_button.setText("⏸ Pause" if self.scheduler.is_playing else "▶ Play")

    def show_current_frame(self):
        frame = self.scheduler.current_frame()
        if frame is None or not self.editor.source.ready:
            self.preview_label.clear()
            self.preview_label.setText("No Frames")
            self.frame_info_changed.emit(0, 0, self.scheduler.interval_ms)
            return

        pixmap = pil_to_pixmap(self.renderer.render_frame(self.editor.source, frame.placement()))

        # Nearest-neighbour keeps pixel art crisp
        scaled_pixmap = pixmap.scaled(
            self.PREVIEW_SIZE,
            self.PREVIEW_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.FastTransformation
        )
        self.preview_label.setPixmap(scaled_pixmap)
        self.update_info()

    def toggle_play(self):
        self.scheduler.toggle_play()

    def stop(self):
        self.scheduler.stop()
        self.show_current_frame()

    def next_frame(self):
        self.editor.tick_preview()
        self.show_current_frame()

    def manual_next_frame(self):
        self.scheduler.step(1)
        self.show_current_frame()

    def prev_frame(self):
        self.scheduler.step(-1)
        self.show_current_frame()

    def update_info(self):
        """Emit signal with current frame info"""
        total = self.scheduler.frame_count
        if total:
            self.frame_info_changed.emit(self.scheduler.current_index + 1, total, self.scheduler.interval_ms)
        else:
            self.frame_info_changed.emit(0, 0, self.scheduler.interval_ms)
