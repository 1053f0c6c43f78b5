from PyQt6.QtWidgets import QWidget, QSizePolicy
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QPen, QColor, QBrush, QPixmap, QFont
from PIL import Image
from typing import Optional, Tuple

from ..core import Axis, SheetEditor
from .pixmap import pil_to_pixmap


class SlicerCanvas(QWidget):
    """Shows the sprite sheet with its grid and turns mouse input into editor commands."""

    # Emitted after any change the main window should reflect (selection, grid, offsets)
    editor_changed = pyqtSignal()

    GRID_COLOR = QColor(0, 255, 255, 128)
    ACTIVE_LINE_COLOR = QColor(255, 200, 0)
    SELECTED_FILL = QColor(255, 0, 128, 77)
    SELECTED_BORDER = QColor('#ff0080')
    INACTIVE_FILL = QColor(0, 0, 0, 150)
    MARQUEE_COLOR = QColor(255, 255, 255, 200)

    def __init__(self, editor: SheetEditor, parent=None):
        super().__init__(parent)

        self.editor = editor
        self.pixmap: Optional[QPixmap] = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)
        self.setStyleSheet("background-color: #18181b;")

        self.editor.add_listener(self.on_editor_changed)

    def on_editor_changed(self):
        # update() is coalesced by Qt into a single paint per event loop pass
        self.update()
        self.editor_changed.emit()

    def set_source_image(self, pil_image: Optional[Image.Image]):
        self.pixmap = pil_to_pixmap(pil_image) if pil_image is not None else None
        self.update()

    # ----- Display scaling -----
    def image_rect(self) -> QRectF:
        """Where the image is drawn inside the widget, fitted and centered."""
        source = self.editor.source
        if not source.ready or source.width == 0 or source.height == 0:
            return QRectF()

        scale = min(self.width() / source.width, self.height() / source.height)
        w = source.width * scale
        h = source.height * scale
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def scale(self) -> float:
        rect = self.image_rect()
        if rect.isEmpty():
            return 1.0
        return rect.width() / self.editor.source.width

    def to_image(self, pos: QPointF) -> Tuple[float, float]:
        rect = self.image_rect()
        s = self.scale()
        return ((pos.x() - rect.x()) / s, (pos.y() - rect.y()) / s)

    # ----- Mouse & keyboard -----
    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self.editor.source.ready:
            return
        self.setFocus()
        self.editor.selection.pointer_down(*self.to_image(event.position()))

    def mouseMoveEvent(self, event):
        if not self.editor.source.ready:
            return
        self.editor.selection.pointer_move(*self.to_image(event.position()))
        self.update_cursor()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self.editor.source.ready:
            return
        self.editor.selection.pointer_up(*self.to_image(event.position()))
        self.update_cursor()

    def leaveEvent(self, event):
        if self.editor.source.ready:
            self.editor.selection.pointer_leave()
        self.unsetCursor()
        super().leaveEvent(event)

    def keyPressEvent(self, event):
        moves = {
            Qt.Key.Key_Left: (-1, 0),
            Qt.Key.Key_Right: (1, 0),
            Qt.Key.Key_Up: (0, -1),
            Qt.Key.Key_Down: (0, 1),
        }
        delta = moves.get(event.key())
        if delta is None or not self.editor.selected_ids:
            super().keyPressEvent(event)
            return
        self.editor.selection.nudge(*delta)

    def update_cursor(self):
        target = self.editor.selection.drag_target or self.editor.selection.hover_target
        if target is None:
            self.unsetCursor()
        elif target.axis is Axis.VERTICAL:
            self.setCursor(Qt.CursorShape.SplitHCursor)
        else:
            self.setCursor(Qt.CursorShape.SplitVCursor)

    # ----- Painting -----
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor('#18181b'))

        rect = self.image_rect()
        if self.pixmap is None or rect.isEmpty():
            painter.setPen(QColor('#71717a'))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Open a sprite sheet to begin")
            painter.end()
            return

        painter.drawPixmap(rect, self.pixmap, QRectF(self.pixmap.rect()))

        painter.translate(rect.x(), rect.y())
        painter.scale(self.scale(), self.scale())

        self.draw_frames(painter)
        self.draw_dividers(painter)
        self.draw_marquee(painter)
        painter.end()

    def draw_frames(self, painter: QPainter):
        editor = self.editor
        pen_width = 3 / self.scale()
        badge_font = QFont()
        badge_font.setPixelSize(max(8, int(12 / self.scale())))
        painter.setFont(badge_font)

        for frame in editor.frames:
            frame_rect = QRectF(frame.x, frame.y, frame.width, frame.height)

            if not frame.active:
                painter.fillRect(frame_rect, self.INACTIVE_FILL)

            if frame.id in editor.selected_ids:
                painter.fillRect(frame_rect, self.SELECTED_FILL)
                painter.setPen(QPen(self.SELECTED_BORDER, pen_width))
                painter.setBrush(Qt.BrushStyle.NoBrush)
                painter.drawRect(frame_rect)

                if frame.offset_x or frame.offset_y:
                    center = frame_rect.center()
                    target = QPointF(center.x() + frame.offset_x, center.y() + frame.offset_y)
                    painter.setPen(QPen(QColor('yellow'), pen_width / 2))
                    painter.drawLine(center, target)
                    painter.setBrush(QBrush(QColor('yellow')))
                    painter.drawEllipse(target, 3 / self.scale(), 3 / self.scale())
                    painter.setBrush(Qt.BrushStyle.NoBrush)

            number = editor.sequence.sequence_number(frame.id)
            if number is not None:
                painter.setPen(QColor('white'))
                painter.drawText(frame_rect.adjusted(4 / self.scale(), 2 / self.scale(), 0, 0),
                                 Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop, str(number))

    def draw_dividers(self, painter: QPainter):
        editor = self.editor
        width = editor.source.width
        height = editor.source.height
        highlighted = editor.selection.drag_target or editor.selection.hover_target

        for axis in (Axis.VERTICAL, Axis.HORIZONTAL):
            for index, position in enumerate(editor.dividers.positions(axis)):
                is_active = highlighted is not None and highlighted.axis is axis and highlighted.index == index
                color = self.ACTIVE_LINE_COLOR if is_active else self.GRID_COLOR
                painter.setPen(QPen(color, 2 / self.scale()))
                if axis is Axis.VERTICAL:
                    x = position * width
                    painter.drawLine(QPointF(x, 0), QPointF(x, height))
                else:
                    y = position * height
                    painter.drawLine(QPointF(0, y), QPointF(width, y))

    def draw_marquee(self, painter: QPainter):
        box = self.editor.selection.selection_box
        if box is None:
            return
        left, top, right, bottom = box
        pen = QPen(self.MARQUEE_COLOR, 1 / self.scale(), Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(QBrush(QColor(255, 255, 255, 30)))
        painter.drawRect(QRectF(left, top, right - left, bottom - top))
