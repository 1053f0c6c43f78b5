"""
Pointer interaction and frame selection

Interprets pointer down/move/up/leave over the sheet canvas. A press on a
divider drags it; a press anywhere else starts a marquee that resolves to
either a click (short travel) or a box selection on release. All
coordinates are canvas pixels, which equal source image pixels.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Set, Tuple

from .config import CLICK_THRESHOLD, HIT_TOLERANCE
from .dividers import Axis, DividerTarget
from .utils import Rect, distance, normalize_rect, rects_intersect

if TYPE_CHECKING:
    from .sheet_editor import SheetEditor

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class InteractionMode(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'
    SELECTING = 'selecting'


@dataclass
class InteractionState:
    hover_target: Optional[DividerTarget] = None
    mode: InteractionMode = InteractionMode.IDLE
    box_start: Optional[Point] = None
    box_end: Optional[Point] = None

    @property
    def selection_box(self) -> Optional[Rect]:
        if self.box_start is None or self.box_end is None:
            return None
        return normalize_rect(self.box_start, self.box_end)

    def clear_box(self):
        self.box_start = None
        self.box_end = None


class SelectionEngine:

    def __init__(self, editor: 'SheetEditor', hit_tolerance: float = HIT_TOLERANCE, click_threshold: float = CLICK_THRESHOLD):
        self.editor = editor
        self.state = InteractionState()
        self.hit_tolerance = hit_tolerance
        self.click_threshold = click_threshold

    @property
    def hover_target(self) -> Optional[DividerTarget]:
        return self.state.hover_target

    @property
    def drag_target(self) -> Optional[DividerTarget]:
        return self.editor.dividers.drag_target

    @property
    def selection_box(self) -> Optional[Rect]:
        return self.state.selection_box

    def _hit_test(self, x: float, y: float) -> Optional[DividerTarget]:
        source = self.editor.source
        if not source.ready:
            return None
        return self.editor.dividers.hit_test(x, y, source.width, source.height, self.hit_tolerance)

    # ----- Pointer events -----
    def pointer_down(self, x: float, y: float):
        self.state.hover_target = self._hit_test(x, y)
        target = self.state.hover_target

        if target is not None and self.editor.dividers.begin_drag(target.axis, target.index):
            self.state.mode = InteractionMode.DRAGGING
        else:
            self.state.mode = InteractionMode.SELECTING
            self.state.box_start = (x, y)
            self.state.box_end = (x, y)
        self.editor.notify_changed()

    def pointer_move(self, x: float, y: float):
        mode = self.state.mode

        if mode is InteractionMode.DRAGGING:
            target = self.drag_target
            source = self.editor.source
            if target is None or not source.ready:
                return
            if target.axis is Axis.VERTICAL:
                proposed = x / source.width
            else:
                proposed = y / source.height
            self.editor.dividers.update_drag(target.axis, target.index, proposed)
            self.editor.rebuild_frames()

        elif mode is InteractionMode.SELECTING:
            self.state.box_end = (x, y)
            self.editor.notify_changed()

        else:
            target = self._hit_test(x, y)
            if target != self.state.hover_target:
                self.state.hover_target = target
                self.editor.notify_changed()

    def pointer_up(self, x: float, y: float):
        mode = self.state.mode
        self.state.mode = InteractionMode.IDLE

        if mode is InteractionMode.DRAGGING:
            self.editor.dividers.end_drag()
            self.editor.notify_changed()

        elif mode is InteractionMode.SELECTING:
            start = self.state.box_start
            self.state.clear_box()
            if start is None or distance(start, (x, y)) < self.click_threshold:
                self.click(x, y)
            else:
                self.marquee_select(start, (x, y))

    def pointer_leave(self):
        mode = self.state.mode
        self.state.mode = InteractionMode.IDLE
        self.state.hover_target = None
        self.state.clear_box()
        if mode is InteractionMode.DRAGGING:
            self.editor.dividers.end_drag()
        self.editor.notify_changed()

    # ----- Selection commands -----
    def click(self, x: float, y: float) -> Optional[int]:
        hit = next((f for f in self.editor.frames if f.contains(x, y)), None)
        self._set_selection({hit.id} if hit is not None else set())
        if hit is not None:
            self.editor.focus_frame(hit.id)
        return hit.id if hit is not None else None

    def marquee_select(self, start: Point, end: Point) -> Set[int]:
        box = normalize_rect(start, end)
        ids = {f.id for f in self.editor.frames if rects_intersect(box, f.rect)}
        self._set_selection(ids)
        return ids

    def select_all(self):
        self._set_selection({f.id for f in self.editor.frames})

    def clear_selection(self):
        self._set_selection(set())

    def _set_selection(self, ids: Set[int]):
        self.editor.selected_ids = set(ids)
        logger.debug("Selection: %s", sorted(ids))
        self.editor.notify_changed()

    # ----- Batch mutation -----
    def selected_frames(self):
        return [f for f in self.editor.frames if f.id in self.editor.selected_ids]

    def set_active(self, active: bool):
        frames = self.selected_frames()
        if not frames:
            return
        for frame in frames:
            frame.active = active
        self.editor.notify_sequence_changed()

    def adjust_offset(self, axis: Axis, delta: int):
        """Shift the selected frames' destination by delta pixels along one axis."""
        frames = self.selected_frames()
        if not frames:
            return
        for frame in frames:
            if axis is Axis.HORIZONTAL:
                frame.offset_x += delta
            else:
                frame.offset_y += delta
        self.editor.notify_changed()

    def nudge(self, dx: int, dy: int):
        if dx:
            self.adjust_offset(Axis.HORIZONTAL, dx)
        if dy:
            self.adjust_offset(Axis.VERTICAL, dy)
