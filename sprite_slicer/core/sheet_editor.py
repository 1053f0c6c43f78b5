"""
Sheet editor model

One mutable object holds everything the slicer edits: the source image,
the grid dividers, the derived frames, the selection, pointer interaction
state and preview playback. Handlers mutate it synchronously; views
subscribe with add_listener() and only read it when repainting.
"""

import logging
from typing import Callable, List, Optional, Set, Tuple

from .config import SlicerConfig
from .dividers import DividerModel
from .frames import FramePlacement, SliceFrame, derive_frames
from .image_source import SourceImage
from .preview import PreviewScheduler
from .selection import SelectionEngine
from .sequence import SequenceManager, playback_order

logger = logging.getLogger(__name__)


class SheetEditor:

    def __init__(self, config: Optional[SlicerConfig] = None):
        self.config = config or SlicerConfig()

        self.source: SourceImage = SourceImage.pending()
        self.dividers = DividerModel(self.config.rows, self.config.cols)
        self.frames: List[SliceFrame] = []
        self.selected_ids: Set[int] = set()
        self.pause_on_select = True

        self.selection = SelectionEngine(self, self.config.hit_tolerance, self.config.click_threshold)
        self.sequence = SequenceManager(self)
        self.preview = PreviewScheduler(self.playback_frames, fps=self.config.fps)

        self._listeners: List[Callable[[], None]] = []

    # ----- Change notification -----
    def add_listener(self, callback: Callable[[], None]):
        self._listeners.append(callback)

    def notify_changed(self):
        for callback in self._listeners:
            callback()

    def notify_sequence_changed(self):
        self.preview.sequence_changed()
        self.notify_changed()

    # ----- Source & grid -----
    @property
    def rows(self) -> int:
        return self.dividers.rows

    @property
    def cols(self) -> int:
        return self.dividers.cols

    def set_image(self, source: SourceImage):
        self.source = source
        self.rebuild_frames()

    def load_image(self, filepath: str):
        """Load a sheet from disk. On failure the current source is kept and the error propagates."""
        self.set_image(SourceImage.from_file(filepath))

    def resize(self, rows: int, cols: int):
        rows, cols = self.dividers.resize(rows, cols)
        self.config.rows, self.config.cols = rows, cols
        self.rebuild_frames()

    def rebuild_frames(self) -> bool:
        """Re-derive frames from the dividers; does nothing until the source is ready."""
        if not self.source.ready:
            return False

        before = self._playback_cells()
        self.frames = derive_frames(
            self.dividers.vertical,
            self.dividers.horizontal,
            self.source.width,
            self.source.height,
            self.frames,
        )
        # ids were reassigned, so the old selection no longer means anything
        self.selected_ids = set()
        logger.debug("Rebuilt %d frames (%dx%d grid)", len(self.frames), self.rows, self.cols)

        # Divider drags only move frame edges; keep the preview timer running through them
        if self._playback_cells() != before:
            self.notify_sequence_changed()
        else:
            self.notify_changed()
        return True

    def _playback_cells(self) -> List[Tuple[int, int, int]]:
        return [(f.id, f.row, f.col) for f in self.playback_frames()]

    # ----- Queries -----
    def get_frame(self, frame_id: int) -> Optional[SliceFrame]:
        if 0 <= frame_id < len(self.frames) and self.frames[frame_id].id == frame_id:
            return self.frames[frame_id]
        return next((f for f in self.frames if f.id == frame_id), None)

    def selected_frames(self) -> List[SliceFrame]:
        return self.selection.selected_frames()

    def playback_frames(self) -> List[SliceFrame]:
        return playback_order(self.frames)

    def export_plan(self) -> List[FramePlacement]:
        """Source boxes and destination offsets in playback order, empty until the source is ready."""
        if not self.source.ready:
            return []
        return [f.placement() for f in self.playback_frames()]

    def focus_frame(self, frame_id: int):
        if self.preview.seek_frame(frame_id) and self.pause_on_select:
            self.preview.pause()

    # ----- Preview -----
    def set_fps(self, fps: int):
        self.preview.set_fps(fps)
        self.config.fps = self.preview.fps
        self.notify_changed()

    def tick_preview(self) -> int:
        return self.preview.tick()

    def __repr__(self):
        return f"SheetEditor(source={self.source!r}, grid={self.rows}x{self.cols}, frames={len(self.frames)})"
