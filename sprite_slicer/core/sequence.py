import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from .frames import SliceFrame

if TYPE_CHECKING:
    from .sheet_editor import SheetEditor

logger = logging.getLogger(__name__)


def playback_order(frames: Iterable[SliceFrame]) -> List[SliceFrame]:
    """Active frames in playback/export order; equal orders fall back to raster id."""
    return sorted((f for f in frames if f.active), key=lambda f: (f.sequence_order, f.id))


class SequenceManager:

    def __init__(self, editor: 'SheetEditor'):
        self.editor = editor

    def ordered_frames(self) -> List[SliceFrame]:
        return playback_order(self.editor.frames)

    def sequence_number(self, frame_id: int) -> Optional[int]:
        for position, frame in enumerate(self.ordered_frames()):
            if frame.id == frame_id:
                return position + 1
        return None

    def move_in_sequence(self, direction: int) -> bool:
        """
        Swap the single selected frame with its neighbour in playback order.

        Args:
            direction: -1 to play earlier, +1 to play later

        Returns:
            True if two frames exchanged their sequence order
        """
        if direction not in (-1, 1):
            return False

        selected = self.editor.selected_ids
        if len(selected) != 1:
            return False

        frame = self.editor.get_frame(next(iter(selected)))
        if frame is None or not frame.active:
            return False

        ordered = self.ordered_frames()
        i = next(k for k, f in enumerate(ordered) if f is frame)
        j = i + direction
        if not 0 <= j < len(ordered):
            return False

        other = ordered[j]
        frame.sequence_order, other.sequence_order = other.sequence_order, frame.sequence_order
        logger.debug("Swapped sequence order of frames %d and %d", frame.id, other.id)

        self.editor.notify_sequence_changed()
        return True

    def reset_order(self):
        for frame in self.editor.frames:
            frame.sequence_order = frame.id
        self.editor.notify_sequence_changed()
