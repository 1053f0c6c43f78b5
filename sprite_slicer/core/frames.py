"""
Frame derivation

Turns divider positions plus the source image size into a raster-ordered
list of frames. Editable attributes survive a rebuild when a cell with the
same (row, col) existed before; ids are reassigned on every rebuild.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .utils import Rect


class FramePlacement(NamedTuple):
    """What a renderer needs to draw one frame: where to copy from and how far to shift it."""
    frame_id: int
    box: Tuple[int, int, int, int]
    offset_x: int
    offset_y: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.box[2] - self.box[0], self.box[3] - self.box[1])


@dataclass
class SliceFrame:
    id: int
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    offset_x: int = 0
    offset_y: int = 0
    active: bool = True
    sequence_order: float = 0

    @property
    def key(self) -> Tuple[int, int]:
        return (self.row, self.col)

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Integer crop box in source pixels."""
        left, top, right, bottom = self.rect
        return (round(left), round(top), round(right), round(bottom))

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height

    def placement(self) -> FramePlacement:
        return FramePlacement(self.id, self.box, self.offset_x, self.offset_y)

    def __repr__(self):
        state = "on" if self.active else "off"
        return f"SliceFrame(id={self.id}, cell=({self.row},{self.col}), {state}, order={self.sequence_order})"


def derive_frames(
    vertical: List[float],
    horizontal: List[float],
    image_width: int,
    image_height: int,
    previous: Optional[Iterable[SliceFrame]] = None
) -> List[SliceFrame]:
    """
    Build frames for the grid described by the divider positions.

    Args:
        vertical: Sorted vertical divider positions in (0, 1)
        horizontal: Sorted horizontal divider positions in (0, 1)
        image_width, image_height: Source image size in pixels
        previous: Frames from the last rebuild, matched by (row, col)

    Returns:
        Frames in row-major order with ids 0..n-1
    """
    x_points = [0.0] + list(vertical) + [1.0]
    y_points = [0.0] + list(horizontal) + [1.0]
    carried: Dict[Tuple[int, int], SliceFrame] = {f.key: f for f in (previous or [])}

    frames: List[SliceFrame] = []
    for row in range(len(y_points) - 1):
        for col in range(len(x_points) - 1):
            frame_id = len(frames)
            x = x_points[col] * image_width
            y = y_points[row] * image_height
            frame = SliceFrame(
                id=frame_id,
                row=row,
                col=col,
                x=x,
                y=y,
                width=x_points[col + 1] * image_width - x,
                height=y_points[row + 1] * image_height - y,
                sequence_order=frame_id,
            )

            old = carried.get(frame.key)
            if old is not None:
                frame.offset_x = old.offset_x
                frame.offset_y = old.offset_y
                frame.active = old.active
                frame.sequence_order = old.sequence_order

            frames.append(frame)

    return frames
