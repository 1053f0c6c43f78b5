"""
Grid divider model

Divider positions are stored normalized to (0, 1) so that the same grid
applies to any image size. Every mutation keeps each axis strictly
increasing with at least MIN_GAP between neighbours and the 0/1 edges.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import HIT_TOLERANCE, MIN_GAP, clamp_grid

logger = logging.getLogger(__name__)


class Axis(Enum):
    VERTICAL = 'vertical'
    HORIZONTAL = 'horizontal'


@dataclass(frozen=True)
class DividerTarget:
    """A single divider, identified by its axis and index on that axis."""
    axis: Axis
    index: int


class DividerModel:

    def __init__(self, rows: int = 1, cols: int = 1):
        self.vertical: List[float] = []
        self.horizontal: List[float] = []
        self.drag_target: Optional[DividerTarget] = None
        self.resize(rows, cols)

    @property
    def rows(self) -> int:
        return len(self.horizontal) + 1

    @property
    def cols(self) -> int:
        return len(self.vertical) + 1

    def positions(self, axis: Axis) -> List[float]:
        return self.vertical if axis is Axis.VERTICAL else self.horizontal

    def x_points(self) -> List[float]:
        return [0.0] + self.vertical + [1.0]

    def y_points(self) -> List[float]:
        return [0.0] + self.horizontal + [1.0]

    def resize(self, rows: int, cols: int) -> Tuple[int, int]:
        """Rebuild both axes as evenly spaced dividers; returns the clamped (rows, cols)."""
        rows = clamp_grid(rows)
        cols = clamp_grid(cols)
        self.vertical = [i / cols for i in range(1, cols)]
        self.horizontal = [i / rows for i in range(1, rows)]
        self.drag_target = None
        logger.debug("Grid resized to %dx%d", rows, cols)
        return rows, cols

    def has_divider(self, axis: Axis, index: int) -> bool:
        return 0 <= index < len(self.positions(axis))

    def begin_drag(self, axis: Axis, index: int) -> bool:
        if not self.has_divider(axis, index):
            return False
        self.drag_target = DividerTarget(axis, index)
        return True

    def update_drag(self, axis: Axis, index: int, proposed: float) -> Optional[float]:
        """Move a divider, clamped between its neighbours. Returns the stored position."""
        if not self.has_divider(axis, index):
            return None

        values = self.positions(axis)
        lower = (values[index - 1] if index > 0 else 0.0) + MIN_GAP
        upper = (values[index + 1] if index + 1 < len(values) else 1.0) - MIN_GAP

        position = max(lower, min(upper, proposed))
        values[index] = position
        return position

    def end_drag(self):
        self.drag_target = None

    def hit_test(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        tolerance: float = HIT_TOLERANCE
    ) -> Optional[DividerTarget]:
        """
        Find the divider under the pointer.

        Args:
            x, y: Pointer position in canvas pixels
            width, height: Canvas size in pixels
            tolerance: Maximum pixel distance from the line

        Returns:
            The first vertical divider in range, else the first horizontal one, else None
        """
        for index, position in enumerate(self.vertical):
            if abs(position * width - x) <= tolerance:
                return DividerTarget(Axis.VERTICAL, index)

        for index, position in enumerate(self.horizontal):
            if abs(position * height - y) <= tolerance:
                return DividerTarget(Axis.HORIZONTAL, index)

        return None

    def __repr__(self):
        return f"DividerModel(rows={self.rows}, cols={self.cols})"
