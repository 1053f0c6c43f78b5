import math
from typing import Tuple
from PIL import Image

Rect = Tuple[float, float, float, float]  # (left, top, right, bottom)


def ensure_rgba(image: Image.Image) -> Image.Image:
    if image.mode != 'RGBA':
        return image.convert('RGBA')
    return image


def create_background(size: Tuple[int, int], color: Tuple[int, int, int, int] = (255, 255, 255, 255)) -> Image.Image:
    return Image.new('RGBA', size, color)


def normalize_rect(start: Tuple[float, float], end: Tuple[float, float]) -> Rect:
    """Build a (left, top, right, bottom) rect from any two opposite corners."""
    x1, y1 = start
    x2, y2 = end
    return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


def spans_overlap(lo: float, hi: float, start: float, end: float) -> bool:
    """Does the span lo..hi overlap the half-open [start, end)? A zero-length span acts as a point."""
    if lo == hi:
        return start <= lo < end
    return lo < end and start < hi


def rects_intersect(box: Rect, cell: Rect) -> bool:
    # Cells own their left/top edges only, so a box ending on a grid line stops there
    return (spans_overlap(box[0], box[2], cell[0], cell[2])
            and spans_overlap(box[1], box[3], cell[1], cell[3]))


def distance(start: Tuple[float, float], end: Tuple[float, float]) -> float:
    return math.hypot(end[0] - start[0], end[1] - start[1])
