from dataclasses import dataclass, fields
from typing import Any, Mapping

MAX_GRID = 20
MIN_GAP = 0.01
HIT_TOLERANCE = 12
CLICK_THRESHOLD = 5
DEFAULT_FPS = 8


def clamp_grid(value: int) -> int:
    return max(1, min(MAX_GRID, int(value)))


@dataclass
class SlicerConfig:
    """Settings the editor and exporter start from."""
    rows: int = 1
    cols: int = 1
    fps: int = DEFAULT_FPS
    prompt: str = "A cute pixel art robot walking"
    hit_tolerance: int = HIT_TOLERANCE
    click_threshold: int = CLICK_THRESHOLD
    transparent_background: bool = True
    color_count: int = 256
    loop: int = 0

    def __post_init__(self):
        self.rows = clamp_grid(self.rows)
        self.cols = clamp_grid(self.cols)
        self.fps = max(1, int(self.fps))
        self.color_count = max(2, min(256, int(self.color_count)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SlicerConfig':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
