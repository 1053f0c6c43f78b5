import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .utils import ensure_rgba

logger = logging.getLogger(__name__)


class ImageLoadError(Exception):
    """Raised when a source image cannot be opened or decoded."""


class ImageLoader:

    @staticmethod
    def load_image(filepath: str) -> Image.Image:
        try:
            with Image.open(filepath) as img:
                img.load()
                return ensure_rgba(img.copy())
        except (OSError, UnidentifiedImageError) as e:
            logger.warning("Failed to load %s: %s", filepath, e)
            raise ImageLoadError(f"Failed to load image {Path(filepath).name}: {e}") from e


class SourceImage:
    """
    The sprite sheet being sliced.

    A source without pixel data is "pending": it reports zero size and is
    not ready, so every consumer treats it as nothing to do yet.
    """

    def __init__(self, image: Optional[Image.Image] = None, name: str = ""):
        self.image = ensure_rgba(image) if image is not None else None
        self.name = name

    @classmethod
    def pending(cls, name: str = "") -> 'SourceImage':
        return cls(None, name)

    @classmethod
    def from_file(cls, filepath: str) -> 'SourceImage':
        return cls(ImageLoader.load_image(filepath), Path(filepath).stem)

    @property
    def ready(self) -> bool:
        return self.image is not None

    @property
    def width(self) -> int:
        return self.image.width if self.image is not None else 0

    @property
    def height(self) -> int:
        return self.image.height if self.image is not None else 0

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def crop(self, box: Tuple[int, int, int, int]) -> Optional[Image.Image]:
        if self.image is None:
            return None
        return self.image.crop(box)

    def __repr__(self):
        if not self.ready:
            return f"SourceImage(name={self.name!r}, pending)"
        return f"SourceImage(name={self.name!r}, size={self.width}x{self.height})"
