from .slicer_canvas import SlicerCanvas
from .preview_widget import PreviewWidget
from .pixmap import pil_to_pixmap

__all__ = [
    'SlicerCanvas',
    'PreviewWidget',
    'pil_to_pixmap',
]
