from .config import SlicerConfig, MAX_GRID, MIN_GAP, HIT_TOLERANCE, CLICK_THRESHOLD, DEFAULT_FPS
from .dividers import Axis, DividerTarget, DividerModel
from .frames import SliceFrame, FramePlacement, derive_frames
from .image_source import ImageLoader, ImageLoadError, SourceImage
from .selection import SelectionEngine, InteractionMode, InteractionState
from .sequence import SequenceManager, playback_order
from .preview import PreviewScheduler
from .sheet_editor import SheetEditor
from .gif_builder import GifBuilder

__all__ = [
    'SlicerConfig',
    'MAX_GRID',
    'MIN_GAP',
    'HIT_TOLERANCE',
    'CLICK_THRESHOLD',
    'DEFAULT_FPS',
    'Axis',
    'DividerTarget',
    'DividerModel',
    'SliceFrame',
    'FramePlacement',
    'derive_frames',
    'ImageLoader',
    'ImageLoadError',
    'SourceImage',
    'SelectionEngine',
    'InteractionMode',
    'InteractionState',
    'SequenceManager',
    'playback_order',
    'PreviewScheduler',
    'SheetEditor',
    'GifBuilder',
]
