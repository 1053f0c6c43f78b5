"""Sprite Slicer - Sprite Sheet Animator

Slice a sprite sheet into frames, fix per-frame jitter, reorder playback
and export the result as an animated GIF.
"""

__version__ = '1.0.0'

from . import core
from . import widgets

__all__ = ['core', 'widgets']
