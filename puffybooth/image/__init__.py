"""
PuffyBooth Image Processing Module

Contains image processing tools:
- Adjustments: Pixel-level filter effects
- Compositor: Photo strip rendering and PNG export
"""

from .adjustments import apply_filter
from .compositor import StripCompositor, format_timestamp, decode_frame

__all__ = [
    'apply_filter',
    'StripCompositor',
    'format_timestamp',
    'decode_frame',
]
