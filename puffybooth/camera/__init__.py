"""
PuffyBooth Camera Module

Camera capabilities used by the capture sequence and live preview:
- Camera: Abstract interface
- OpenCVCamera: Local video device via OpenCV
"""

from .base import Camera

__all__ = ['Camera']
