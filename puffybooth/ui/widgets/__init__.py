"""
PuffyBooth UI Widgets

Custom widgets:
- CameraPreviewWidget: Live mirrored camera view with countdown overlay
"""

from .preview_widget import CameraPreviewWidget

__all__ = ['CameraPreviewWidget']
