"""
Camera Preview Widget

Live mirrored camera view with the active filter, a countdown overlay
and a row of thumbnails for the shots taken so far.
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QSizePolicy
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QPainter, QColor
from PIL import ImageOps

from ..image_utils import pil_to_pixmap
from ...camera.base import Camera
from ...core.controller import BoothState
from ...core.filters import FilterPreset
from ...image.adjustments import apply_filter
from ...image.compositor import decode_frame
from ...core.exceptions import CompositionError

logger = logging.getLogger(__name__)

PREVIEW_WIDTH = 480
PREVIEW_HEIGHT = 360
THUMB_WIDTH = 100
THUMB_HEIGHT = 75


class CountdownLabel(QLabel):
    """Camera view that paints the countdown value on top."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumSize(PREVIEW_WIDTH, PREVIEW_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setStyleSheet("background-color: #222; border-radius: 8px;")
        self.countdown: Optional[int] = None

    def paintEvent(self, event):
        super().paintEvent(event)
        if self.countdown is None:
            return
        painter = QPainter(self)
        font = QFont()
        font.setPointSize(72)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor(255, 255, 255, 220))
        painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, str(self.countdown))
        painter.end()


class CameraPreviewWidget(QWidget):
    """Live preview of the camera feed."""

    def __init__(self, camera: Camera, fps: int = 30, parent=None):
        super().__init__(parent)
        self.camera = camera
        self._preset = FilterPreset.NONE
        self._shot_count = 0

        self._init_ui()

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, 1000 // max(1, fps)))
        self._timer.timeout.connect(self._update_frame)

    def _init_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.view = CountdownLabel()
        self.view.setText("Starting camera...")
        layout.addWidget(self.view, 1)

        self.thumbs_layout = QHBoxLayout()
        self.thumbs_layout.setSpacing(6)
        self.thumbs_layout.addStretch()
        self._thumb_labels = []
        layout.addLayout(self.thumbs_layout)

        self.setLayout(layout)

    def start(self):
        """Start polling the camera."""
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def set_filter(self, preset: FilterPreset):
        self._preset = preset

    def _update_frame(self):
        if not self.camera.is_open:
            return
        frame = self.camera.preview_frame()
        if frame is None:
            return
        frame.thumbnail((PREVIEW_WIDTH, PREVIEW_HEIGHT))
        frame = ImageOps.mirror(apply_filter(frame, self._preset))
        pixmap = pil_to_pixmap(frame).scaled(
            self.view.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        )
        self.view.setPixmap(pixmap)

    def render_state(self, state: BoothState):
        """Update overlay and thumbnails from a booth state snapshot."""
        self.view.countdown = state.countdown_value
        self.view.update()

        if state.filter != self._preset:
            self._preset = state.filter
            self._shot_count = -1  # re-filter thumbnails

        shots = state.shots if state.is_capturing else ()
        if len(shots) != self._shot_count:
            self._set_thumbnails(shots)

    def _set_thumbnails(self, shots):
        for label in self._thumb_labels:
            self.thumbs_layout.removeWidget(label)
            label.deleteLater()
        self._thumb_labels = []

        for index, shot in enumerate(shots):
            try:
                image = decode_frame(shot.data, index)
            except CompositionError as e:
                logger.warning(f"Skipping thumbnail: {e}")
                continue
            image = image.resize((THUMB_WIDTH, THUMB_HEIGHT))
            image = ImageOps.mirror(apply_filter(image, self._preset))
            label = QLabel()
            label.setPixmap(pil_to_pixmap(image))
            label.setToolTip(f"Preview {index + 1}")
            self.thumbs_layout.insertWidget(self.thumbs_layout.count() - 1, label)
            self._thumb_labels.append(label)
        self._shot_count = len(shots)
