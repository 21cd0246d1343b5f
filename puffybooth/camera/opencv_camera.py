"""
OpenCV camera

Captures frames from a local video device through ``cv2.VideoCapture``.
"""

import io
import logging
from typing import Optional

import cv2
import numpy as np
from PIL import Image

from .base import Camera
from ..core.exceptions import CaptureError

logger = logging.getLogger(__name__)


class OpenCVCamera(Camera):
    """Camera backed by an OpenCV video device."""

    def __init__(self, index: int = 0, width: int = 640, height: int = 480,
                 jpeg_quality: int = 92):
        super().__init__()
        self.index = index
        self.width = width
        self.height = height
        self.jpeg_quality = jpeg_quality
        self._cap = None
        self._failed = False

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    def open(self) -> None:
        if self.is_open:
            return
        cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            cap.release()
            raise CaptureError(
                "No camera device accessible. Please connect your camera "
                "or check camera permissions.",
                {"index": self.index}
            )
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._cap = cap
        self._failed = False
        logger.info(f"Opened camera {self.index} at {self.width}x{self.height}")

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info(f"Closed camera {self.index}")

    def _read(self) -> np.ndarray:
        if not self.is_open:
            raise CaptureError("Camera is not open", {"index": self.index})
        ret, frame = self._cap.read()
        if not ret or frame is None:
            raise CaptureError("Failed to read a frame from the camera",
                               {"index": self.index})
        # OpenCV delivers BGR
        return np.ascontiguousarray(frame[:, :, ::-1])

    def capture_frame(self) -> bytes:
        image = Image.fromarray(self._read())
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=self.jpeg_quality)
        return buffer.getvalue()

    def preview_frame(self) -> Optional[Image.Image]:
        try:
            frame = self._read()
        except CaptureError as e:
            # Report a lost device once rather than on every poll
            if not self._failed:
                self._failed = True
                logger.error(f"Camera preview failed: {e}")
                self._notify_error(e)
            return None
        self._failed = False
        return Image.fromarray(frame)
