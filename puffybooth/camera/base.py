"""
Base class for cameras.

The capture sequence only needs ``capture_frame``; the live preview
additionally polls ``preview_frame``. Errors the device reports outside
of a capture call are delivered through error callbacks.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from PIL import Image

from ..core.exceptions import CaptureError

logger = logging.getLogger(__name__)


class Camera(ABC):
    """
    Abstract base class for cameras.

    Implementations must provide:
    - open/close
    - capture_frame
    - preview_frame
    """

    def __init__(self):
        self._error_callbacks: List[Callable[[CaptureError], None]] = []

    @abstractmethod
    def open(self) -> None:
        """
        Open the device.

        Raises:
            CaptureError: If the device is unavailable or access is denied
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the device."""
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    def capture_frame(self) -> bytes:
        """
        Take a photo.

        Returns:
            Encoded image bytes (JPEG or PNG)

        Raises:
            CaptureError: If the capture fails
        """
        pass

    @abstractmethod
    def preview_frame(self) -> Optional[Image.Image]:
        """Latest frame for the live view, or None if none is available."""
        pass

    def add_error_callback(self, callback: Callable[[CaptureError], None]):
        """Register callback for asynchronous device errors."""
        self._error_callbacks.append(callback)

    def remove_error_callback(self, callback: Callable[[CaptureError], None]):
        """Remove an error callback."""
        if callback in self._error_callbacks:
            self._error_callbacks.remove(callback)

    def _notify_error(self, error: CaptureError):
        """Notify all callbacks of a device error."""
        for callback in list(self._error_callbacks):
            try:
                callback(error)
            except Exception:
                logger.exception("Camera error callback failed")
