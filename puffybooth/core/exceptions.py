"""
Exception hierarchy for PuffyBooth.
"""

from typing import Any, Dict, Optional


class PuffyBoothError(Exception):
    """Base exception for all PuffyBooth errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class CaptureError(PuffyBoothError):
    """Raised when the camera is unavailable or a capture call fails."""
    pass


class CompositionError(PuffyBoothError):
    """Raised when a strip cannot be composed or encoded."""
    pass


class ExportError(PuffyBoothError):
    """Raised when an export sink cannot store the strip."""
    pass
