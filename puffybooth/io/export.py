"""
Export sinks for the photo strip.

A sink takes the encoded strip and a filename and performs the
user-facing save.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..core.exceptions import ExportError

logger = logging.getLogger(__name__)


class ExportSink(ABC):
    """Destination for an exported strip."""

    @abstractmethod
    def save(self, data: bytes, filename: str) -> Optional[str]:
        """
        Store the strip.

        Args:
            data: Encoded image bytes
            filename: Suggested filename

        Returns:
            Path the strip was written to, or None if the user cancelled

        Raises:
            ExportError: If the strip could not be stored
        """
        pass


def write_file(data: bytes, path: Union[str, Path]) -> str:
    """
    Write bytes to a file, creating parent directories.

    Raises:
        ExportError: On any filesystem error
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise ExportError(f"Could not save {path.name}: {e}",
                          {"path": str(path)}) from e
    logger.info(f"Saved {len(data)} bytes to {path}")
    return str(path)


class FileExportSink(ExportSink):
    """Write strips into a fixed directory."""

    def __init__(self, directory: Union[str, Path, None] = None):
        self.directory = Path(directory) if directory else Path.home() / "Downloads"

    def save(self, data: bytes, filename: str) -> Optional[str]:
        return write_file(data, self.directory / filename)
