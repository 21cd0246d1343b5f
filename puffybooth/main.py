#!/usr/bin/env python3
"""
PuffyBooth - Main Entry Point

Run with: python -m puffybooth.main
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from . import __version__

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure logging; the level comes from PUFFYBOOTH_LOG_LEVEL."""
    level_name = os.environ.get("PUFFYBOOTH_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point for PuffyBooth application."""
    setup_logging()
    try:
        # Enable high DPI scaling
        QApplication.setHighDpiScaleFactorRoundingPolicy(
            Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
        )

        app = QApplication(sys.argv)
        app.setApplicationName("PuffyBooth")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("PuffyBooth")

        # Import here so a broken Qt install fails inside the handler below
        from .ui.mainwindow import BoothWindow

        window = BoothWindow()
        window.show()

        return app.exec()
    except Exception:
        logger.exception("Fatal error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
