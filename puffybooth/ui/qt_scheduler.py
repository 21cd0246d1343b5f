"""
Scheduler backed by the Qt event loop.
"""

from typing import Callable

from PyQt6.QtCore import QTimer

from ..core.scheduler import Scheduler


class QtScheduler(Scheduler):
    """Run timer callbacks on the GUI thread via ``QTimer.singleShot``."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(int(delay_ms), callback)
