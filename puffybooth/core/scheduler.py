"""
Timer Scheduling

The capture sequence only ever waits on one-shot timers. ``Scheduler``
abstracts them so the same sequencer runs against Qt's event loop or
against a deterministic virtual clock in tests.
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple


class Scheduler(ABC):
    """One-shot timer scheduling plus a wall clock."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """
        Run a callback once after a delay.

        Args:
            delay_ms: Delay in milliseconds
            callback: Callable taking no arguments
        """
        pass

    def now(self) -> datetime:
        """Current wall-clock time."""
        return datetime.now()


class VirtualClock(Scheduler):
    """
    Scheduler driven by explicit time advancement.

    Callbacks due at the same instant run in the order they were
    scheduled. Callbacks may schedule further callbacks; those run
    within the same ``advance`` call if they fall due.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._start = start or datetime(2025, 1, 1, 12, 0, 0)
        self._elapsed_ms = 0
        self._queue: List[Tuple[int, int, Callable[[], None]]] = []
        self._counter = itertools.count()

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds advanced since creation."""
        return self._elapsed_ms

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        return len(self._queue)

    def now(self) -> datetime:
        return self._start + timedelta(milliseconds=self._elapsed_ms)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        if delay_ms < 0:
            raise ValueError("Delay must not be negative")
        due = self._elapsed_ms + delay_ms
        heapq.heappush(self._queue, (due, next(self._counter), callback))

    def advance(self, ms: int) -> None:
        """Move time forward, running every callback that falls due."""
        target = self._elapsed_ms + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self._elapsed_ms = due
            callback()
        self._elapsed_ms = target

    def run_until_idle(self, limit_ms: int = 3_600_000) -> int:
        """
        Run callbacks until none are pending.

        Args:
            limit_ms: Give up once this much virtual time has passed

        Returns:
            Virtual milliseconds that elapsed
        """
        started = self._elapsed_ms
        while self._queue:
            due = self._queue[0][0]
            if due - started > limit_ms:
                raise RuntimeError("Timers still pending after time limit")
            self.advance(due - self._elapsed_ms)
        return self._elapsed_ms - started
