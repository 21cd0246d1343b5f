"""
Capture Session

The in-memory record of one run of the capture sequence.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .exceptions import CaptureError


class Phase(Enum):
    """Capture sequence phases."""
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    CAPTURING = "capturing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Shot:
    """
    A single captured frame.

    The encoded image bytes are kept exactly as the camera delivered
    them; filters and mirroring are applied only when composing.
    """
    data: bytes
    taken_at: datetime


@dataclass
class CaptureSession:
    """
    State of a capture session.

    Shots are append-only while the session runs and never exceed
    ``shot_count``. ``started_at`` is stamped once, when the first
    countdown begins, and cleared only by ``discard``.
    """
    shot_count: int = 4
    shots: List[Shot] = field(default_factory=list)
    started_at: Optional[datetime] = None
    countdown_value: Optional[int] = None
    phase: Phase = Phase.IDLE

    @property
    def is_full(self) -> bool:
        return len(self.shots) >= self.shot_count

    @property
    def is_running(self) -> bool:
        return self.phase in (Phase.COUNTING_DOWN, Phase.CAPTURING)

    def stamp_start(self, when: datetime) -> None:
        """Record the session start time. Only allowed once."""
        if self.started_at is not None:
            raise RuntimeError("Session start time is already set")
        self.started_at = when

    def append(self, shot: Shot) -> None:
        """Append a captured shot."""
        if self.is_full:
            raise CaptureError(
                "Session already holds all shots",
                {"shot_count": self.shot_count}
            )
        self.shots.append(shot)

    def discard(self) -> None:
        """Drop all shots and return to idle."""
        self.shots.clear()
        self.started_at = None
        self.countdown_value = None
        self.phase = Phase.IDLE
