"""
Capture Sequencer

Runs the timed multi-shot capture sequence:

    Idle -> CountingDown (3, 2, 1, 0 + hold) -> Capturing
         -> (inter-shot delay) -> CountingDown ... -> Complete

Every wait is a one-shot timer on the scheduler, so the whole sequence
runs on one thread and can be driven by a virtual clock in tests.
"""

import logging
from typing import Callable, List, Optional

from .exceptions import CaptureError
from .scheduler import Scheduler
from .session import CaptureSession, Phase, Shot
from .settings import SequenceTiming
from ..camera.base import Camera

logger = logging.getLogger(__name__)


class CaptureSequencer:
    """
    Drives a camera through a fixed-length timed capture sequence.

    Features:
    - 3-2-1-0 countdown before each shot
    - Fixed spacing between shots
    - Abort to idle on capture failure
    - Cancellation between timer waits
    - Status, completion and error callbacks
    """

    def __init__(self, camera: Camera, scheduler: Scheduler,
                 timing: Optional[SequenceTiming] = None):
        self.camera = camera
        self.scheduler = scheduler
        self.timing = timing or SequenceTiming()
        self.session = CaptureSession(shot_count=self.timing.shot_count)

        # Bumped whenever a sequence ends; stale timers compare against it
        self._token = 0

        # Callbacks
        self._status_callbacks: List[Callable[[CaptureSession], None]] = []
        self._complete_callbacks: List[Callable[[CaptureSession], None]] = []
        self._error_callbacks: List[Callable[[CaptureError], None]] = []

    @property
    def phase(self) -> Phase:
        return self.session.phase

    def start(self) -> bool:
        """
        Start a new capture sequence.

        Returns:
            True if the sequence started, False if one is already
            running or a finished session has not been dismissed
        """
        if self.session.phase != Phase.IDLE:
            logger.warning(f"Start rejected, sequence is {self.session.phase.value}")
            return False

        self.session.discard()
        self.session.stamp_start(self.scheduler.now())
        logger.info(f"Capture session started at {self.session.started_at}")
        self._begin_countdown(self._token)
        return True

    def cancel(self) -> bool:
        """
        Abandon a running sequence.

        Pending timers are invalidated and partial shots dropped. No
        completion or error signal is emitted.

        Returns:
            True if a running sequence was cancelled
        """
        if not self.session.is_running:
            return False
        logger.info(f"Capture cancelled after {len(self.session.shots)} shot(s)")
        self._token += 1
        self.session.discard()
        self._notify_status()
        return True

    def fail(self, error: CaptureError) -> bool:
        """
        Abandon a running sequence because of a camera error.

        Returns:
            True if a running sequence was abandoned
        """
        if not self.session.is_running:
            return False
        self._abort(error)
        return True

    def reset(self) -> None:
        """Discard a finished session and return to idle."""
        if self.session.is_running:
            self.cancel()
            return
        self.session.discard()
        self._notify_status()

    # Sequence steps

    def _begin_countdown(self, token: int):
        if token != self._token:
            return
        self.session.phase = Phase.COUNTING_DOWN
        self.session.countdown_value = self.timing.countdown_start
        logger.debug(f"Countdown for shot {len(self.session.shots) + 1}")
        self._notify_status()
        self._schedule(self.timing.tick_ms, self._tick, token)

    def _tick(self, token: int):
        if token != self._token:
            return
        self.session.countdown_value -= 1
        self._notify_status()
        if self.session.countdown_value > 0:
            self._schedule(self.timing.tick_ms, self._tick, token)
        else:
            # Hold at zero so it is visible before the shutter
            self._schedule(self.timing.zero_hold_ms, self._capture, token)

    def _capture(self, token: int):
        if token != self._token:
            return
        self.session.phase = Phase.CAPTURING
        index = len(self.session.shots)
        logger.debug(f"Capturing shot {index + 1}")

        try:
            data = self.camera.capture_frame()
        except CaptureError as e:
            self._abort(e)
            return
        except Exception as e:
            self._abort(CaptureError(f"Capture failed: {e}", {"shot": index + 1}))
            return

        self.session.append(Shot(data=data, taken_at=self.scheduler.now()))
        self.session.countdown_value = None

        if self.session.is_full:
            self._complete()
        else:
            self._notify_status()
            self._schedule(self.timing.inter_shot_ms, self._begin_countdown, token)

    def _complete(self):
        self._token += 1
        self.session.phase = Phase.COMPLETE
        self.session.countdown_value = None
        logger.info(f"Capture session complete with {len(self.session.shots)} shots")
        self._notify_status()
        for callback in list(self._complete_callbacks):
            try:
                callback(self.session)
            except Exception:
                logger.exception("Completion callback failed")

    def _abort(self, error: CaptureError):
        logger.error(
            f"Capture aborted after {len(self.session.shots)} shot(s): {error}"
        )
        self._token += 1
        # Partial shots stay readable until the next start, but the
        # session never reaches Complete
        self.session.phase = Phase.IDLE
        self.session.countdown_value = None
        self._notify_status()
        for callback in list(self._error_callbacks):
            try:
                callback(error)
            except Exception:
                logger.exception("Error callback failed")

    def _schedule(self, delay_ms: int, step: Callable[[int], None], token: int):
        self.scheduler.call_later(delay_ms, lambda: step(token))

    # Callbacks

    def add_status_callback(self, callback: Callable[[CaptureSession], None]):
        """Register callback for every session change."""
        self._status_callbacks.append(callback)

    def add_complete_callback(self, callback: Callable[[CaptureSession], None]):
        """Register callback for a finished sequence."""
        self._complete_callbacks.append(callback)

    def add_error_callback(self, callback: Callable[[CaptureError], None]):
        """Register callback for an aborted sequence."""
        self._error_callbacks.append(callback)

    def remove_status_callback(self, callback: Callable[[CaptureSession], None]):
        if callback in self._status_callbacks:
            self._status_callbacks.remove(callback)

    def _notify_status(self):
        """Notify all callbacks of a session change."""
        for callback in list(self._status_callbacks):
            try:
                callback(self.session)
            except Exception:
                logger.exception("Status callback failed")
