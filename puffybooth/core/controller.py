"""
Booth Controller

Owns the booth state (capture session, filter and background choice,
last error) and exposes the user operations. Display surfaces register
a state callback and re-render from the snapshot they are given.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from PIL import Image

from .exceptions import CaptureError, CompositionError, ExportError
from .filters import FilterPreset
from .palette import Background
from .scheduler import Scheduler
from .sequencer import CaptureSequencer
from .session import CaptureSession, Phase, Shot
from .settings import SequenceTiming, StripLayout
from ..camera.base import Camera
from ..image.compositor import StripCompositor
from ..io.export import ExportSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoothState:
    """Snapshot handed to display surfaces on every change."""
    phase: Phase
    countdown_value: Optional[int]
    shots: Tuple[Shot, ...]
    started_at: Optional[datetime]
    filter: FilterPreset
    background: Background
    error: Optional[str] = None

    @property
    def is_capturing(self) -> bool:
        return self.phase in (Phase.COUNTING_DOWN, Phase.CAPTURING)

    @property
    def result_visible(self) -> bool:
        """The result view is shown only for a completed session."""
        return self.phase == Phase.COMPLETE


class BoothController:
    """
    Coordinates capture, filter selection and strip export.

    The session is only mutated by the sequencer; the compositor reads
    it once the session is complete.
    """

    def __init__(self, camera: Camera, scheduler: Scheduler,
                 timing: Optional[SequenceTiming] = None,
                 layout: Optional[StripLayout] = None,
                 preset: FilterPreset = FilterPreset.NONE,
                 background: Background = Background.WHITE):
        self.camera = camera
        self.sequencer = CaptureSequencer(camera, scheduler, timing)
        self.compositor = StripCompositor(layout)
        self._filter = preset
        self._background = background
        self._error: Optional[str] = None
        self._state_callbacks: List[Callable[[BoothState], None]] = []

        self.sequencer.add_status_callback(self._on_session_changed)
        self.sequencer.add_error_callback(self._on_capture_error)
        self.camera.add_error_callback(self._on_camera_error)

    @property
    def session(self) -> CaptureSession:
        return self.sequencer.session

    @property
    def state(self) -> BoothState:
        session = self.session
        return BoothState(
            phase=session.phase,
            countdown_value=session.countdown_value,
            shots=tuple(session.shots),
            started_at=session.started_at,
            filter=self._filter,
            background=self._background,
            error=self._error,
        )

    # User operations

    def start_capture(self) -> bool:
        """Start a capture sequence. Ignored while one is in progress."""
        if self.session.phase == Phase.IDLE:
            self._error = None
        return self.sequencer.start()

    def cancel_capture(self) -> bool:
        return self.sequencer.cancel()

    def select_filter(self, preset: Union[FilterPreset, str]):
        if isinstance(preset, str):
            preset = FilterPreset.from_name(preset)
        if preset != self._filter:
            self._filter = preset
            logger.debug(f"Filter set to {preset.display_name}")
            self._notify_state()

    def select_background(self, background: Union[Background, str]):
        if isinstance(background, str):
            background = Background.from_name(background)
        if background != self._background:
            self._background = background
            logger.debug(f"Background set to {background.value}")
            self._notify_state()

    def render_strip(self) -> Image.Image:
        """
        Render the strip for the result view.

        Raises:
            CompositionError: If the session is not complete or a frame
                cannot be decoded
        """
        self._require_complete()
        return self.compositor.render(
            self.session.shots, self._filter, self._background,
            self.session.started_at
        )

    def export_strip(self, sink: ExportSink) -> Optional[str]:
        """
        Compose the strip and hand it to an export sink.

        Failures leave the session untouched so the export can be
        retried.

        Returns:
            Path reported by the sink, or None if the user cancelled

        Raises:
            CompositionError: If the strip cannot be composed
            ExportError: If the sink cannot store it
        """
        try:
            self._require_complete()
            data = self.compositor.export(
                self.session.shots, self._filter, self._background,
                self.session.started_at
            )
            path = sink.save(data, self.compositor.layout.filename)
        except (CompositionError, ExportError) as e:
            logger.error(f"Export failed: {e}")
            self._error = e.message
            self._notify_state()
            raise
        if self._error is not None:
            self._error = None
            self._notify_state()
        return path

    def dismiss_result(self):
        """Close the result view and discard the session."""
        self.sequencer.reset()

    def clear_error(self):
        if self._error is not None:
            self._error = None
            self._notify_state()

    def _require_complete(self):
        if self.session.phase != Phase.COMPLETE:
            raise CompositionError(
                "No completed session to export",
                {"phase": self.session.phase.value}
            )

    # Event handlers

    def _on_session_changed(self, session: CaptureSession):
        self._notify_state()

    def _on_capture_error(self, error: CaptureError):
        self._error = error.message
        self._notify_state()

    def _on_camera_error(self, error: CaptureError):
        logger.error(f"Camera reported an error: {error}")
        # Abandoning a running sequence also reports through _on_capture_error
        if not self.sequencer.fail(error):
            self._error = error.message
            self._notify_state()

    # Callbacks

    def add_state_callback(self, callback: Callable[[BoothState], None]):
        """Register a display surface for state changes."""
        self._state_callbacks.append(callback)

    def remove_state_callback(self, callback: Callable[[BoothState], None]):
        if callback in self._state_callbacks:
            self._state_callbacks.remove(callback)

    def _notify_state(self):
        state = self.state
        for callback in list(self._state_callbacks):
            try:
                callback(state)
            except Exception:
                logger.exception("State callback failed")
