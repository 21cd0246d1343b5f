"""
PuffyBooth Core Module

Contains the capture logic and booth state:
- Settings: Sequence timing, strip layout, user preferences
- Filters and palette: Named presets and background colors
- Session: Captured shots and phase
- Scheduler: Timer abstraction and virtual clock
- Sequencer: Timed capture state machine
- Controller: Booth state and user operations
"""

from .exceptions import PuffyBoothError, CaptureError, CompositionError, ExportError
from .settings import SequenceTiming, StripLayout, BoothSettings
from .filters import AdjustmentKind, Adjustment, FilterPreset
from .palette import Background
from .session import Phase, Shot, CaptureSession
from .scheduler import Scheduler, VirtualClock

__all__ = [
    'PuffyBoothError', 'CaptureError', 'CompositionError', 'ExportError',
    'SequenceTiming', 'StripLayout', 'BoothSettings',
    'AdjustmentKind', 'Adjustment', 'FilterPreset',
    'Background',
    'Phase', 'Shot', 'CaptureSession',
    'Scheduler', 'VirtualClock',
]
