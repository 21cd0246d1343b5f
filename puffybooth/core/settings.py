"""
PuffyBooth Settings

Timing of the capture sequence, geometry of the photo strip and the
user-facing preferences that are persisted between runs.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SequenceTiming:
    """
    Timing of the capture sequence.

    All delays are in milliseconds.
    """
    shot_count: int = 4
    countdown_start: int = 3
    tick_ms: int = 1000
    zero_hold_ms: int = 200
    inter_shot_ms: int = 2000

    @property
    def shot_duration_ms(self) -> int:
        """Time from the first countdown value to the shutter."""
        return self.countdown_start * self.tick_ms + self.zero_hold_ms

    @property
    def total_duration_ms(self) -> int:
        """Time from start to completion of a full sequence."""
        return (self.shot_count * self.shot_duration_ms
                + (self.shot_count - 1) * self.inter_shot_ms)


@dataclass(frozen=True)
class StripLayout:
    """
    Geometry of the composed photo strip.

    Frames are stacked vertically with uniform padding and a band
    below the last frame holds the timestamp.
    """
    frame_width: int = 200
    frame_height: int = 150
    padding: int = 20
    timestamp_height: int = 30
    timestamp_margin: int = 10
    timestamp_color: str = "#dd8502"
    font_size: int = 8
    font_family: str = "Orbitron"
    filename: str = "photo-strip.png"

    def canvas_size(self, count: int) -> Tuple[int, int]:
        """
        Get the canvas size for a strip.

        Args:
            count: Number of frames in the strip

        Returns:
            Tuple of (width, height) in pixels
        """
        width = self.frame_width + self.padding * 2
        height = (self.frame_height * count
                  + self.padding * (count + 1)
                  + self.timestamp_height)
        return width, height

    def frame_origin(self, index: int) -> Tuple[int, int]:
        """Top-left corner of the frame at the given capture index."""
        return self.padding, self.padding + index * (self.frame_height + self.padding)

    def timestamp_baseline(self, count: int) -> int:
        """Baseline of the timestamp text, just inside the reserved band."""
        return (self.frame_height * count
                + self.padding * (count + 1)
                + self.timestamp_margin)


@dataclass
class BoothSettings:
    """User preferences persisted between runs."""
    camera_index: int = 0
    capture_width: int = 640
    capture_height: int = 480
    preview_fps: int = 30
    filter_name: str = "No Filter"
    background_name: str = "white"
    export_directory: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BoothSettings':
        """
        Build settings from a dictionary, ignoring unknown keys.

        Values stored by QSettings may come back as strings, so numeric
        fields are coerced back to int.
        """
        defaults = cls()
        kwargs = {}
        for key, default in asdict(defaults).items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if isinstance(default, int):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    continue
            elif key == "export_directory":
                value = str(value) or None
            else:
                value = str(value)
            kwargs[key] = value
        return cls(**kwargs)
