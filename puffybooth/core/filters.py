"""
Filter Presets

Each preset is a named, ordered chain of image adjustments. Filters are
applied at render and export time only; captured frames are never
modified.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class AdjustmentKind(Enum):
    """Pixel adjustments a filter can be built from."""
    CONTRAST = "contrast"      # percent
    BRIGHTNESS = "brightness"  # percent
    SATURATE = "saturate"      # percent
    SEPIA = "sepia"            # percent
    HUE_ROTATE = "hue_rotate"  # degrees
    BLUR = "blur"              # pixels


@dataclass(frozen=True)
class Adjustment:
    """A single adjustment step."""
    kind: AdjustmentKind
    amount: float


def _chain(*steps: Tuple[AdjustmentKind, float]) -> Tuple[Adjustment, ...]:
    return tuple(Adjustment(kind, amount) for kind, amount in steps)


class FilterPreset(Enum):
    """Available filters, in display order."""
    NONE = "No Filter"
    GRAYSCALE = "Grayscale"
    SEPIA = "Sepia"
    VINTAGE = "Vintage"
    SOFT = "Soft"
    OLD = "Old"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def adjustments(self) -> Tuple[Adjustment, ...]:
        """Adjustment chain, applied in order."""
        return _PRESET_CHAINS[self]

    def parameter(self, kind: AdjustmentKind) -> Optional[float]:
        """
        Get the amount of one adjustment in this preset.

        Returns:
            The amount, or None if the preset leaves it unchanged
        """
        for step in self.adjustments:
            if step.kind == kind:
                return step.amount
        return None

    @classmethod
    def from_name(cls, name: str) -> 'FilterPreset':
        """Look up a preset by display name or enum name."""
        for preset in cls:
            if name in (preset.value, preset.name):
                return preset
        raise ValueError(f"Unknown filter: {name}")


# Grayscale is full desaturation plus contrast and brightness boosts.
_PRESET_CHAINS = {
    FilterPreset.NONE: (),
    FilterPreset.GRAYSCALE: _chain(
        (AdjustmentKind.SATURATE, 0),
        (AdjustmentKind.CONTRAST, 150),
        (AdjustmentKind.BRIGHTNESS, 120),
    ),
    FilterPreset.SEPIA: _chain(
        (AdjustmentKind.SEPIA, 100),
    ),
    FilterPreset.VINTAGE: _chain(
        (AdjustmentKind.CONTRAST, 110),
        (AdjustmentKind.BRIGHTNESS, 110),
        (AdjustmentKind.SEPIA, 20),
    ),
    FilterPreset.SOFT: _chain(
        (AdjustmentKind.BRIGHTNESS, 105),
        (AdjustmentKind.CONTRAST, 95),
        (AdjustmentKind.SATURATE, 90),
    ),
    FilterPreset.OLD: _chain(
        (AdjustmentKind.CONTRAST, 70),
        (AdjustmentKind.BRIGHTNESS, 135),
        (AdjustmentKind.SATURATE, 75),
        (AdjustmentKind.SEPIA, 10),
        (AdjustmentKind.HUE_ROTATE, 5),
        (AdjustmentKind.BLUR, 1),
    ),
}
