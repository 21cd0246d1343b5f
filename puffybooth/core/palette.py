"""
Background palette for the photo strip.
"""

from enum import Enum
from typing import Tuple


class Background(Enum):
    """Canvas fill colors offered in the result view."""
    WHITE = "white"
    BLACK = "black"
    PINK = "pink"
    BLUE = "blue"
    PURPLE = "purple"

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return _RGB[self]

    @property
    def hex(self) -> str:
        r, g, b = self.rgb
        return f"#{r:02x}{g:02x}{b:02x}"

    @classmethod
    def from_name(cls, name: str) -> 'Background':
        for background in cls:
            if name.lower() in (background.value, background.name.lower()):
                return background
        raise ValueError(f"Unknown background: {name}")


# Named web colors
_RGB = {
    Background.WHITE: (255, 255, 255),
    Background.BLACK: (0, 0, 0),
    Background.PINK: (255, 192, 203),
    Background.BLUE: (0, 0, 255),
    Background.PURPLE: (128, 0, 128),
}
