"""
Strip Compositor

Composes captured shots into a single photo strip:

    +-----------+
    |  shot 1   |   frames W x H, padding P all round
    |  shot 2   |
    |  ...      |
    | timestamp |   band of height T below the last frame
    +-----------+

Every frame is filtered and mirrored horizontally at draw time, so the
strip matches the mirrored live preview. The timestamp is drawn after
the frames and never inherits the photo filter.
"""

import io
import logging
from datetime import datetime
from typing import Optional, Sequence

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from .adjustments import apply_filter
from ..core.exceptions import CompositionError
from ..core.filters import FilterPreset
from ..core.palette import Background
from ..core.session import Shot
from ..core.settings import StripLayout

logger = logging.getLogger(__name__)


def format_timestamp(when: Optional[datetime]) -> str:
    """
    Format a session start time as ``MM/DD/YYYY, hh:mm:ss AM``.

    The layout is fixed and independent of the current locale.
    """
    if when is None:
        return ""
    hour = when.hour % 12 or 12
    marker = "AM" if when.hour < 12 else "PM"
    return (f"{when.month:02d}/{when.day:02d}/{when.year:04d}, "
            f"{hour:02d}:{when.minute:02d}:{when.second:02d} {marker}")


def decode_frame(data: bytes, index: int = 0) -> Image.Image:
    """
    Decode stored frame bytes into an RGB image.

    Raises:
        CompositionError: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert('RGB')
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise CompositionError(f"Could not decode shot {index + 1}: {e}",
                               {"index": index}) from e


class StripCompositor:
    """Render shots into a photo strip image."""

    def __init__(self, layout: Optional[StripLayout] = None):
        self.layout = layout or StripLayout()
        self._font = None

    @property
    def font(self):
        """Timestamp font, loaded on first use."""
        if self._font is None:
            self._font = self._load_font()
        return self._font

    def _load_font(self):
        family = self.layout.font_family
        size = self.layout.font_size
        for candidate in (f"{family}.ttf", f"{family}-Regular.ttf"):
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue
        logger.debug(f"Font {family} not found, using default font")
        return ImageFont.load_default(size=size)

    def render(self, shots: Sequence[Shot], preset: FilterPreset,
               background: Background,
               started_at: Optional[datetime]) -> Image.Image:
        """
        Compose the strip image.

        Args:
            shots: Captured shots, in capture order
            preset: Filter applied to every frame
            background: Canvas fill color
            started_at: Session start time rendered as the timestamp

        Returns:
            RGB image of size ``layout.canvas_size(len(shots))``
        """
        layout = self.layout
        size = layout.canvas_size(len(shots))
        canvas = Image.new('RGB', size, background.rgb)

        for index, shot in enumerate(shots):
            frame = decode_frame(shot.data, index)
            frame = frame.resize((layout.frame_width, layout.frame_height),
                                 Image.Resampling.BILINEAR)
            frame = apply_filter(frame, preset)
            frame = ImageOps.mirror(frame)
            canvas.paste(frame, layout.frame_origin(index))

        self._draw_timestamp(canvas, len(shots), started_at)
        return canvas

    def _draw_timestamp(self, canvas: Image.Image, count: int,
                        started_at: Optional[datetime]):
        text = format_timestamp(started_at)
        if not text:
            return
        draw = ImageDraw.Draw(canvas)
        x = self.layout.padding
        y = self.layout.timestamp_baseline(count)
        font = self.font
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((x, y), text, fill=self.layout.timestamp_color,
                      font=font, anchor="ls")
        else:
            # Bitmap fonts have no anchors; place the top one line above
            draw.text((x, y - self.layout.font_size), text,
                      fill=self.layout.timestamp_color, font=font)

    def encode(self, image: Image.Image) -> bytes:
        """
        Serialize a strip to PNG bytes.

        Raises:
            CompositionError: If encoding fails
        """
        buffer = io.BytesIO()
        try:
            image.save(buffer, format="PNG")
        except (OSError, ValueError) as e:
            raise CompositionError(f"Could not encode photo strip: {e}") from e
        return buffer.getvalue()

    def export(self, shots: Sequence[Shot], preset: FilterPreset,
               background: Background,
               started_at: Optional[datetime]) -> bytes:
        """Render and encode a strip in one step."""
        image = self.render(shots, preset, background, started_at)
        data = self.encode(image)
        logger.info(
            f"Exported strip {image.width}x{image.height} "
            f"({len(shots)} shots, {preset.display_name}, {background.value}, "
            f"{len(data)} bytes)"
        )
        return data
