"""
Tests for photo strip composition.

Frames are solid or two-tone PNGs at the exact frame size, so pixel
positions on the canvas can be checked without resampling blur.
"""

import io
import unittest
from datetime import datetime

from PIL import Image

from puffybooth.core.exceptions import CompositionError
from puffybooth.core.filters import FilterPreset
from puffybooth.core.palette import Background
from puffybooth.core.session import Shot
from puffybooth.image.compositor import StripCompositor, decode_frame, format_timestamp

STARTED = datetime(2025, 3, 7, 14, 5, 9)


def encode(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def solid_shot(color) -> Shot:
    return Shot(data=encode(Image.new('RGB', (200, 150), color)), taken_at=STARTED)


def split_shot(left, right) -> Shot:
    image = Image.new('RGB', (200, 150), left)
    image.paste(right, (100, 0, 200, 150))
    return Shot(data=encode(image), taken_at=STARTED)


class TestFormatTimestamp(unittest.TestCase):

    def test_afternoon(self):
        self.assertEqual(format_timestamp(STARTED), "03/07/2025, 02:05:09 PM")

    def test_midnight_and_noon(self):
        self.assertEqual(format_timestamp(datetime(2024, 12, 31, 0, 0, 0)),
                         "12/31/2024, 12:00:00 AM")
        self.assertEqual(format_timestamp(datetime(2024, 1, 2, 12, 30, 5)),
                         "01/02/2024, 12:30:05 PM")

    def test_morning(self):
        self.assertEqual(format_timestamp(datetime(2025, 10, 9, 9, 8, 7)),
                         "10/09/2025, 09:08:07 AM")

    def test_missing(self):
        self.assertEqual(format_timestamp(None), "")


class TestStripLayout(unittest.TestCase):

    def setUp(self):
        self.compositor = StripCompositor()
        self.colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]
        self.shots = [solid_shot(color) for color in self.colors]

    def test_canvas_size(self):
        for count in range(0, 5):
            image = self.compositor.render(self.shots[:count], FilterPreset.NONE,
                                           Background.WHITE, STARTED)
            self.assertEqual(image.size, (240, 150 * count + 20 * (count + 1) + 30))

    def test_frames_in_capture_order(self):
        image = self.compositor.render(self.shots, FilterPreset.NONE,
                                       Background.WHITE, STARTED)
        for index, color in enumerate(self.colors):
            x, y = 20 + 100, 20 + index * 170 + 75
            self.assertEqual(image.getpixel((x, y)), color)

    def test_frame_edges(self):
        image = self.compositor.render(self.shots[:1], FilterPreset.NONE,
                                       Background.WHITE, None)
        self.assertEqual(image.getpixel((20, 20)), (255, 0, 0))
        self.assertEqual(image.getpixel((219, 169)), (255, 0, 0))
        self.assertEqual(image.getpixel((19, 20)), (255, 255, 255))
        self.assertEqual(image.getpixel((220, 169)), (255, 255, 255))
        self.assertEqual(image.getpixel((20, 170)), (255, 255, 255))

    def test_background_fill(self):
        image = self.compositor.render(self.shots, FilterPreset.NONE,
                                       Background.PINK, STARTED)
        self.assertEqual(image.getpixel((5, 5)), (255, 192, 203))
        self.assertEqual(image.getpixel((235, 100)), (255, 192, 203))

    def test_frames_are_mirrored(self):
        shot = split_shot((255, 0, 0), (0, 0, 255))
        image = self.compositor.render([shot], FilterPreset.NONE,
                                       Background.WHITE, None)
        self.assertEqual(image.getpixel((30, 90)), (0, 0, 255))
        self.assertEqual(image.getpixel((210, 90)), (255, 0, 0))

    def test_frames_scaled_to_frame_size(self):
        small = Shot(data=encode(Image.new('RGB', (64, 48), (10, 200, 10))),
                     taken_at=STARTED)
        image = self.compositor.render([small], FilterPreset.NONE,
                                       Background.BLACK, None)
        self.assertEqual(image.getpixel((21, 21)), (10, 200, 10))
        self.assertEqual(image.getpixel((218, 168)), (10, 200, 10))


class TestTimestamp(unittest.TestCase):

    def setUp(self):
        self.compositor = StripCompositor()
        self.shots = [solid_shot((90, 90, 90))] * 4

    def band(self, image):
        return image.crop((0, 700, 240, 730))

    def test_timestamp_drawn_in_band(self):
        image = self.compositor.render(self.shots, FilterPreset.NONE,
                                       Background.WHITE, STARTED)
        colors = self.band(image).getcolors(maxcolors=10000)
        self.assertGreater(len(colors), 1)

    def test_no_timestamp_without_start_time(self):
        image = self.compositor.render(self.shots, FilterPreset.NONE,
                                       Background.WHITE, None)
        self.assertEqual(self.band(image).getcolors(), [(240 * 30, (255, 255, 255))])

    def test_timestamp_not_filtered(self):
        """Text keeps its accent color even under a grayscale filter."""
        image = self.compositor.render(self.shots, FilterPreset.GRAYSCALE,
                                       Background.WHITE, STARTED)
        band = self.band(image)
        warm = [c for _, c in band.getcolors(maxcolors=10000) if c[0] - c[2] > 50]
        self.assertTrue(warm)


class TestExport(unittest.TestCase):

    def setUp(self):
        self.compositor = StripCompositor()
        self.shots = [split_shot((200, 50, 50), (40, 120, 220)) for _ in range(4)]

    def test_export_is_png(self):
        data = self.compositor.export(self.shots, FilterPreset.VINTAGE,
                                      Background.BLUE, STARTED)
        self.assertTrue(data.startswith(b"\x89PNG\r\n\x1a\n"))

    def test_export_is_deterministic(self):
        args = (self.shots, FilterPreset.OLD, Background.PURPLE, STARTED)
        self.assertEqual(self.compositor.export(*args), self.compositor.export(*args))

    def test_filter_changes_pixels_only(self):
        plain = self.compositor.render(self.shots, FilterPreset.NONE,
                                       Background.WHITE, STARTED)
        sepia = self.compositor.render(self.shots, FilterPreset.SEPIA,
                                       Background.WHITE, STARTED)
        self.assertEqual(plain.size, sepia.size)
        self.assertNotEqual(plain.tobytes(), sepia.tobytes())
        # Background is outside every frame and stays unfiltered
        self.assertEqual(sepia.getpixel((5, 5)), (255, 255, 255))

    def test_undecodable_frame(self):
        shots = self.shots[:2] + [Shot(data=b"\x00garbage", taken_at=STARTED)]
        with self.assertRaises(CompositionError) as ctx:
            self.compositor.render(shots, FilterPreset.NONE, Background.WHITE, STARTED)
        self.assertEqual(ctx.exception.details["index"], 2)


class TestDecodeFrame(unittest.TestCase):

    def test_converts_to_rgb(self):
        data = encode(Image.new('L', (10, 10), 128))
        image = decode_frame(data)
        self.assertEqual(image.mode, 'RGB')
        self.assertEqual(image.getpixel((0, 0)), (128, 128, 128))


if __name__ == '__main__':
    unittest.main()
