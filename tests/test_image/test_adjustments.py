"""
Tests for pixel-level filter adjustments.
"""

import unittest

import numpy as np
from PIL import Image

from puffybooth.core.filters import FilterPreset
from puffybooth.image import adjustments
from puffybooth.image.adjustments import apply_filter, to_float, to_image


def gradient_image() -> Image.Image:
    """Small image with a spread of colors."""
    x = np.linspace(0, 255, 32, dtype=np.float32)
    r = np.tile(x, (24, 1))
    g = np.tile(x[::-1], (24, 1))
    b = np.tile(np.linspace(40, 200, 24, dtype=np.float32)[:, None], (1, 32))
    data = np.stack([r, g, b], axis=-1).astype(np.uint8)
    return Image.fromarray(data)


def max_diff(a: Image.Image, b: Image.Image) -> int:
    return int(np.abs(np.asarray(a, dtype=np.int16) - np.asarray(b, dtype=np.int16)).max())


class TestColorAdjustments(unittest.TestCase):

    def setUp(self):
        self.image = gradient_image()
        self.data = to_float(self.image)

    def test_identity_amounts(self):
        for func, amount in [
            (adjustments.contrast, 100),
            (adjustments.brightness, 100),
            (adjustments.saturate, 100),
            (adjustments.sepia, 0),
            (adjustments.hue_rotate, 0),
        ]:
            with self.subTest(func=func.__name__):
                result = to_image(func(self.data, amount))
                self.assertLessEqual(max_diff(result, self.image), 1)

    def test_zero_contrast_is_mid_grey(self):
        result = np.asarray(to_image(adjustments.contrast(self.data, 0)))
        self.assertTrue(np.all(result == 128))

    def test_brightness_scales(self):
        image = Image.new('RGB', (2, 2), (200, 100, 50))
        result = to_image(adjustments.brightness(to_float(image), 50))
        self.assertEqual(result.getpixel((0, 0)), (100, 50, 25))

    def test_brightness_clamps(self):
        image = Image.new('RGB', (2, 2), (200, 100, 50))
        result = to_image(adjustments.brightness(to_float(image), 200))
        self.assertEqual(result.getpixel((0, 0)), (255, 200, 100))

    def test_full_desaturation(self):
        result = np.asarray(to_image(adjustments.saturate(self.data, 0)), dtype=np.int16)
        self.assertLessEqual(np.abs(result[..., 0] - result[..., 1]).max(), 1)
        self.assertLessEqual(np.abs(result[..., 1] - result[..., 2]).max(), 1)

    def test_full_sepia_on_white(self):
        image = Image.new('RGB', (2, 2), (255, 255, 255))
        result = to_image(adjustments.sepia(to_float(image), 100))
        self.assertEqual(result.getpixel((0, 0)), (255, 255, 239))

    def test_hue_rotate_preserves_grey(self):
        image = Image.new('RGB', (2, 2), (120, 120, 120))
        result = to_image(adjustments.hue_rotate(to_float(image), 90))
        for channel in result.getpixel((0, 0)):
            self.assertAlmostEqual(channel, 120, delta=1)

    def test_hue_rotate_shifts_color(self):
        image = Image.new('RGB', (2, 2), (200, 40, 40))
        result = to_image(adjustments.hue_rotate(to_float(image), 120))
        r, g, b = result.getpixel((0, 0))
        self.assertGreater(g, r)


class TestBlur(unittest.TestCase):

    def test_zero_radius_is_copy(self):
        image = gradient_image()
        result = adjustments.blur(image, 0)
        self.assertIsNot(result, image)
        self.assertEqual(result.tobytes(), image.tobytes())

    def test_blur_softens_edges(self):
        image = Image.new('RGB', (20, 20), (0, 0, 0))
        image.paste((255, 255, 255), (10, 0, 20, 20))
        result = adjustments.blur(image, 1)
        r, _, _ = result.getpixel((9, 10))
        self.assertGreater(r, 0)
        self.assertLess(r, 255)


class TestApplyFilter(unittest.TestCase):

    def setUp(self):
        self.image = gradient_image()

    def test_no_filter_returns_copy(self):
        result = apply_filter(self.image, FilterPreset.NONE)
        self.assertIsNot(result, self.image)
        self.assertEqual(result.tobytes(), self.image.tobytes())

    def test_input_is_not_modified(self):
        before = self.image.tobytes()
        for preset in FilterPreset:
            apply_filter(self.image, preset)
        self.assertEqual(self.image.tobytes(), before)

    def test_every_preset_keeps_size(self):
        for preset in FilterPreset:
            with self.subTest(preset=preset.display_name):
                result = apply_filter(self.image, preset)
                self.assertEqual(result.size, self.image.size)
                self.assertEqual(result.mode, 'RGB')

    def test_presets_differ(self):
        rendered = {apply_filter(self.image, preset).tobytes() for preset in FilterPreset}
        self.assertEqual(len(rendered), len(FilterPreset))

    def test_grayscale_has_no_color(self):
        result = np.asarray(apply_filter(self.image, FilterPreset.GRAYSCALE), dtype=np.int16)
        self.assertLessEqual(np.abs(result[..., 0] - result[..., 2]).max(), 1)

    def test_sepia_is_warm(self):
        result = apply_filter(Image.new('RGB', (4, 4), (100, 100, 100)), FilterPreset.SEPIA)
        r, g, b = result.getpixel((0, 0))
        self.assertGreater(r, g)
        self.assertGreater(g, b)

    def test_accepts_non_rgb_input(self):
        result = apply_filter(Image.new('L', (4, 4), 80), FilterPreset.SOFT)
        self.assertEqual(result.mode, 'RGB')


if __name__ == '__main__':
    unittest.main()
