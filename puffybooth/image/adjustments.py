"""
Image Adjustments

Pixel-level implementations of the filter adjustments. Each color
adjustment works on a float RGB array in the 0..1 range and the result
is clamped after every step, so chains behave the same way as stacked
filter effects on screen.

Color matrices follow the standard filter-effect definitions:
- saturate: luminance-preserving desaturation (0% = grayscale)
- sepia: interpolation towards the sepia tone matrix
- hue-rotate: rotation around the luminance axis
"""

import math

import numpy as np
from PIL import Image, ImageFilter

from ..core.filters import AdjustmentKind, FilterPreset


def to_float(image: Image.Image) -> np.ndarray:
    """Convert an image to a float32 RGB array in 0..1."""
    if image.mode != 'RGB':
        image = image.convert('RGB')
    return np.asarray(image, dtype=np.float32) / 255.0


def to_image(data: np.ndarray) -> Image.Image:
    """Convert a float RGB array in 0..1 back to an 8-bit image."""
    data = np.clip(np.rint(data * 255.0), 0, 255).astype(np.uint8)
    return Image.fromarray(data)


def _apply_matrix(data: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    return np.clip(data @ matrix.T, 0.0, 1.0)


def contrast(data: np.ndarray, percent: float) -> np.ndarray:
    """Scale distance from mid grey. 100% leaves the image unchanged."""
    amount = percent / 100.0
    return np.clip((data - 0.5) * amount + 0.5, 0.0, 1.0)


def brightness(data: np.ndarray, percent: float) -> np.ndarray:
    """Multiply every channel. 100% leaves the image unchanged."""
    return np.clip(data * (percent / 100.0), 0.0, 1.0)


def saturate_matrix(percent: float) -> np.ndarray:
    s = percent / 100.0
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float32)


def saturate(data: np.ndarray, percent: float) -> np.ndarray:
    """Adjust saturation. 0% is full desaturation, 100% unchanged."""
    return _apply_matrix(data, saturate_matrix(percent))


def sepia_matrix(percent: float) -> np.ndarray:
    inv = 1.0 - min(max(percent / 100.0, 0.0), 1.0)
    return np.array([
        [0.393 + 0.607 * inv, 0.769 - 0.769 * inv, 0.189 - 0.189 * inv],
        [0.349 - 0.349 * inv, 0.686 + 0.314 * inv, 0.168 - 0.168 * inv],
        [0.272 - 0.272 * inv, 0.534 - 0.534 * inv, 0.131 + 0.869 * inv],
    ], dtype=np.float32)


def sepia(data: np.ndarray, percent: float) -> np.ndarray:
    """Blend towards sepia tone. 0% unchanged, 100% full sepia."""
    return _apply_matrix(data, sepia_matrix(percent))


def hue_rotate_matrix(degrees: float) -> np.ndarray:
    angle = math.radians(degrees)
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float32)


def hue_rotate(data: np.ndarray, degrees: float) -> np.ndarray:
    """Rotate hue by the given angle."""
    return _apply_matrix(data, hue_rotate_matrix(degrees))


def blur(image: Image.Image, radius: float) -> Image.Image:
    """Gaussian blur with the given standard deviation in pixels."""
    if radius <= 0:
        return image.copy()
    return image.filter(ImageFilter.GaussianBlur(radius=radius))


_COLOR_STEPS = {
    AdjustmentKind.CONTRAST: contrast,
    AdjustmentKind.BRIGHTNESS: brightness,
    AdjustmentKind.SATURATE: saturate,
    AdjustmentKind.SEPIA: sepia,
    AdjustmentKind.HUE_ROTATE: hue_rotate,
}


def apply_filter(image: Image.Image, preset: FilterPreset) -> Image.Image:
    """
    Apply a filter preset to an image.

    The input image is never modified; a new RGB image is returned.

    Args:
        image: Source image
        preset: Filter to apply

    Returns:
        Filtered copy of the image
    """
    if not preset.adjustments:
        return image.convert('RGB') if image.mode != 'RGB' else image.copy()

    data = to_float(image)
    for step in preset.adjustments:
        if step.kind == AdjustmentKind.BLUR:
            # Blur works on the 8-bit image, then the chain continues
            data = to_float(blur(to_image(data), step.amount))
        else:
            data = _COLOR_STEPS[step.kind](data, step.amount)
    return to_image(data)
