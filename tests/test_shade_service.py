"""Tests for sample shade classification."""
import numpy as np

from benday.models.canvas_model import GRAY, INK, WHITE, ShadeType
from benday.services.shade_service import shade_type, shade_types


def test_transparent_threshold():
    assert shade_type((0, 0, 0, 0)) is ShadeType.TRANSPARENT
    assert shade_type((0, 0, 0, 84)) is ShadeType.TRANSPARENT
    assert shade_type((0, 0, 0, 85)) is ShadeType.SHADED


def test_non_grayscale():
    assert shade_type((255, 0, 0, 255)) is ShadeType.NON_GRAYSCALE
    assert shade_type((200, 224, 200, 255)) is ShadeType.NON_GRAYSCALE
    assert shade_type((200, 223, 200, 255)) is ShadeType.UNSHADED


def test_brightness_relative_to_alpha():
    assert shade_type((85, 85, 85, 255)) is ShadeType.SHADED
    assert shade_type((170, 170, 170, 255)) is ShadeType.UNSHADED
    assert shade_type((0, 0, 0, 128)) is ShadeType.SHADED
    assert shade_type((100, 110, 100, 255)) is ShadeType.SHADED


def test_palette_colors():
    assert shade_type(WHITE) is ShadeType.UNSHADED
    assert shade_type(GRAY) is ShadeType.UNSHADED
    assert shade_type(INK) is ShadeType.SHADED


def test_vectorized_matches_scalar():
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(48, 48, 4), dtype=np.uint8)
    codes = shade_types(pixels)
    assert codes.shape == (48, 48)
    for y in range(48):
        for x in range(48):
            assert codes[y, x] == shade_type(pixels[y, x])
