"""Tests for the default canvas pattern."""
import numpy as np
import pytest

from benday.models.canvas_model import GRAY, TRANSPARENT, WHITE
from benday.services.measure_service import measure
from benday.services.pattern_service import PatternService


@pytest.fixture
def patterns():
    return PatternService()


def test_padded_checkerboard(patterns):
    canvas = patterns.default_canvas(6, 12, 0, 2, unpadded=False)
    assert canvas.shape == (12, 6, 4)
    assert canvas.dtype == np.uint8
    assert tuple(canvas[0, 0]) == WHITE
    assert tuple(canvas[3, 1]) == WHITE
    assert tuple(canvas[0, 2]) == GRAY
    assert tuple(canvas[0, 4]) == WHITE
    assert tuple(canvas[6, 0]) == GRAY
    assert tuple(canvas[6, 2]) == WHITE
    # gap rows between character rows
    assert tuple(canvas[4, 0]) == TRANSPARENT
    assert tuple(canvas[11, 5]) == TRANSPARENT


def test_unpadded_has_transparent_guard(patterns):
    canvas = patterns.default_canvas(7, 9, 0, 2, unpadded=True)
    assert canvas.shape == (9, 7, 4)
    assert tuple(canvas[4, 0]) == GRAY
    assert tuple(canvas[4, 2]) == WHITE
    assert (canvas[:, 6] == 0).all()
    assert (canvas[8, :] == 0).all()


@pytest.mark.parametrize(
    "padding_x, padding_y, chars_x, chars_y, unpadded",
    [
        (0, 2, 3, 2, False),
        (1, 1, 4, 5, False),
        (3, 0, 1, 1, False),
        (0, 0, 5, 3, False),
        (0, 2, 3, 2, True),
        (0, 5, 2, 4, True),
    ],
)
def test_generated_canvas_measures_back(patterns, padding_x, padding_y, chars_x, chars_y, unpadded):
    if unpadded:
        width, height = chars_x * 2 + 1, chars_y * 4 + 1
    else:
        width, height = chars_x * (2 + padding_x), chars_y * (4 + padding_y)
    canvas = patterns.default_canvas(width, height, padding_x, padding_y, unpadded)
    m = measure(canvas.shape[1], canvas.shape[0], padding_x, padding_y)
    assert (m.chars_x, m.chars_y, m.unpadded) == (chars_x, chars_y, unpadded)


def test_dot_mask_covers_only_dots(patterns):
    m = measure(6, 12, 0, 2)
    mask = patterns.dot_mask(m)
    assert mask.shape == (12, 6)
    assert mask.sum() == 3 * 2 * 8
    assert not mask[4:6].any()
    canvas = patterns.default_canvas(6, 12, 0, 2, unpadded=False)
    assert (canvas[mask][:, 3] == 255).all()
    assert (canvas[~mask] == 0).all()


def test_clear_padding_keeps_dots(patterns):
    pixels = np.full((12, 8, 4), 200, dtype=np.uint8)
    patterns.clear_padding(pixels, 2, 2)
    assert (pixels[0:4, 0:2] == 200).all()
    assert (pixels[0:4, 2:4] == 0).all()
    assert (pixels[4:6, :] == 0).all()
    assert (pixels[6:10, 4:6] == 200).all()


def test_clear_guard(patterns):
    pixels = np.full((9, 7, 4), 200, dtype=np.uint8)
    patterns.clear_guard(pixels)
    assert (pixels[-1] == 0).all()
    assert (pixels[:, -1] == 0).all()
    assert (pixels[:8, :6] == 200).all()
