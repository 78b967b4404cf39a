"""Классификация сэмплов растра: прозрачный / цветной «комментарий» / светлый / тёмный.

Пороги считаются относительно альфы самого сэмпла, поэтому полупрозрачные и
сглаженные мазки классифицируются так же, как непрозрачные.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from benday.models.canvas_model import ShadeType


def shade_type(rgba: Sequence[int]) -> ShadeType:
    """Классифицирует один RGBA-сэмпл (8 бит на канал)."""
    r, g, b, a = (int(c) for c in rgba)

    if 3 * a < 0xFF:
        return ShadeType.TRANSPARENT

    # mean pairwise channel distance, scaled by 3 on both sides
    deviation = 2 * (max(r, g, b) - min(r, g, b))
    if 16 * deviation > 3 * 0xFF:
        return ShadeType.NON_GRAYSCALE

    # 3 channels * 2/3 brightness
    if r + g + b < 2 * a:
        return ShadeType.SHADED
    return ShadeType.UNSHADED


def shade_types(pixels: np.ndarray) -> np.ndarray:
    """Векторная версия `shade_type` для массива формы (..., 4).

    Returns:
        Массив `uint8` той же формы без последней оси со значениями `ShadeType`.
    """
    px = pixels.astype(np.int32)
    r, g, b, a = px[..., 0], px[..., 1], px[..., 2], px[..., 3]

    transparent = 3 * a < 0xFF
    deviation = 2 * (np.maximum(np.maximum(r, g), b) - np.minimum(np.minimum(r, g), b))
    non_grayscale = 16 * deviation > 3 * 0xFF
    shaded = (r + g + b) < 2 * a

    return np.select(
        [transparent, non_grayscale, shaded],
        [int(ShadeType.TRANSPARENT), int(ShadeType.NON_GRAYSCALE), int(ShadeType.SHADED)],
        default=int(ShadeType.UNSHADED),
    ).astype(np.uint8)
