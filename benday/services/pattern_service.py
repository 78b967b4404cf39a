from __future__ import annotations

from typing import Tuple

import numpy as np

from benday.models.canvas_model import (
    BRAILLE_HEIGHT,
    BRAILLE_WIDTH,
    GRAY,
    TRANSPARENT,
    WHITE,
    CanvasMeasure,
)


class PatternService:
    def default_canvas(
        self, width: int, height: int, padding_x: int, padding_y: int, unpadded: bool
    ) -> np.ndarray:
        """
        Шаблон «пустого» холста: прозрачный фон и точки ячеек шахматкой (белый/серый).
        В режиме без отступов шаг ячейки 2x4 и справа/снизу остаётся прозрачная полоса 1 px.
        Возвращает массив (height, width, 4) uint8.
        """
        step_w, step_h = self._cell_step(padding_x, padding_y, unpadded)
        guard = 1 if unpadded else 0
        chars_x = max(0, (width - guard) // step_w)
        chars_y = max(0, (height - guard) // step_h)

        ys = np.arange(height)
        xs = np.arange(width)
        cell_y, off_y = ys // step_h, ys % step_h
        cell_x, off_x = xs // step_w, xs % step_w

        in_dot_y = (off_y < BRAILLE_HEIGHT) & (cell_y < chars_y)
        in_dot_x = (off_x < BRAILLE_WIDTH) & (cell_x < chars_x)
        in_dot = in_dot_y[:, None] & in_dot_x[None, :]
        white = ((cell_y[:, None] + cell_x[None, :]) % 2) == 0

        canvas = np.zeros((height, width, 4), dtype=np.uint8)
        canvas[in_dot & white] = WHITE
        canvas[in_dot & ~white] = GRAY
        return canvas

    def dot_mask(self, measure: CanvasMeasure) -> np.ndarray:
        """
        Булева карта пикселей, попадающих в точки ячеек (без зазоров и защитной полосы).
        """
        height, width = measure.image_height, measure.image_width
        ys = np.arange(height)
        xs = np.arange(width)
        in_y = (ys % measure.braille_h < BRAILLE_HEIGHT) & (ys < measure.chars_y * measure.braille_h)
        in_x = (xs % measure.braille_w < BRAILLE_WIDTH) & (xs < measure.chars_x * measure.braille_w)
        return in_y[:, None] & in_x[None, :]

    def clear_padding(self, pixels: np.ndarray, padding_x: int, padding_y: int) -> np.ndarray:
        """
        Закрашивает зазоры между ячейками прозрачным (in-place, возвращает тот же массив).
        """
        step_w, step_h = self._cell_step(padding_x, padding_y, unpadded=False)
        height, width = pixels.shape[:2]
        gap_y = np.arange(height) % step_h >= BRAILLE_HEIGHT
        gap_x = np.arange(width) % step_w >= BRAILLE_WIDTH
        pixels[gap_y[:, None] | gap_x[None, :]] = TRANSPARENT
        return pixels

    def clear_guard(self, pixels: np.ndarray) -> np.ndarray:
        """
        Очищает защитные строку и столбец режима без отступов.
        """
        pixels[-1, :] = TRANSPARENT
        pixels[:, -1] = TRANSPARENT
        return pixels

    # ---------- Вспомогательные функции ----------
    def _cell_step(self, padding_x: int, padding_y: int, unpadded: bool) -> Tuple[int, int]:
        if unpadded:
            return BRAILLE_WIDTH, BRAILLE_HEIGHT
        return BRAILLE_WIDTH + padding_x, BRAILLE_HEIGHT + padding_y
