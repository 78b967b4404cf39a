"""Операции над файлом холста: декодирование в сетку Брайля и правка растра.

Принципы:
- SRP: класс отвечает за чтение/запись растра и применение операций; геометрия,
  классификация и шаблон вынесены в отдельные сервисы.
- Каждая операция заново открывает файл и измеряет его: растр мог измениться
  между вызовами, в памяти ничего не кэшируется.
- Запись «всё или ничего»: новый растр целиком строится в памяти, кодируется во
  временный файл рядом с целевым и только затем подменяет его (`os.replace`).
"""
from __future__ import annotations

import io
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator, Optional, Tuple

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from benday.config import settings
from benday.models.canvas_model import (
    BRAILLE_HEIGHT,
    BRAILLE_WIDTH,
    INK,
    CanvasMeasure,
    GlyphGrid,
    PaddingSpec,
    ShadeType,
)
from benday.models.errors import (
    AmbiguousCanvasError,
    CanvasDecodeError,
    CanvasError,
    CanvasWriteError,
    FileExistsRefusal,
    ImportDataError,
)
from benday.services.braille_codec import decode_cell, dot_bit, encode_cell
from benday.services.measure_service import canvas_file_name, measure, parse_padding_spec
from benday.services.pattern_service import PatternService
from benday.services.shade_service import shade_types
from benday.services.write_guard import ensure_settled


def _dot_offsets() -> Iterator[Tuple[int, int]]:
    for row in range(BRAILLE_HEIGHT):
        for column in range(BRAILLE_WIDTH):
            yield row, column


def _dot_view(pixels: np.ndarray, chars: Tuple[int, int], step: Tuple[int, int], row: int, column: int) -> np.ndarray:
    """Срез (chars_y, chars_x, ...) с одной и той же точкой каждой ячейки."""
    chars_x, chars_y = chars
    step_w, step_h = step
    return pixels[row:chars_y * step_h:step_h, column:chars_x * step_w:step_w]


class CanvasService:
    def __init__(self, debounce_seconds: Optional[float] = None, patterns: Optional[PatternService] = None) -> None:
        self._debounce_seconds = settings.write_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._patterns = patterns or PatternService()

    # ---- Reading ----
    def load_pixels(self, file_path: str | Path) -> np.ndarray:
        """Загружает растр с диска в массив (height, width, 4) uint8 RGBA.

        Raises:
            CanvasDecodeError: если файла нет или он не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise CanvasDecodeError("File does not exist.")

        try:
            with Image.open(path) as img:
                pixels = np.array(img.convert("RGBA"), dtype=np.uint8)
        # Pillow reports broken chunks found while loading as SyntaxError
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise CanvasDecodeError(f"Error reading the image: {exc}") from exc
        return pixels

    def open_canvas(self, file_path: str | Path) -> Tuple[np.ndarray, PaddingSpec, CanvasMeasure]:
        """Разбирает имя файла, читает растр и измеряет его."""
        padding = parse_padding_spec(file_path)
        pixels = self.load_pixels(file_path)
        height, width = pixels.shape[:2]
        return pixels, padding, measure(width, height, padding.x, padding.y)

    def decode(self, file_path: str | Path) -> GlyphGrid:
        """Переводит растр в сетку символов Брайля (затемнённая точка = бит 1)."""
        pixels, _padding, m = self.open_canvas(file_path)
        shades = shade_types(pixels)

        masks = np.zeros((m.chars_y, m.chars_x), dtype=np.int32)
        for row, column in _dot_offsets():
            dots = _dot_view(shades, (m.chars_x, m.chars_y), (m.braille_w, m.braille_h), row, column)
            masks |= (dots == ShadeType.SHADED).astype(np.int32) << dot_bit(row, column)

        logger.debug("Decoded {} into {}x{} glyphs", file_path, m.chars_x, m.chars_y)
        return [[encode_cell(int(mask)) for mask in line] for line in masks]

    # ---- Mutating operations ----
    def toggle_padding(self, file_path: str | Path) -> CanvasMeasure:
        """Переключает холст между режимами с отступами и без.

        Точки каждой ячейки копируются без изменения цвета (включая цветные
        комментарии); зазоры рисуются заново, защитная полоса очищается.

        Returns:
            Измерение холста до переключения.
        """
        ensure_settled(file_path, self._debounce_seconds)
        old, padding, m = self.open_canvas(file_path)

        before = (m.braille_w, m.braille_h)
        if m.unpadded:
            after = (m.braille_w + padding.x, m.braille_h + padding.y)
        else:
            after = (m.braille_w - padding.x, m.braille_h - padding.y)

        # new mode is unpadded exactly when the current one is padded
        guard = 0 if m.unpadded else 1
        new = np.zeros((m.chars_y * after[1] + guard, m.chars_x * after[0] + guard, 4), dtype=np.uint8)

        chars = (m.chars_x, m.chars_y)
        for row, column in _dot_offsets():
            _dot_view(new, chars, after, row, column)[...] = _dot_view(old, chars, before, row, column)

        if m.unpadded:
            self._patterns.clear_padding(new, padding.x, padding.y)
        else:
            self._patterns.clear_guard(new)

        self._check_read_back(new, padding, m.chars_x, m.chars_y, unpadded=m.padded)
        self._replace(file_path, new)
        logger.info("Toggled padding of {} (padded: {} -> {})", file_path, m.padded, m.unpadded)
        return m

    def resize(self, file_path: str | Path, resize_x: int, resize_y: int) -> bool:
        """Меняет число ячеек на (resize_x, resize_y), сохраняя содержимое у начала координат.

        Новые ячейки заполняются шаблоном по умолчанию; уменьшение не может
        оставить меньше одной ячейки по оси (дельта ограничивается).

        Returns:
            `False`, если размер не меняется (файл не трогается).
        """
        if resize_x == 0 and resize_y == 0:
            return False

        ensure_settled(file_path, self._debounce_seconds)
        old, padding, m = self.open_canvas(file_path)

        resize_x = max(resize_x, -(m.chars_x - 1))
        resize_y = max(resize_y, -(m.chars_y - 1))
        if resize_x == 0 and resize_y == 0:
            return False

        new_chars_x = m.chars_x + resize_x
        new_chars_y = m.chars_y + resize_y

        new_width = new_chars_x * m.braille_w + m.guard
        new_height = new_chars_y * m.braille_h + m.guard

        if resize_x > 0 or resize_y > 0:
            new = self._patterns.default_canvas(new_width, new_height, padding.x, padding.y, m.unpadded)
        else:
            new = np.zeros((new_height, new_width, 4), dtype=np.uint8)

        keep_w = min(m.chars_x, new_chars_x) * m.braille_w
        keep_h = min(m.chars_y, new_chars_y) * m.braille_h
        new[:keep_h, :keep_w] = old[:keep_h, :keep_w]

        self._check_read_back(new, padding, new_chars_x, new_chars_y, m.unpadded)
        self._replace(file_path, new)
        logger.info(
            "Resized {} from {}x{} to {}x{} chars", file_path, m.chars_x, m.chars_y, new_chars_x, new_chars_y
        )
        return True

    def clean(self, file_path: str | Path, remove_comments: bool = False) -> None:
        """Приводит холст к чистому виду.

        Затемнённые точки закрашиваются чернилами, остальные возвращаются к
        шаблону по умолчанию. Цветные («комментарии») сохраняются, если не
        задан `remove_comments`.
        """
        ensure_settled(file_path, self._debounce_seconds)
        pixels, padding, m = self.open_canvas(file_path)

        default = self._patterns.default_canvas(m.image_width, m.image_height, padding.x, padding.y, m.unpadded)
        shades = shade_types(pixels)
        dots = self._patterns.dot_mask(m)

        shaded = dots & (shades == ShadeType.SHADED)
        reset = dots & ~shaded
        if not remove_comments:
            reset &= shades != ShadeType.NON_GRAYSCALE

        pixels[shaded] = INK
        pixels[reset] = default[reset]

        if m.unpadded:
            self._patterns.clear_guard(pixels)
        else:
            self._patterns.clear_padding(pixels, padding.x, padding.y)

        self._replace(file_path, pixels)
        logger.info("Cleaned {} (remove comments: {})", file_path, remove_comments)

    # ---- Creation ----
    def create(self, prefix: str | Path, chars_x: int, chars_y: int, padding_x: int, padding_y: int) -> Path:
        """Создаёт новый холст `<prefix>.<pX>x<pY>.by.png` с шаблоном по умолчанию.

        Raises:
            ValueError: при неположительных размерах или отрицательных отступах.
            FileExistsRefusal: если файл уже существует.
        """
        self._check_dimensions(chars_x, chars_y, padding_x, padding_y)
        path = self._canvas_path(prefix, padding_x, padding_y)

        width = chars_x * (BRAILLE_WIDTH + padding_x)
        height = chars_y * (BRAILLE_HEIGHT + padding_y)
        pixels = self._patterns.default_canvas(width, height, padding_x, padding_y, unpadded=False)

        self._create(path, pixels)
        logger.info("Created {} ({}x{} chars)", path, chars_x, chars_y)
        return path

    def create_from_grid(self, prefix: str | Path, grid: GlyphGrid, padding_x: int, padding_y: int) -> Path:
        """Создаёт холст с отступами по готовой сетке символов (импорт текста).

        Raises:
            ImportDataError: если сетка пуста, не прямоугольная или содержит не-Брайль.
            FileExistsRefusal: если файл уже существует.
        """
        if not grid or not grid[0] or any(len(line) != len(grid[0]) for line in grid):
            raise ImportDataError("No data received.")

        chars_x, chars_y = len(grid[0]), len(grid)
        self._check_dimensions(chars_x, chars_y, padding_x, padding_y)
        path = self._canvas_path(prefix, padding_x, padding_y)

        try:
            masks = np.array([[decode_cell(glyph) for glyph in line] for line in grid], dtype=np.int32)
        except ValueError as exc:
            raise ImportDataError(str(exc)) from exc

        step = (BRAILLE_WIDTH + padding_x, BRAILLE_HEIGHT + padding_y)
        pixels = self._patterns.default_canvas(chars_x * step[0], chars_y * step[1], padding_x, padding_y, False)
        for row, column in _dot_offsets():
            on = ((masks >> dot_bit(row, column)) & 1).astype(bool)
            _dot_view(pixels, (chars_x, chars_y), step, row, column)[on] = INK

        self._create(path, pixels)
        logger.info("Imported {}x{} glyphs into {}", chars_x, chars_y, path)
        return path

    # ---- Helpers ----
    def _check_dimensions(self, chars_x: int, chars_y: int, padding_x: int, padding_y: int) -> None:
        if chars_x < 1 or chars_y < 1:
            raise ValueError("Number must be greater than zero.")
        if padding_x < 0 or padding_y < 0:
            raise ValueError("Number must be a positive number.")

    def _check_read_back(
        self, pixels: np.ndarray, padding: PaddingSpec, chars_x: int, chars_y: int, unpadded: bool
    ) -> None:
        """Проверяет, что растр после записи измерится так, как задумано.

        Raises:
            AmbiguousCanvasError: если размер растра делится и на шаг другого режима
                (при совпадении побеждает режим с отступами).
        """
        height, width = pixels.shape[:2]
        try:
            m = measure(width, height, padding.x, padding.y)
        except CanvasError as exc:
            raise AmbiguousCanvasError(width, height, unpadded) from exc
        if (m.chars_x, m.chars_y, m.unpadded) != (chars_x, chars_y, unpadded):
            raise AmbiguousCanvasError(width, height, unpadded)

    def _canvas_path(self, prefix: str | Path, padding_x: int, padding_y: int) -> Path:
        prefix_path = Path(prefix)
        return prefix_path.with_name(canvas_file_name(prefix_path.name, padding_x, padding_y))

    def _encode(self, pixels: np.ndarray) -> bytes:
        buffer = io.BytesIO()
        Image.fromarray(pixels).save(buffer, format="PNG")
        return buffer.getvalue()

    def _create(self, path: Path, pixels: np.ndarray) -> None:
        data = self._encode(pixels)
        try:
            fh = path.open("xb")
        except FileExistsError as exc:
            raise FileExistsRefusal() from exc
        except OSError as exc:
            raise CanvasWriteError(f'Error creating the file: "{path}" may have illegal characters.') from exc

        try:
            with fh:
                fh.write(data)
        except OSError as exc:
            # no partial canvas is left behind
            path.unlink(missing_ok=True)
            raise CanvasWriteError(f"Error writing the image: {exc}") from exc

    def _replace(self, file_path: str | Path, pixels: np.ndarray) -> None:
        path = Path(file_path)
        data = self._encode(pixels)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise CanvasWriteError(f"Error writing the image: {exc}") from exc
