"""Текстовое представление сетки: импорт/экспорт строк символов Брайля.

Принципы:
- SRP: только текст, без растров.
- Импорт терпим к мусору (лишние символы отбрасываются), экспорт никогда не
  перезаписывает существующий файл.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

from loguru import logger

from benday.models.canvas_model import GlyphGrid
from benday.models.errors import CanvasWriteError, FileExistsRefusal, ImportDataError
from benday.services.braille_codec import EMPTY_GLYPH, FULL_GLYPH, is_braille

NO_DATA = "No data received."


def parse_braille_text(text: str) -> GlyphGrid:
    """Разбирает блок текста в прямоугольную сетку символов.

    Из каждой строки остаются только символы Брайля и пробелы; короткие строки
    дополняются справа пустым символом до длины самой длинной.

    Raises:
        ImportDataError: если строк нет или все они пусты после фильтрации.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    rows: GlyphGrid = [[ch for ch in line if ch == " " or is_braille(ch)] for line in lines]
    if not rows or all(len(row) == 0 for row in rows):
        raise ImportDataError(NO_DATA)

    width = max(len(row) for row in rows)
    for row in rows:
        row.extend([EMPTY_GLYPH] * (width - len(row)))
    return rows


def read_braille_file(file_path: str | Path) -> GlyphGrid:
    """Читает текстовый файл (UTF-8) и разбирает его через `parse_braille_text`."""
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ImportDataError("File does not exist.") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ImportDataError(f"Error reading the file: {exc}") from exc
    return parse_braille_text(text)


def format_grid(grid: GlyphGrid) -> str:
    return "\n".join("".join(row) for row in grid)


def export_grid(file_path: str | Path, grid: GlyphGrid) -> Path:
    """Сохраняет сетку в текстовый файл, по строке на ряд ячеек.

    Raises:
        FileExistsRefusal: если файл уже существует.
    """
    path = Path(file_path)
    if path.exists():
        raise FileExistsRefusal()

    try:
        with path.open("x", encoding="utf-8", newline="") as fh:
            fh.write(format_grid(grid))
    except FileExistsError as exc:
        raise FileExistsRefusal() from exc
    except OSError as exc:
        raise CanvasWriteError(f"Error writing to the file: {exc}") from exc

    logger.info("Exported {}x{} glyphs to {}", len(grid[0]) if grid else 0, len(grid), path)
    return path


def resize_preview(grid: GlyphGrid, new_chars_x: int, new_chars_y: int) -> str:
    """Текст предпросмотра изменения размера.

    Сетка обрезается до пересечения старого и нового размеров, остаток до
    большего из размеров заполняется `+` (ось растёт) или `x` (ось урезается).
    """
    old_y = len(grid)
    old_x = len(grid[0]) if grid else 0
    keep_x, keep_y = min(old_x, new_chars_x), min(old_y, new_chars_y)
    full_x, full_y = max(old_x, new_chars_x), max(old_y, new_chars_y)

    fill_x = "x" if new_chars_x < old_x else "+"
    fill_y = "x" if new_chars_y < old_y else "+"

    lines: List[str] = []
    for row in grid[:keep_y]:
        lines.append("".join(row[:keep_x]) + fill_x * (full_x - keep_x))
    for _ in range(full_y - keep_y):
        lines.append(fill_y * full_x)
    return "\n".join(lines)


def canvas_preview(chars_x: int, chars_y: int) -> str:
    """Предпросмотр нового холста: сетка полных символов `⣿` заданного размера.

    Нулевая ось рисуется полосой из `x`; если обе оси нулевые, показывается
    заглушка 5x5.
    """
    if chars_x <= 0 and chars_y <= 0:
        return "\n".join(["x" * 5] * 5)
    if chars_x <= 0:
        return "\n".join(["x"] * chars_y)
    if chars_y <= 0:
        return "x" * chars_x
    return "\n".join([FULL_GLYPH * chars_x] * chars_y)
