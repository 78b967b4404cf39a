"""Модели данных холста: геометрия ячеек, отступы, классы оттенков.

Принципы:
- SRP: только структура данных и константы, без ввода-вывода.
- Чистый код: измерения неизменяемы (`frozen=True`) и пересчитываются на каждой операции.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

# Размер одной ячейки шрифта Брайля в точках.
BRAILLE_WIDTH = 2
BRAILLE_HEIGHT = 4

FILE_SUFFIX = ".by.png"

RGBA = Tuple[int, int, int, int]
GlyphGrid = List[List[str]]

TRANSPARENT: RGBA = (0x00, 0x00, 0x00, 0x00)
WHITE: RGBA = (0xFF, 0xFF, 0xFF, 0xFF)
GRAY: RGBA = (0xCC, 0xCC, 0xCC, 0xFF)
INK: RGBA = (0x33, 0x33, 0x33, 0xFF)


class ShadeType(IntEnum):
    """Класс одного RGBA-сэмпла. Порядок совпадает с порядком проверок."""
    TRANSPARENT = 0
    NON_GRAYSCALE = 1
    UNSHADED = 2
    SHADED = 3


@dataclass(frozen=True)
class PaddingSpec:
    """Отступы между ячейками (в точках), зашитые в имя файла `*.<pX>x<pY>.by.png`."""
    x: int
    y: int


@dataclass(frozen=True)
class CanvasMeasure:
    """Геометрия холста, восстановленная по размерам растра.

    Fields:
        image_width: Ширина растра, px.
        image_height: Высота растра, px.
        chars_x: Число ячеек по горизонтали.
        chars_y: Число ячеек по вертикали.
        braille_w: Шаг ячейки по X, px (2 + pX для режима с отступами).
        braille_h: Шаг ячейки по Y, px (4 + pY для режима с отступами).
        unpadded: Режим без отступов (с защитной строкой/столбцом справа и снизу).
    """
    image_width: int
    image_height: int
    chars_x: int
    chars_y: int
    braille_w: int
    braille_h: int
    unpadded: bool

    @property
    def guard(self) -> int:
        """Ширина защитной полосы: 1 px без отступов, иначе 0."""
        return 1 if self.unpadded else 0

    @property
    def padded(self) -> bool:
        return not self.unpadded
