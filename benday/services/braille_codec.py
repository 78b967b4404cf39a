"""Кодек ячейки Брайля: 8-битная маска точек <-> символ из блока U+2800.

Маска точек упорядочена построчно внутри ячейки 2x4: бит `row * 2 + column`.
Юникод нумерует точки по столбцам (1, 2, 3, 7 слева; 4, 5, 6, 8 справа),
поэтому кодек переставляет биты, а не просто прибавляет маску к базе.
"""
from __future__ import annotations

from typing import List

from benday.models.canvas_model import BRAILLE_WIDTH

BRAILLE_BASE = 0x2800
EMPTY_GLYPH = chr(BRAILLE_BASE)
FULL_GLYPH = chr(BRAILLE_BASE + 0xFF)

# row-major dot index -> Unicode dot bit
_UNICODE_BIT = (
    0, 3,  # row 0: dots 1, 4
    1, 4,  # row 1: dots 2, 5
    2, 5,  # row 2: dots 3, 6
    6, 7,  # row 3: dots 7, 8
)


def _to_unicode_bits(mask: int) -> int:
    bits = 0
    for dot, unicode_bit in enumerate(_UNICODE_BIT):
        if mask & (1 << dot):
            bits |= 1 << unicode_bit
    return bits


_ENCODE: List[str] = [chr(BRAILLE_BASE + _to_unicode_bits(mask)) for mask in range(256)]
_DECODE = {glyph: mask for mask, glyph in enumerate(_ENCODE)}


def dot_bit(row: int, column: int) -> int:
    """Номер бита маски для точки (row, column) ячейки."""
    return row * BRAILLE_WIDTH + column


def is_braille(ch: str) -> bool:
    return len(ch) == 1 and BRAILLE_BASE <= ord(ch) <= BRAILLE_BASE + 0xFF


def encode_cell(mask: int) -> str:
    """Возвращает символ Брайля для построчной маски точек (0..255)."""
    return _ENCODE[mask & 0xFF]


def decode_cell(glyph: str) -> int:
    """Обратное к `encode_cell`. Пробел считается пустой ячейкой.

    Raises:
        ValueError: если символ не из блока Брайля и не пробел.
    """
    if glyph == " ":
        return 0
    try:
        return _DECODE[glyph]
    except KeyError:
        raise ValueError(f"Not a braille character: {glyph!r}") from None
