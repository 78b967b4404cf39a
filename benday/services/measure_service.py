"""Разбор имени файла холста и восстановление геометрии сетки по размерам растра.

Принципы:
- Чистые функции: `measure` и `parse_padding_spec` не выполняют ввода-вывода.
- Режим (с отступами / без) хранится не флагом, а в самих размерах растра:
  сначала проверяется шаг с отступами, затем шаг 2x4 на размере минус 1 px.
  При совпадении обоих вариантов побеждает режим с отступами.
"""
from __future__ import annotations

import re
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from benday.models.canvas_model import BRAILLE_HEIGHT, BRAILLE_WIDTH, CanvasMeasure, PaddingSpec
from benday.models.errors import CanvasDecodeError, EmptyCanvasError, FileNameError, GeometryError

_PADDING_VALUE = re.compile(r"[0-9]+")

INVALID_FILE_NAME = 'Invalid file name. File must end in the form "*.<pX>x<pY>.by.png".'
INVALID_PADDING = "Padding is an invalid value: Number must be a positive number."


def canvas_file_name(prefix: str, padding_x: int, padding_y: int) -> str:
    return f"{prefix}.{padding_x}x{padding_y}.by.png"


def parse_padding_spec(file_path: str | Path) -> PaddingSpec:
    """Извлекает отступы из имени файла вида `<имя>.<pX>x<pY>.by.png`.

    Raises:
        FileNameError: если имя не соответствует соглашению.
    """
    segments = Path(file_path).name.split(".")
    if len(segments) < 4:
        raise FileNameError(INVALID_FILE_NAME)

    extension, by, padding_spec = segments[-1], segments[-2], segments[-3]
    if extension != "png" or by != "by":
        raise FileNameError(INVALID_FILE_NAME)

    if padding_spec.count("x") != 1:
        raise FileNameError(INVALID_FILE_NAME)

    raw_x, raw_y = padding_spec.split("x")
    if not _PADDING_VALUE.fullmatch(raw_x) or not _PADDING_VALUE.fullmatch(raw_y):
        raise FileNameError(INVALID_PADDING)

    return PaddingSpec(int(raw_x), int(raw_y))


def measure(image_width: int, image_height: int, padding_x: int, padding_y: int) -> CanvasMeasure:
    """Определяет сетку ячеек для растра заданного размера.

    Args:
        image_width: Ширина растра, px.
        image_height: Высота растра, px.
        padding_x: Отступ между ячейками по X (из имени файла).
        padding_y: Отступ между ячейками по Y.

    Returns:
        `CanvasMeasure` с числом ячеек, шагом и режимом.

    Raises:
        GeometryError: если размеры не делятся ни в одном режиме.
        EmptyCanvasError: если по одной из осей получается ноль ячеек.
    """
    braille_w = BRAILLE_WIDTH + padding_x
    braille_h = BRAILLE_HEIGHT + padding_y
    test_width, test_height = image_width, image_height

    padded = test_width % braille_w == 0 and test_height % braille_h == 0
    if not padded:
        braille_w, braille_h = BRAILLE_WIDTH, BRAILLE_HEIGHT
        test_width -= 1
        test_height -= 1

    if test_width < 0 or test_width % braille_w != 0:
        raise GeometryError(image_width, braille_w, on_x=True, unpadded=not padded)
    if test_height < 0 or test_height % braille_h != 0:
        raise GeometryError(image_height, braille_h, on_x=False, unpadded=not padded)

    chars_x = test_width // braille_w
    chars_y = test_height // braille_h
    if chars_x == 0 or chars_y == 0:
        raise EmptyCanvasError()

    return CanvasMeasure(
        image_width=image_width,
        image_height=image_height,
        chars_x=chars_x,
        chars_y=chars_y,
        braille_w=braille_w,
        braille_h=braille_h,
        unpadded=not padded,
    )


def read_image_size(file_path: str | Path) -> tuple[int, int]:
    """Читает только заголовок PNG (Pillow открывает файл лениво).

    Raises:
        CanvasDecodeError: если файла нет или он не является изображением.
    """
    path = Path(file_path)
    if not path.is_file():
        raise CanvasDecodeError("File does not exist.")

    try:
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise CanvasDecodeError(f"Error reading the image: {exc}") from exc


def measure_file(file_path: str | Path, padding: PaddingSpec | None = None) -> CanvasMeasure:
    """Измеряет холст на диске; отступы берутся из имени файла, если не заданы."""
    if padding is None:
        padding = parse_padding_spec(file_path)
    width, height = read_image_size(file_path)
    result = measure(width, height, padding.x, padding.y)
    logger.debug(
        "Measured {}: {}x{} chars, cell {}x{}, unpadded={}",
        file_path, result.chars_x, result.chars_y, result.braille_w, result.braille_h, result.unpadded,
    )
    return result
