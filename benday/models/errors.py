"""Классифицированные ошибки движка холста.

Принципы:
- Классификация решается один раз, в месте возникновения: у каждого исключения
  есть `kind`, и вызывающему коду не нужно проверять типы.
- Тексты сообщений показываются пользователю как есть.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    FILE_NAME = "file_name"
    DECODE = "decode"
    GEOMETRY = "geometry"
    TOO_SOON = "too_soon"
    FILE_EXISTS = "file_exists"
    IMPORT = "import"
    WRITE = "write"

    @property
    def silent(self) -> bool:
        """Ошибка не показывается пользователю (пройдёт на следующем опросе)."""
        return self is ErrorKind.TOO_SOON

    @property
    def fatal(self) -> bool:
        """Просмотр файла нужно завершить: битый файл сам не починится."""
        return self is ErrorKind.DECODE


class CanvasError(Exception):
    kind: ErrorKind = ErrorKind.DECODE


class FileNameError(CanvasError):
    kind = ErrorKind.FILE_NAME


class CanvasDecodeError(CanvasError):
    kind = ErrorKind.DECODE


class GeometryError(CanvasError):
    """Размеры растра не делятся на размер ячейки ни в одном из режимов.

    Fields:
        measure: Фактический размер растра по оси, px.
        divisor: Ожидаемый делитель.
        on_x: Ошибка по ширине (иначе по высоте).
        unpadded: Проверялся размер минус защитная полоса.
    """
    kind = ErrorKind.GEOMETRY

    def __init__(self, measure: int, divisor: int, on_x: bool, unpadded: bool) -> None:
        self.measure = measure
        self.divisor = divisor
        self.on_x = on_x
        self.unpadded = unpadded
        super().__init__(self._message())

    def _message(self) -> str:
        measure_name = "width" if self.on_x else "height"
        minus_one = " - 1" if self.unpadded else ""
        return (
            f"Invalid image dimension. Expected {measure_name}{minus_one} to be divisible by "
            f"{self.divisor}, but is instead {self.measure} px."
        )


class EmptyCanvasError(CanvasError):
    kind = ErrorKind.GEOMETRY

    def __init__(self) -> None:
        super().__init__("Invalid image dimension. Canvas must be at least one braille character wide and tall.")


class WriteTooSoon(CanvasError):
    kind = ErrorKind.TOO_SOON


class FileExistsRefusal(CanvasError):
    kind = ErrorKind.FILE_EXISTS

    def __init__(self, message: str = "File already exists.") -> None:
        super().__init__(message)


class ImportDataError(CanvasError):
    kind = ErrorKind.IMPORT


class CanvasWriteError(CanvasError):
    kind = ErrorKind.WRITE


class AmbiguousCanvasError(CanvasError):
    """Новый растр прочитался бы в другом режиме или с другим числом ячеек."""
    kind = ErrorKind.GEOMETRY

    def __init__(self, width: int, height: int, unpadded: bool) -> None:
        mode = "unpadded" if unpadded else "padded"
        super().__init__(
            f"Cannot write a {width}x{height} px {mode} canvas: "
            "it would be read back with a different layout. The file was left unchanged."
        )
