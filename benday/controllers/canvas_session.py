"""Состояние просмотра одного холста: опрос файла и пишущие операции.

Принципы:
- Всё состояние экрана (сетка, ошибка, уведомление) — поля одного объекта,
  который контроллер передаёт от шага к шагу, а не разбросанные глобальные поля.
- Политика реакции на ошибку берётся из `ErrorKind`, а не из проверки типов.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from benday.config import settings
from benday.models.canvas_model import CanvasMeasure, GlyphGrid
from benday.models.errors import CanvasError, ErrorKind
from benday.services.canvas_service import CanvasService
from benday.services.measure_service import measure_file
from benday.services.text_service import export_grid
from benday.services.write_guard import WriteGuard


@dataclass
class CanvasSession:
    """Открытый на просмотр файл холста.

    Fields:
        path: Путь к файлу `*.by.png`.
        service: Сервис операций над холстом.
        guard: Слот взаимного исключения опроса и записи.
        grid: Последняя успешно декодированная сетка.
        view_error: Ошибка последнего опроса (файл показывается как «invalid»).
        fatal_error: Ошибка, после которой просмотр нужно закрыть.
        watch_ticker: Переключается на каждом опросе (индикатор «жив»).
    """
    path: Path
    service: CanvasService = field(default_factory=CanvasService)
    guard: WriteGuard = field(default_factory=WriteGuard)
    notification_seconds: float = settings.notification_seconds

    grid: GlyphGrid = field(default_factory=list)
    view_error: Optional[CanvasError] = None
    fatal_error: Optional[CanvasError] = None
    watch_ticker: bool = False
    _notif_message: str = ""
    _notif_time: float = 0.0

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    # ---- Reading ----
    def refresh(self) -> bool:
        """Перечитывает файл; пропускает такт, если идёт запись.

        Returns:
            `True`, если опрос состоялся (успешно или с ошибкой).
        """
        with self.guard.reading() as acquired:
            if not acquired:
                logger.debug("Skipping poll of {}: write in progress", self.path)
                return False

            self.watch_ticker = not self.watch_ticker
            try:
                self.grid = self.service.decode(self.path)
                self.view_error = None
            except CanvasError as err:
                self.view_error = err
                if err.kind.fatal:
                    self.fatal_error = err
                    logger.warning("Cannot read {}: {}", self.path, err)
        return True

    def measurement(self) -> Optional[CanvasMeasure]:
        try:
            return measure_file(self.path)
        except CanvasError:
            return None

    @property
    def unpadded(self) -> Optional[bool]:
        m = self.measurement()
        return None if m is None else m.unpadded

    @property
    def closed(self) -> bool:
        return self.fatal_error is not None

    @property
    def fatal_message(self) -> str:
        if self.fatal_error is None:
            return ""
        return f"Filename: {self.path}\n{self.fatal_error}"

    @property
    def notification(self) -> str:
        if self._notif_message and time.monotonic() - self._notif_time < self.notification_seconds:
            return self._notif_message
        return ""

    # ---- Writing ----
    def toggle_padding(self) -> bool:
        return self._write(lambda: self.service.toggle_padding(self.path), "finished toggling the padding!")

    def clean(self, remove_comments: bool = False) -> bool:
        message = "finished CLEANING the canvas!" if remove_comments else "finished cleaning the canvas!"
        return self._write(lambda: self.service.clean(self.path, remove_comments), message)

    def resize(self, resize_x: int, resize_y: int) -> bool:
        return self._write(lambda: self.service.resize(self.path, resize_x, resize_y), "finished resizing the canvas!")

    def export(self, destination: str | Path) -> None:
        """Сохраняет текущую сетку в текстовый файл.

        Raises:
            CanvasError: отказ (файл существует) или ошибка записи; показывается в форме экспорта.
        """
        export_grid(destination, self.grid)
        self._notify("finished exporting to file!")

    def _write(self, operation: Callable[[], object], message: str) -> bool:
        """Выполняет пишущую операцию, удерживая слот.

        Returns:
            `True`, если файл изменён. Ошибка «слишком рано» молча игнорируется,
            ошибка геометрии (файл не тронут) показывается уведомлением, прочие
            ошибки закрывают просмотр (как битый файл).
        """
        if self.closed:
            return False

        with self.guard.writing():
            try:
                changed = operation()
            except CanvasError as err:
                if err.kind.silent:
                    logger.debug("Ignoring write to {}: {}", self.path, err)
                    return False
                if err.kind is ErrorKind.GEOMETRY:
                    # file left untouched
                    logger.warning("Refused write to {}: {}", self.path, err)
                    self._notify(str(err))
                    return False
                logger.warning("Write to {} failed: {}", self.path, err)
                self.fatal_error = err
                return False

        if changed is False:
            return False

        self._notify(message)
        self.refresh()
        return True

    def _notify(self, message: str) -> None:
        self._notif_message = message
        self._notif_time = time.monotonic()
