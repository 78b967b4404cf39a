"""Согласование чтения и записи одного файла холста.

Две независимые проверки:
- `WriteGuard` — слот взаимного исключения: запись держит его до конца,
  периодический опрос при занятом слоте пропускает такт, а не ждёт.
- `ensure_settled` — проверка «свежести»: запись отклоняется, если файл менялся
  меньше заданного интервала назад. Это антидребезг, а не блокировка; от
  сторонних писателей он не защищает.
"""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from benday.models.errors import CanvasDecodeError, WriteTooSoon


class WriteGuard:
    def __init__(self) -> None:
        self._slot = threading.Lock()

    @contextmanager
    def writing(self) -> Iterator[None]:
        with self._slot:
            yield

    @contextmanager
    def reading(self) -> Iterator[bool]:
        """Пытается занять слот без ожидания; отдаёт `False`, если идёт запись."""
        acquired = self._slot.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                self._slot.release()

    @property
    def busy(self) -> bool:
        return self._slot.locked()


def ensure_settled(file_path: str | Path, debounce_seconds: float) -> None:
    """Проверяет, что с последней записи в файл прошло не меньше `debounce_seconds`.

    Raises:
        CanvasDecodeError: если файла нет.
        WriteTooSoon: если файл изменён слишком недавно.
    """
    try:
        modified = Path(file_path).stat().st_mtime
    except FileNotFoundError as exc:
        raise CanvasDecodeError("File does not exist.") from exc

    age = time.time() - modified
    if age < debounce_seconds:
        raise WriteTooSoon(f"File was written {age:.2f}s ago.")
