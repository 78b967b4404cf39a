"""Контроллер приложения: оркестрация UI, сессии холста и таймера опроса.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки растра).
- DIP: сессия и сервисы подставляются как роли; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; операции над файлом вынесены в `CanvasSession`/`CanvasService`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog
from typing import Dict, List, Optional

import customtkinter as ctk
from loguru import logger

from benday.config import settings
from benday.controllers.canvas_session import CanvasSession
from benday.models.canvas_model import FILE_SUFFIX, GlyphGrid
from benday.models.errors import CanvasError
from benday.services.canvas_service import CanvasService
from benday.services.measure_service import parse_padding_spec
from benday.services.text_service import canvas_preview, format_grid, read_braille_file, resize_preview
from benday.ui.art_viewer import ArtViewer
from benday.ui.bottom_bar import BottomBar
from benday.ui.form_dialog import FormDialog, FormField, valid_file_name, valid_padding, whole_number
from benday.ui.sidebar import Sidebar


def _new_canvas_preview(values: Dict[str, str]) -> str:
    """Предпросмотр формы создания; невалидная ось считается нулевой."""
    def count(key: str) -> int:
        raw = values.get(key, "")
        return int(raw) if whole_number(raw) is None else 0

    return canvas_preview(count("chars_x"), count("chars_y"))


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Создание, открытие и импорт холстов через `CanvasService`.
    - Периодический опрос открытого файла (`after`, `poll_interval_ms`).
    - Режим изменения размера с предпросмотром.
    """
    viewer: ArtViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _canvas_service: CanvasService = field(default_factory=CanvasService)
    _session: Optional[CanvasSession] = None
    _resize: List[int] = field(default_factory=lambda: [0, 0])
    _poll_job: Optional[str] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_create = self._handle_create
        self.sidebar.on_open = self._handle_open
        self.sidebar.on_import = self._handle_import
        self.sidebar.on_export = self._handle_export
        self.sidebar.on_toggle_padding = self._handle_toggle_padding
        self.sidebar.on_clean = self._handle_clean
        self.sidebar.on_resize_step = self._handle_resize_step
        self.sidebar.on_resize_apply = self._handle_resize_apply
        self.sidebar.on_resize_cancel = self._handle_resize_cancel

    def bind_shortcuts(self) -> None:
        """Горячие клавиши окна (дублируют кнопки боковой панели)."""
        bindings = {
            "<Control-n>": self._handle_create,
            "<Control-o>": self._handle_open,
            "<Control-i>": self._handle_import,
            "<Control-e>": self._handle_export,
            "<Control-p>": self._handle_toggle_padding,
            "<Control-l>": lambda: self._handle_clean(False),
            "<Control-L>": lambda: self._handle_clean(True),
            "<Control-Return>": self._handle_resize_apply,
            "<Escape>": self._handle_resize_cancel,
        }
        for sequence, handler in bindings.items():
            self.window.bind(sequence, lambda _event, h=handler: h())

    def close(self) -> None:
        """Останавливает опрос файла перед закрытием окна."""
        self._stop_polling()
        self._session = None

    def open_canvas(self, file_path: str | Path) -> None:
        """Открывает холст на просмотр и запускает опрос файла."""
        self._stop_polling()
        self._session = CanvasSession(Path(file_path), service=self._canvas_service)
        self._resize = [0, 0]
        self.bottom.reset()
        self.viewer.set_title(f"Viewing {file_path}")
        logger.info("Watching {}", file_path)
        self._poll()

    # ---- Handlers ----
    def _handle_open(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите холст",
                filetypes=(("Benday canvas", f"*{FILE_SUFFIX}"), ("All files", "*.*")),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_canvas(file_path)

    def _handle_create(self) -> None:
        values = FormDialog(
            self.window,
            "Новый холст",
            (
                FormField("chars_x", "Width (in braille characters)", "", whole_number),
                FormField("chars_y", "Height (in braille characters)", "", whole_number),
                FormField("padding_x", "Image padding X (in braille dots)", str(settings.default_padding_x), valid_padding),
                FormField("padding_y", "Image padding Y (in braille dots)", str(settings.default_padding_y), valid_padding),
                FormField("prefix", "File name prefix", "", valid_file_name),
            ),
            render_preview=_new_canvas_preview,
        ).ask()
        if values is None:
            return

        try:
            path = self._canvas_service.create(
                self._directory() / values["prefix"],
                int(values["chars_x"]),
                int(values["chars_y"]),
                int(values["padding_x"]),
                int(values["padding_y"]),
            )
        except (CanvasError, ValueError) as err:
            self.bottom.set_error(f"Cannot proceed with file creation.\n{err}")
            return
        self.open_canvas(path)

    def _handle_import(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите текст Брайля",
                filetypes=(("Text", "*.txt"), ("All files", "*.*")),
            )
        except TclError:
            return

        if not file_path:
            return

        try:
            grid = read_braille_file(file_path)
        except CanvasError as err:
            self.bottom.set_error(f"Error importing the braille text file:\n{err}")
            return
        self._create_from_grid(grid)

    def _create_from_grid(self, grid: GlyphGrid) -> None:
        values = FormDialog(
            self.window,
            "Импорт текста",
            (
                FormField("padding_x", "Image padding X (in braille dots)", str(settings.default_padding_x), valid_padding),
                FormField("padding_y", "Image padding Y (in braille dots)", str(settings.default_padding_y), valid_padding),
                FormField("prefix", "File name prefix", "", valid_file_name),
            ),
            preview=format_grid(grid),
        ).ask()
        if values is None:
            return

        try:
            path = self._canvas_service.create_from_grid(
                self._directory() / values["prefix"], grid, int(values["padding_x"]), int(values["padding_y"])
            )
        except (CanvasError, ValueError) as err:
            self.bottom.set_error(f"Cannot proceed with importing file:\n{err}")
            return
        self.open_canvas(path)

    def _handle_export(self) -> None:
        if self._session is None or not self._session.grid:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Экспорт символов Брайля",
                defaultextension=".txt",
                confirmoverwrite=False,
                filetypes=(("Text", "*.txt"), ("All files", "*.*")),
            )
        except TclError:
            return

        if not file_path:
            return

        try:
            self._session.export(file_path)
        except CanvasError as err:
            self.bottom.set_error(f"Error creating the file:\n{err}")
            return
        self._render()

    def _handle_toggle_padding(self) -> None:
        if self._session is not None:
            self._session.toggle_padding()
            self._render()

    def _handle_clean(self, remove_comments: bool) -> None:
        if self._session is not None:
            self._session.clean(remove_comments)
            self._render()

    def _handle_resize_step(self, dx: int, dy: int) -> None:
        if self._session is None:
            return
        measure = self._session.measurement()
        if measure is None:
            return
        # the canvas keeps at least one character per axis
        self._resize[0] = max(self._resize[0] + dx, -(measure.chars_x - 1))
        self._resize[1] = max(self._resize[1] + dy, -(measure.chars_y - 1))
        self._render()

    def _handle_resize_apply(self) -> None:
        if self._session is None:
            return
        resize_x, resize_y = self._resize
        self._resize = [0, 0]
        self._session.resize(resize_x, resize_y)
        self._render()

    def _handle_resize_cancel(self) -> None:
        self._resize = [0, 0]
        self._render()

    # ---- Helpers ----
    def _directory(self) -> Path:
        if self._session is not None:
            return self._session.path.parent
        return Path.cwd()

    def _poll(self) -> None:
        session = self._session
        if session is None:
            return
        session.refresh()
        self._render()
        if not session.closed:
            self._poll_job = self.window.after(settings.poll_interval_ms, self._poll)

    def _stop_polling(self) -> None:
        if self._poll_job is not None:
            self.window.after_cancel(self._poll_job)
            self._poll_job = None

    def _render(self) -> None:
        session = self._session
        if session is None:
            return

        if session.closed:
            self._stop_polling()
            self.viewer.set_art(None)
            self.bottom.set_error(session.fatal_message)
            self.sidebar.set_canvas_actions_enabled(False)
            return

        measure = session.measurement()
        try:
            padding = parse_padding_spec(session.path)
        except CanvasError:
            padding = None
        self.sidebar.set_canvas_info(str(session.path), padding, measure)
        self.sidebar.set_resize_values(*self._resize)

        valid = session.view_error is None
        self.sidebar.set_canvas_actions_enabled(valid)
        self.bottom.set_watching(session.watch_ticker, valid)
        self.bottom.set_notification(session.notification)
        self.bottom.set_error("" if valid else f"Error processing the image:\n{session.view_error}")

        if not session.grid:
            self.viewer.set_art(None)
        elif measure is not None and self._resize != [0, 0]:
            self.viewer.set_art(
                resize_preview(session.grid, measure.chars_x + self._resize[0], measure.chars_y + self._resize[1])
            )
        else:
            self.viewer.set_art(format_grid(session.grid))
