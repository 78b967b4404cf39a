"""Боковая панель: файлы, операции над холстом, изменение размера, информация.

Принципы:
- SRP: управляет только кнопками и подписями, не содержит логики холста.
- ISP: события через `on_*`, состояние приходит через компактные методы `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from benday.models.canvas_model import CanvasMeasure, PaddingSpec


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, холст, размер, информация."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_create: Optional[Callable[[], None]] = None
        self.on_open: Optional[Callable[[], None]] = None
        self.on_import: Optional[Callable[[], None]] = None
        self.on_export: Optional[Callable[[], None]] = None
        self.on_toggle_padding: Optional[Callable[[], None]] = None
        self.on_clean: Optional[Callable[[bool], None]] = None
        self.on_resize_step: Optional[Callable[[int, int], None]] = None
        self.on_resize_apply: Optional[Callable[[], None]] = None
        self.on_resize_cancel: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # File section
        self._file_title = ctk.CTkLabel(self, text="Файл", font=bold)
        self._file_title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._create_btn = ctk.CTkButton(self, text="Новый холст…", command=lambda: self._emit(self.on_create))
        self._open_btn = ctk.CTkButton(self, text="Открыть холст…", command=lambda: self._emit(self.on_open))
        self._import_btn = ctk.CTkButton(self, text="Импорт текста…", command=lambda: self._emit(self.on_import))
        self._export_btn = ctk.CTkButton(self, text="Экспорт текста…", command=lambda: self._emit(self.on_export))
        for row, btn in enumerate((self._create_btn, self._open_btn, self._import_btn, self._export_btn), start=1):
            btn.grid(row=row, column=0, padx=8, pady=(0, 6), sticky="ew")

        # Canvas section
        self._canvas_title = ctk.CTkLabel(self, text="Холст", font=bold)
        self._canvas_title.grid(row=10, column=0, padx=8, pady=(8, 4), sticky="w")

        self._toggle_btn = ctk.CTkButton(
            self, text="Переключить отступы", command=lambda: self._emit(self.on_toggle_padding)
        )
        self._clean_btn = ctk.CTkButton(self, text="Очистить", command=lambda: self._emit_clean(False))
        self._clean_all_btn = ctk.CTkButton(
            self, text="Очистить вместе с комментариями", command=lambda: self._emit_clean(True)
        )
        self._toggle_btn.grid(row=11, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._clean_btn.grid(row=12, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._clean_all_btn.grid(row=13, column=0, padx=8, pady=(0, 6), sticky="ew")

        # Resize section
        self._resize_title = ctk.CTkLabel(self, text="Размер (в символах)", font=bold)
        self._resize_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")

        self._resize_x_val = ctk.StringVar(value="ширина: +0")
        self._resize_y_val = ctk.StringVar(value="высота: +0")
        self._resize_x_row = self._make_step_row(self._resize_x_val, dx=1, dy=0)
        self._resize_y_row = self._make_step_row(self._resize_y_val, dx=0, dy=1)
        self._resize_x_row.grid(row=21, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._resize_y_row.grid(row=22, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._resize_buttons = ctk.CTkFrame(self, fg_color="transparent")
        self._resize_buttons.grid_columnconfigure((0, 1), weight=1)
        self._resize_apply_btn = ctk.CTkButton(
            self._resize_buttons, text="Применить", command=lambda: self._emit(self.on_resize_apply)
        )
        self._resize_cancel_btn = ctk.CTkButton(
            self._resize_buttons, text="Отмена", command=lambda: self._emit(self.on_resize_cancel)
        )
        self._resize_apply_btn.grid(row=0, column=0, padx=(0, 3), sticky="ew")
        self._resize_cancel_btn.grid(row=0, column=1, padx=(3, 0), sticky="ew")
        self._resize_buttons.grid(row=23, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=30, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._padding_val = ctk.StringVar(value="—")
        self._chars_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_padding = ctk.CTkLabel(self, textvariable=self._padding_val, anchor="w", justify="left")
        self._info_chars = ctk.CTkLabel(self, textvariable=self._chars_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")

        self._info_path.grid(row=31, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_padding.grid(row=32, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_chars.grid(row=33, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=34, column=0, padx=8, pady=(0, 10), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        self.set_canvas_actions_enabled(False)

    # ---- Public API ----
    def set_canvas_info(
        self, path: Optional[str], padding: Optional[PaddingSpec], measure: Optional[CanvasMeasure]
    ) -> None:
        self._path_val.set(f"Файл: {path}" if path else "—")
        self._padding_val.set(f"Отступы: {padding.x}x{padding.y}" if padding else "Отступы: —")
        if measure is None:
            self._chars_val.set("Символов: —")
            self._mode_val.set("padded?: —")
            return
        self._chars_val.set(f"Символов: {measure.chars_x}x{measure.chars_y} ({measure.image_width}x{measure.image_height} px)")
        self._mode_val.set(f"padded?: {str(measure.padded).lower()}")

    def set_resize_values(self, resize_x: int, resize_y: int) -> None:
        self._resize_x_val.set(f"ширина: {resize_x:+d}")
        self._resize_y_val.set(f"высота: {resize_y:+d}")

    def set_canvas_actions_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        for btn in (
            self._export_btn,
            self._toggle_btn,
            self._clean_btn,
            self._clean_all_btn,
            self._resize_apply_btn,
            self._resize_cancel_btn,
        ):
            btn.configure(state=state)

    # ---- Internals ----
    def _make_step_row(self, value: ctk.StringVar, dx: int, dy: int) -> ctk.CTkFrame:
        row = ctk.CTkFrame(self, fg_color="transparent")
        row.grid_columnconfigure(1, weight=1)
        minus = ctk.CTkButton(row, text="−", width=32, command=lambda: self._emit_step(-dx, -dy))
        label = ctk.CTkLabel(row, textvariable=value)
        plus = ctk.CTkButton(row, text="+", width=32, command=lambda: self._emit_step(dx, dy))
        minus.grid(row=0, column=0)
        label.grid(row=0, column=1, padx=6)
        plus.grid(row=0, column=2)
        return row

    def _emit(self, callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()

    def _emit_clean(self, remove_comments: bool) -> None:
        if self.on_clean:
            self.on_clean(remove_comments)

    def _emit_step(self, dx: int, dy: int) -> None:
        if self.on_resize_step:
            self.on_resize_step(dx, dy)
