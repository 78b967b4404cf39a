"""Виджет просмотра холста: сетка символов Брайля моноширинным текстом.

Принципы:
- SRP: отвечает только за представление текста, ничего не знает о файлах.
- Чистый код: публичный API из пары методов `set_*`.
"""
from __future__ import annotations

import tkinter as tk

import customtkinter as ctk

from benday.config import settings

# Shown when there is nothing valid to draw.
ERRORED_CANVAS = "xxxxx\nxxxxx\nxxxxx\nxxxxx\nxxxxx"


class ArtViewer(ctk.CTkFrame):
    """Текстовая «канва» с рамкой и заголовком просматриваемого файла."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._title_val = ctk.StringVar(value="Холст не открыт")
        self._title = ctk.CTkLabel(self, textvariable=self._title_val, anchor="w")
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="ew")

        self._font = ctk.CTkFont(family="Courier", size=settings.art_font_size)
        self._text = ctk.CTkTextbox(self, font=self._font, wrap="none", activate_scrollbars=True)
        self._text.grid(row=1, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._text.configure(state="disabled")

        self._shown: str | None = None

    # ---- Public API ----
    def set_title(self, title: str) -> None:
        self._title_val.set(title)

    def set_art(self, text: str | None) -> None:
        """Показывает текст сетки; `None` или пустая строка — заглушка ошибки."""
        text = text or ERRORED_CANVAS
        if text == self._shown:
            # avoid flicker on every poll
            return
        self._shown = text
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("1.0", text)
        self._text.configure(state="disabled")
