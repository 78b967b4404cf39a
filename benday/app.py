from __future__ import annotations

from pathlib import Path
from typing import Optional

import customtkinter as ctk

from benday.config import settings
from benday.controllers.app_controller import AppController
from benday.ui.art_viewer import ArtViewer
from benday.ui.bottom_bar import BottomBar
from benday.ui.sidebar import Sidebar


class BendayApp(ctk.CTk):
    """Главное окно: холст слева, панель действий справа, строка статуса внизу."""
    def __init__(self, canvas_path: Optional[Path] = None) -> None:
        super().__init__()
        ctk.set_appearance_mode(settings.appearance_mode)
        ctk.set_default_color_theme("blue")

        self.title("benday: braille canvas")
        self.geometry("1100x700")
        self.minsize(760, 480)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._viewer = ArtViewer(self)
        self._sidebar = Sidebar(self)
        self._bottom = BottomBar(self)

        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
        self._controller.bind_shortcuts()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        if canvas_path is not None:
            self._controller.open_canvas(canvas_path)

    def _on_close(self) -> None:
        self._controller.close()
        self.destroy()
