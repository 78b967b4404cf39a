from __future__ import annotations

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(2, weight=1)  # error text stretches

        self._watch_value = ctk.StringVar(value="")
        self._watch_label = ctk.CTkLabel(self, textvariable=self._watch_value, width=200, anchor="w")
        self._watch_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._notif_value = ctk.StringVar(value="")
        self._notif_label = ctk.CTkLabel(self, textvariable=self._notif_value, anchor="w")
        self._notif_label.grid(row=0, column=1, padx=6, pady=8, sticky="w")

        self._error_value = ctk.StringVar(value="")
        self._error_label = ctk.CTkLabel(
            self, textvariable=self._error_value, anchor="w", justify="left", text_color="#D9534F"
        )
        self._error_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="ew")

    # public API (sync from controller)
    def set_watching(self, ticker: bool, valid: bool) -> None:
        file_text = "watching file" if valid else "watching (invalid) file"
        if ticker:
            self._watch_value.set(f"_ {file_text} /")
        else:
            self._watch_value.set(f"\\ {file_text} _")

    def set_notification(self, message: str) -> None:
        self._notif_value.set(message)

    def set_error(self, message: str) -> None:
        self._error_value.set(message)

    def reset(self) -> None:
        self._watch_value.set("")
        self._notif_value.set("")
        self._error_value.set("")
