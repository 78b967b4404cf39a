"""Модальная форма с несколькими полями ввода (создание и импорт холста)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import customtkinter as ctk

NOT_A_WHOLE_NUMBER = "Number must be greater than zero."
NOT_A_POSITIVE_NUMBER = "Number must be a positive number."
EMPTY_FILE_NAME = "Filename is empty."


def whole_number(value: str) -> Optional[str]:
    if not (value.isascii() and value.isdigit()) or int(value) == 0:
        return NOT_A_WHOLE_NUMBER
    return None


def valid_padding(value: str) -> Optional[str]:
    if not (value.isascii() and value.isdigit()):
        return NOT_A_POSITIVE_NUMBER
    return None


def valid_file_name(value: str) -> Optional[str]:
    if not value:
        return EMPTY_FILE_NAME
    return None


@dataclass(frozen=True)
class FormField:
    key: str
    label: str
    default: str = ""
    validate: Callable[[str], Optional[str]] = valid_file_name


class FormDialog(ctk.CTkToplevel):
    """Окно с полями `FormField`; `ask()` возвращает значения или `None` при отмене."""
    def __init__(
        self,
        master: ctk.CTk,
        title: str,
        fields: Sequence[FormField],
        preview: str = "",
        render_preview: Optional[Callable[[Dict[str, str]], str]] = None,
    ) -> None:
        super().__init__(master)
        self.title(title)
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._fields = list(fields)
        self._vars: Dict[str, ctk.StringVar] = {}
        self._result: Optional[Dict[str, str]] = None

        row = 0
        self._render_preview = render_preview
        self._preview_val = ctk.StringVar(value=preview)
        if preview or render_preview is not None:
            preview_box = ctk.CTkLabel(
                self, textvariable=self._preview_val, font=ctk.CTkFont(family="Courier"), justify="left"
            )
            preview_box.grid(row=row, column=0, columnspan=2, padx=12, pady=(12, 6), sticky="w")
            row += 1

        for field in self._fields:
            var = ctk.StringVar(value=field.default)
            self._vars[field.key] = var
            var.trace_add("write", lambda *_args: self._update_preview())
            ctk.CTkLabel(self, text=field.label, anchor="w").grid(row=row, column=0, padx=(12, 6), pady=4, sticky="w")
            ctk.CTkEntry(self, textvariable=var, width=220).grid(row=row, column=1, padx=(6, 12), pady=4, sticky="ew")
            row += 1

        self._error_val = ctk.StringVar(value="")
        ctk.CTkLabel(self, textvariable=self._error_val, text_color="#D9534F", anchor="w").grid(
            row=row, column=0, columnspan=2, padx=12, pady=(4, 0), sticky="w"
        )
        row += 1

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=row, column=0, columnspan=2, padx=12, pady=12, sticky="e")
        ctk.CTkButton(buttons, text="Отмена", width=100, command=self.destroy).grid(row=0, column=0, padx=(0, 6))
        ctk.CTkButton(buttons, text="Создать", width=100, command=self._submit).grid(row=0, column=1)

        self.bind("<Return>", lambda _e: self._submit())
        self.bind("<Escape>", lambda _e: self.destroy())
        self._update_preview()

    def ask(self) -> Optional[Dict[str, str]]:
        self.grab_set()
        self.wait_window()
        return self._result

    def _submit(self) -> None:
        errors: List[str] = []
        for field in self._fields:
            error = field.validate(self._vars[field.key].get().strip())
            if error:
                errors.append(f"{field.label}: {error}")
        if errors:
            self._error_val.set("\n".join(errors))
            return
        self._result = {key: var.get().strip() for key, var in self._vars.items()}
        self.destroy()

    def _update_preview(self) -> None:
        if self._render_preview is None:
            return
        self._preview_val.set(self._render_preview({key: var.get().strip() for key, var in self._vars.items()}))
