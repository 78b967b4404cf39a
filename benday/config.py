"""Настройки приложения из переменных окружения (префикс `BENDAY_`) и `.env`."""
from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # File watcher
    poll_interval_ms: int = 500
    write_debounce_seconds: float = 1.0
    notification_seconds: float = 2.5

    # New canvas defaults (in braille dots)
    default_padding_x: int = 0
    default_padding_y: int = 2

    # UI
    appearance_mode: Literal["system", "light", "dark"] = "system"
    art_font_size: int = 16

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="BENDAY_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
