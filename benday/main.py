"""Точка входа в приложение."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from benday.app import BendayApp
from benday.config import settings


def configure_logging(level: str = settings.log_level) -> None:
    """Заменяет стандартный обработчик loguru одним выводом в stderr нужного уровня."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Создаёт и запускает главное окно; первый аргумент — холст для просмотра."""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    app = BendayApp(Path(args[0]) if args else None)
    app.mainloop()


if __name__ == "__main__":
    main()
