"""
Logging configuration for precisecalc.

stdout принадлежит Interaction Loop (меню, результаты), поэтому все логи
идут в stderr. По умолчанию уровень WARNING: обычная сессия не выводит
ничего, кроме диалога; --debug включает DEBUG.

Модули получают логгер через logging.getLogger(__name__).
"""

import logging
import sys
from typing import Final, Optional

DEFAULT_LOG_LEVEL: Final[int] = logging.WARNING

CONSOLE_FORMAT: Final[str] = "%(asctime)s %(name)s - %(levelname)s - %(message)s"
CONSOLE_DATEFMT: Final[str] = "%H:%M:%S"

# Handler, установленный setup_logging (один на процесс)
_console_handler: Optional[logging.StreamHandler] = None


def setup_logging(level: int = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """
    Configure the root logger with a single stderr handler.

    Повторный вызов не добавляет второй handler: он меняет уровень, а если
    sys.stderr подменён, заменяет handler новым на текущем sys.stderr.
    Чужие handlers (например, pytest caplog) не трогаются.

    Args:
        level: Logging level (default: WARNING)

    Returns:
        Root logger
    """
    global _console_handler

    root_logger = logging.getLogger()

    # sys.stderr подменён (например, click CliRunner): старый поток может быть закрыт
    if _console_handler is not None and _console_handler.stream is not sys.stderr:
        root_logger.removeHandler(_console_handler)
        _console_handler = None

    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stderr)
        _console_handler.setFormatter(
            logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
        )
        root_logger.addHandler(_console_handler)

    _console_handler.setLevel(level)
    root_logger.setLevel(level)
    return root_logger
