"""
Logging configuration for applications embedding the notifier.

The library itself only creates module loggers; hosts call ``setup_logging``
once to get console output (and optionally a log file) in a consistent format.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional, Union

from .config import Environment

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_APPEND_ENV = "LOG_APPEND"


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as exc:
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, exc)
    logger.handlers = []


def _build_console_handler(level: int, user_friendly: bool) -> logging.Handler:
    if user_friendly:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING if user_friendly else level)
    return console_handler


def _build_file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_mode = "a" if Environment().flag(LOG_APPEND_ENV, default=False) else "w"
    file_handler = logging.FileHandler(log_file, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def setup_logging(
    level: int = logging.INFO,
    *,
    log_file: Optional[Union[str, Path]] = None,
    user_friendly: bool = False,
) -> None:
    """Configure the root logger with a console handler and an optional file handler."""

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(level, user_friendly))
        if log_file is not None:
            root_logger.addHandler(_build_file_handler(Path(log_file).expanduser()))

        root_logger.setLevel(level)
        _suppress_noisy_third_parties()


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "setup_logging"]
