# common/core_utils.py
# -*- coding: utf-8 -*-
"""
Logging setup for the installer.

Console output goes to stdout, errors to stderr. In verbose mode each console
line carries a timestamp and a level symbol. An optional log file receives the
detailed format.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from installer.config_models import SYMBOLS_DEFAULT

DETAILED_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"
CONSOLE_LOG_FORMAT = "%(message)s"
VERBOSE_CONSOLE_LOG_FORMAT = "{log_prefix}%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"


class SymbolFormatter(logging.Formatter):
    """
    A custom formatter that adds symbols to log messages based on the log level.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        symbols: Optional[Dict[str, str]] = None,
    ):
        super().__init__(fmt, datefmt)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.DEBUG:
            record.symbol = self.symbols.get("debug", "🐛")
        elif record.levelno == logging.INFO:
            record.symbol = self.symbols.get("info", "ℹ️")
        elif record.levelno == logging.WARNING:
            record.symbol = self.symbols.get("warning", "⚠️")
        elif record.levelno == logging.ERROR:
            record.symbol = self.symbols.get("error", "❌")
        elif record.levelno == logging.CRITICAL:
            record.symbol = self.symbols.get("critical", "🔥")
        else:
            record.symbol = ""

        return super().format(record)


class MaxLevelFilter(logging.Filter):
    """Pass only records below `max_level`."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO. At DEBUG the
        console switches to a timestamped format carrying the logger name.
    log_file: Optional[str]
        Append log records to this file as well, in the detailed format.
    log_to_console: bool
        Whether to log to the console (stdout, errors to stderr). Defaults to True.
    log_prefix: Optional[str]
        Prefix for console lines in verbose mode.
    symbols: Optional[Dict[str, str]]
        Level symbols; defaults to SYMBOLS_DEFAULT.
    """
    handlers: List[logging.Handler] = []

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if log_level <= logging.DEBUG:
            actual_prefix = (
                (log_prefix.strip() + " ")
                if log_prefix and log_prefix.strip()
                else ""
            )
            console_format = VERBOSE_CONSOLE_LOG_FORMAT.format(log_prefix=actual_prefix)
        else:
            console_format = CONSOLE_LOG_FORMAT
        console_formatter = SymbolFormatter(
            fmt=console_format,
            datefmt="%Y-%m-%d %H:%M:%S",
            symbols=symbols,
        )
        console_handler.setFormatter(console_formatter)
        console_handler.addFilter(MaxLevelFilter(logging.ERROR))
        handlers.append(console_handler)

        error_handler = logging.StreamHandler(sys.stderr)
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(console_formatter)
        handlers.append(error_handler)

    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode="a")
            file_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT))
            handlers.append(file_handler)
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if not handlers:  # pragma: no cover
        handlers.append(logging.StreamHandler(sys.stdout))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}."
    )
