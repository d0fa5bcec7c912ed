# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
utils.py

Logging setup for applications that want to see what the engine does.

Argweave only ever logs to the "argweave" logger. `setup_logging` attaches
handlers to that logger alone and stops it from propagating, so the host
application's root logger and its handlers are left untouched.
"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.console import Console
from rich.logging import RichHandler

from argweave.console import console as default_console
from argweave.logger import logger

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _console_handler(mode: str, console: Console) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
    elif mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(LOG_FORMAT))
        return handler
    raise ValueError(f"Invalid log mode: {mode}")


def setup_logging(
    mode: str | None = None,
    level: int | str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    console: Console | None = None,
) -> logging.Logger:
    """
    Route the engine's log records to the console and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        mode (str | None): "cli" for Rich output through the shared argweave
            console, or "json" for one JSON object per line on stderr.
            Defaults to `ARGWEAVE_LOG_MODE`, then "cli".
        level (int | str | None): Level for the "argweave" logger. Defaults to
            `ARGWEAVE_LOG_LEVEL`, then "DEBUG", which shows flag resolution,
            discarded alternatives and suppressed optional failures.
        log_filename (str | None): Also write records to this file.
        json_log_to_file (bool): Format file records as JSON.
        console (Console | None): Console for "cli" mode.

    Returns:
        logging.Logger: The configured "argweave" logger.

    Raises:
        ValueError: If `mode` or `level` is not recognised.
    """
    mode = (mode or os.getenv("ARGWEAVE_LOG_MODE") or "cli").lower()
    level = level or os.getenv("ARGWEAVE_LOG_LEVEL") or logging.DEBUG
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    handlers = [_console_handler(mode, console or default_console)]
    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        if json_log_to_file:
            file_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(LOG_FORMAT))
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        handlers.append(file_handler)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logging initialized in '%s' mode.", mode)
    return logger
