"""Logging setup — rich console output plus an optional plain log file."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level: int | str = logging.INFO, log_file: str | Path | None = None) -> logging.Logger:
    """Attach handlers to the ``flurry`` logger and return it.

    Safe to call more than once; earlier handlers installed here are replaced.
    """
    logger = logging.getLogger("flurry")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_flurry_handler", False):
            logger.removeHandler(handler)
            handler.close()

    console = RichHandler(rich_tracebacks=True, show_path=False)
    console.setLevel(level)
    console._flurry_handler = True
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler._flurry_handler = True
        logger.addHandler(file_handler)

    return logger
