# src/tetris_ai/utils/logging.py
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ("debug", "info", "warning", "error")


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """
    Configure a named logger with exactly one handler.

    Library modules only call logging.getLogger(__name__); the app entrypoint
    calls this once for the package root ("tetris_ai") so every child logger
    shares the handler.
    Records go to stderr so stdout stays free for reports.
    """
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False

    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(lvl)

    handler: logging.Handler
    if use_rich:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    return logger


__all__ = ["setup_logger", "LOG_LEVELS"]
