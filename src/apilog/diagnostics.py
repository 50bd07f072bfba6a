"""Diagnostics sink Protocol and console logging setup."""
from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "apilog"


@runtime_checkable
class Diagnostics(Protocol):
    """Where the pipeline reports excluded lines and run outcomes.

    Any :class:`logging.Logger` satisfies this Protocol; tests pass a
    capturing double instead.
    """

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler on stderr to the package logger.

    Idempotent: calling it again only updates the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
