"""Logging helpers for the b64inspect command line."""
from __future__ import annotations

import logging
import sys
from typing import Iterable


def configure_logging(level: str = "WARNING", extra_handlers: Iterable[logging.Handler] | None = None) -> None:
    """Configure application logging with standard Python logging.

    Logs go to stderr so they never mix with decoded bytes written to stdout.
    """
    logging_level = getattr(logging, level.upper(), logging.WARNING)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging_level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    handlers = [console_handler]
    if extra_handlers:
        handlers.extend(extra_handlers)

    logging.basicConfig(
        level=logging_level,
        handlers=handlers,
        force=True,
    )


__all__ = ["configure_logging"]
