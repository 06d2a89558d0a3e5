# Copyright (c) Syntropy Systems
"""Logging setup for the command line tools.

The library itself only creates module loggers; handlers are installed by
the CLI through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.console import Console
from rich.logging import RichHandler

_LEVELS: Mapping[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(level: str) -> int:
    """Map a level name to its numeric value, defaulting to WARNING."""
    return _LEVELS.get(level.lower(), logging.WARNING)


def configure_logging(level: str = "warning", console: Console | None = None) -> None:
    """Route crucible_ir log records through a rich handler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        keywords=["Decode", "Dropping", "Keeping"],
    )
    logging.basicConfig(
        level=resolve_level(level),
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
