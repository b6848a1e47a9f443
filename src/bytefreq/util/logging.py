from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_level(level: Union[int, str], verbose: bool = False) -> int:
    """Map a level name or number to a logging level; ``verbose`` forces DEBUG."""
    if verbose:
        return logging.DEBUG
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
    return logging.getLevelName(name)


def configure_logging(level: Union[int, str] = "INFO", verbose: bool = False) -> None:
    # stdout carries the report, so log records go to stderr
    console = Console(stderr=True)
    logging.basicConfig(
        level=resolve_level(level, verbose),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)
