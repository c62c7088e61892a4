"""Logging helpers shared by the generator, the auto-solver and the CLI."""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a compact formatter.

    Library modules only ever log at DEBUG level; the CLI calls this once
    and raises the level to DEBUG when ``--verbose`` is passed.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger under ``sudokai``."""

    if name is None:
        return logging.getLogger("sudokai")
    if name.startswith("sudokai"):
        return logging.getLogger(name)
    return logging.getLogger(f"sudokai.{name}")
