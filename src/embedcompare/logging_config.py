"""Logging setup for embedcompare."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from embedcompare.ui.console import get_console


def setup_logging(level: str = "WARNING") -> None:
    log_level = getattr(logging, level.upper(), logging.WARNING)
    handler = RichHandler(
        console=get_console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("embedcompare")
    root.setLevel(log_level)
    # Replace handlers so repeated setup does not duplicate output.
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.propagate = False

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
