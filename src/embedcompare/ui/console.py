"""Shared consoles and status spinner for embedcompare."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console

from embedcompare.ui.theme import THEME

_CONSOLE = Console(theme=THEME, highlight=False)
# Logs go to stderr so command output stays clean for piping.
_ERR_CONSOLE = Console(theme=THEME, highlight=False, stderr=True)


def get_console(*, stderr: bool = False) -> Console:
    return _ERR_CONSOLE if stderr else _CONSOLE


@contextmanager
def status_spinner(message: str) -> Iterator[object]:
    with get_console().status(message, spinner="dots", spinner_style="accent") as status:
        yield status
