"""Render helpers for embedcompare."""

from __future__ import annotations

import math
from typing import Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from embedcompare.embeddings.types import EmbeddingResult, batch_usage
from embedcompare.session import Status, SubmissionState
from embedcompare.similarity import ComparisonRow
from embedcompare.ui.console import get_console

_STATUS_STYLES = {
    Status.IDLE: "info",
    Status.REQUESTING: "info",
    Status.COMPLETE: "success",
    Status.ERROR: "error",
}


def format_similarity(value: float | None) -> str:
    if value is None:
        return ""
    if math.isnan(value):
        return "nan"
    return f"{value:.6f}"


def mask_key(api_key: str | None) -> str:
    if not api_key:
        return "(not set)"
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:3]}...{api_key[-4:]}"


def render_banner(title: str, subtitle: str) -> None:
    console = get_console()
    panel = Panel(
        Group(Text(subtitle, style="subtitle")),
        title=Text(title, style="title"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_info(text: str) -> None:
    get_console().print(text, style="info", markup=False)


def render_warning(text: str) -> None:
    get_console().print(text, style="warning", markup=False)


def render_success(text: str) -> None:
    get_console().print(text, style="success", markup=False)


def render_error(text: str) -> None:
    console = get_console()
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_status(state: SubmissionState) -> None:
    if not state.message:
        return
    if state.status is Status.ERROR:
        render_error(state.message)
        return
    get_console().print(state.message, style=_STATUS_STYLES[state.status], markup=False)


def build_vector_table(result: EmbeddingResult, max_dims: int | None = None) -> Table:
    table = Table(
        title=Text(result.text, style="accent"),
        title_justify="left",
        show_header=False,
        box=box.SIMPLE,
        pad_edge=False,
    )
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")
    shown = result.vector if max_dims is None else result.vector[:max_dims]
    for position, score in enumerate(shown, start=1):
        table.add_row(f"#{position}", repr(score))
    hidden = len(result.vector) - len(shown)
    if hidden > 0:
        table.add_row("...", Text(f"{hidden} more of {result.dims}", style="subtitle"))
    return table


def render_vectors(results: Sequence[EmbeddingResult], max_dims: int | None = None) -> None:
    console = get_console()
    usage = batch_usage(list(results))
    console.print(Text(f"Total token: {usage.total_tokens}", style="label"))
    for result in results:
        console.print(build_vector_table(result, max_dims=max_dims))


def build_comparison_table(rows: Sequence[ComparisonRow]) -> Table:
    table = Table(show_header=True, box=box.ROUNDED, border_style="border", header_style="label")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Base")
    table.add_column("Target")
    table.add_column("Cosine similarity", justify="right", style="score", no_wrap=True)
    for row in rows:
        table.add_row(
            str(row.target.index),
            row.base.text,
            row.target.text,
            format_similarity(row.similarity),
        )
    return table


def render_comparisons(rows: Sequence[ComparisonRow]) -> None:
    if not rows:
        render_info("No target texts to compare.")
        return
    get_console().print(build_comparison_table(rows))


def render_summary_table(rows: dict[str, str], title: str = "Summary") -> None:
    console = get_console()
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")
    for key, value in rows.items():
        table.add_row(Text(str(key), style="label"), Text(str(value), style="value"))
    panel = Panel(
        table,
        title=Text(title, style="title"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)
