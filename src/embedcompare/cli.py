"""CLI entrypoint for embedcompare."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from embedcompare.config import Settings, load_settings
from embedcompare.env import load_dotenv
from embedcompare.logging_config import setup_logging
from embedcompare.session import MESSAGE_REQUESTING, Session, Status, SubmissionState, parse_targets
from embedcompare.storage import API_KEY_STORAGE_KEY, JsonFileStore
from embedcompare.ui.console import status_spinner
from embedcompare.ui.render import (
    mask_key,
    render_banner,
    render_comparisons,
    render_error,
    render_info,
    render_status,
    render_success,
    render_summary_table,
    render_vectors,
    render_warning,
)

app = typer.Typer(add_completion=False, help="Embed texts and compare them by cosine similarity.")
key_app = typer.Typer(add_completion=False, help="Manage the cached API key.")
app.add_typer(key_app, name="key")

_MISSING_KEY_HINT = "No API key. Pass --api-key, set OPENAI_API_KEY, or run `embedcompare key set`."


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (default from EMBEDCOMPARE_LOG_LEVEL)."),
) -> None:
    """Text embedding comparison CLI."""
    load_dotenv()
    try:
        settings = load_settings()
    except ValueError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc
    settings = settings.with_overrides(log_level=log_level)
    setup_logging(settings.log_level)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("compare")
def compare_command(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Base text."),
    targets: list[str] | None = typer.Argument(None, help="Target texts compared against the base."),
    targets_file: Path | None = typer.Option(None, "--targets-file", "-f", help="File with one target text per line."),
    api_key: str | None = typer.Option(None, "--api-key", envvar="OPENAI_API_KEY", help="API key; cached after use."),
    mock: bool = typer.Option(False, "--mock", help="Use deterministic local vectors instead of the API."),
    model: str | None = typer.Option(None, "--model", help="Embedding model identifier."),
    show_vectors: bool = typer.Option(False, "--show-vectors", help="Print every vector."),
    max_dims: int = typer.Option(8, "--max-dims", min=1, help="Vector components shown per text."),
) -> None:
    """Embed BASE and each target, then score every target against BASE."""
    settings = _command_settings(ctx, mock=mock, model=model)
    target_list = list(targets or [])
    if targets_file is not None:
        try:
            target_list.extend(parse_targets(targets_file.read_text(encoding="utf-8")))
        except OSError as exc:
            render_error(f"Failed to read targets: {exc}")
            raise typer.Exit(code=1) from exc

    state = _submit(settings, api_key, base, target_list)
    if show_vectors and state.results:
        render_vectors(state.results, max_dims=max_dims)
    else:
        render_info(f"Total token: {sum(result.total_tokens for result in state.results or [])}")
    render_comparisons(state.comparisons)


@app.command("embed")
def embed_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to embed."),
    api_key: str | None = typer.Option(None, "--api-key", envvar="OPENAI_API_KEY", help="API key; cached after use."),
    mock: bool = typer.Option(False, "--mock", help="Use deterministic local vectors instead of the API."),
    model: str | None = typer.Option(None, "--model", help="Embedding model identifier."),
    max_dims: int | None = typer.Option(None, "--max-dims", min=1, help="Vector components shown (default: all)."),
) -> None:
    """Embed a single text and print its vector."""
    settings = _command_settings(ctx, mock=mock, model=model)
    state = _submit(settings, api_key, text, [])
    render_vectors(state.results or [], max_dims=max_dims)


@app.command("tui")
def tui_command() -> None:
    """Open the interactive form."""
    from embedcompare.ui.app import run_app

    run_app()


@app.command("settings")
def settings_command(ctx: typer.Context) -> None:
    """Show the resolved settings."""
    settings: Settings = ctx.obj
    render_summary_table(settings.to_dict(), title="Settings")


@key_app.command("set")
def key_set(ctx: typer.Context, api_key: str = typer.Argument(..., help="API key to cache.")) -> None:
    """Cache an API key for later runs."""
    settings: Settings = ctx.obj
    store = JsonFileStore(settings.store_path)
    store.set(API_KEY_STORAGE_KEY, api_key.strip())
    render_success(f"API key cached in {store.path}")


@key_app.command("show")
def key_show(ctx: typer.Context) -> None:
    """Show the cached API key, masked."""
    settings: Settings = ctx.obj
    store = JsonFileStore(settings.store_path)
    render_info(mask_key(store.get(API_KEY_STORAGE_KEY)))


def _command_settings(ctx: typer.Context, *, mock: bool, model: str | None) -> Settings:
    settings: Settings = ctx.obj
    return settings.with_overrides(mode="mock" if mock else None, model=model)


def _submit(settings: Settings, api_key: str | None, base: str, targets: list[str]) -> SubmissionState:
    if not base:
        render_warning("Base text is required.")
        raise typer.Exit(code=1)
    session = Session(JsonFileStore(settings.store_path), settings=settings)
    if api_key:
        session.api_key = api_key.strip()
    if not session.api_key:
        render_warning(_MISSING_KEY_HINT)
        raise typer.Exit(code=1)

    render_banner("embedcompare", f"{settings.model} · {settings.mode}")
    with status_spinner(MESSAGE_REQUESTING):
        state = asyncio.run(session.submit(base, targets))
    render_status(state)
    if state.status is Status.ERROR:
        raise typer.Exit(code=1)
    return state


def main() -> None:
    app()


if __name__ == "__main__":
    main()
