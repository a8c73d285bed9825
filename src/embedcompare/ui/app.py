"""Textual TUI for embedcompare."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static, TextArea

from embedcompare.config import load_settings
from embedcompare.env import load_dotenv
from embedcompare.session import Session, SubmissionState, Status, parse_targets
from embedcompare.storage import JsonFileStore
from embedcompare.ui.render import format_similarity

_PREVIEW_DIMS = 4


class EmbedCompareApp(App):
    CSS_PATH = "styles.tcss"
    TITLE = "Text embedding comparison"
    BINDINGS = [("ctrl+s", "submit", "Submit")]

    def __init__(self, session: Session | None = None) -> None:
        super().__init__()
        if session is None:
            load_dotenv()
            settings = load_settings()
            session = Session(JsonFileStore(settings.store_path), settings=settings)
        self.session = session
        self.session.listeners.append(self._show_state)

    def compose(self) -> ComposeResult:
        yield Header()
        surface = VerticalScroll(id="form-surface", classes="surface")
        surface.border_title = "Embed & compare"
        with surface:
            yield Input(
                value=self.session.api_key or "",
                placeholder="OPENAI API key",
                password=True,
                id="api-key",
            )
            yield Input(placeholder="Base text", id="base-text")
            yield Label("Target texts (one per line)", classes="field-label")
            yield TextArea(id="target-texts")
            yield Button("Submit", id="submit", variant="primary")
            yield Static("", id="status")
            yield Static("", id="usage")
            yield DataTable(id="comparisons", zebra_stripes=True)
            yield DataTable(id="vectors")
        yield Footer()

    def on_mount(self) -> None:
        comparisons = self.query_one("#comparisons", DataTable)
        comparisons.add_columns("#", "Base", "Target", "Cosine similarity")
        vectors = self.query_one("#vectors", DataTable)
        vectors.add_columns("#", "Text", "Dims", "Tokens", "Leading values")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.action_submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "base-text":
            self.action_submit()

    def action_submit(self) -> None:
        self.session.api_key = self.query_one("#api-key", Input).value.strip() or None
        base = self.query_one("#base-text", Input).value
        targets = parse_targets(self.query_one("#target-texts", TextArea).text)
        # Overlapping submissions are independent batches; none is cancelled.
        self.run_worker(self.session.submit(base, targets), group="submissions", exclusive=False)

    def _show_state(self, state: SubmissionState) -> None:
        status = self.query_one("#status", Static)
        status.update(state.message or "")
        status.set_class(state.status is Status.ERROR, "error")
        status.set_class(state.status is Status.COMPLETE, "complete")

        usage = self.query_one("#usage", Static)
        comparisons = self.query_one("#comparisons", DataTable)
        vectors = self.query_one("#vectors", DataTable)
        comparisons.clear()
        vectors.clear()
        if state.status is not Status.COMPLETE or state.results is None:
            usage.update("")
            return

        usage.update(f"Total token: {sum(result.total_tokens for result in state.results)}")
        for row in state.comparisons:
            comparisons.add_row(
                str(row.target.index),
                row.base.text,
                row.target.text,
                format_similarity(row.similarity),
            )
        for result in state.results:
            leading = ", ".join(f"{value:.6f}" for value in result.vector[:_PREVIEW_DIMS])
            vectors.add_row(str(result.index), result.text, str(result.dims), str(result.total_tokens), leading)


def run_app() -> None:
    EmbedCompareApp().run()
