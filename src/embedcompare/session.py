"""Application state and the submission state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Awaitable, Callable, Sequence

from embedcompare.config import Settings
from embedcompare.embeddings.client import fetch_embeddings
from embedcompare.embeddings.types import EmbeddingResult
from embedcompare.similarity import ComparisonRow, compare
from embedcompare.storage import API_KEY_STORAGE_KEY, KeyValueStore

logger = logging.getLogger(__name__)

MESSAGE_REQUESTING = "Requesting..."
MESSAGE_COMPLETE = "Complete!"

Fetcher = Callable[[str, Sequence[str]], Awaitable[list[EmbeddingResult]]]
Listener = Callable[["SubmissionState"], None]


class Status(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class SubmissionState:
    status: Status = Status.IDLE
    message: str | None = None
    results: list[EmbeddingResult] | None = None
    comparisons: list[ComparisonRow] = field(default_factory=list)


def parse_targets(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


def error_message(exc: BaseException) -> str:
    return f"Error... ({str(exc) or type(exc).__name__})"


class Session:
    """Form values plus the outcome of the latest submission.

    The API key is read from ``store`` once, at construction. Each submission
    that passes the credential check writes it back before any request is
    sent, so a failed submission still persists the key.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        settings: Settings | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or Settings()
        self.api_key: str | None = store.get(API_KEY_STORAGE_KEY) or None
        self.state = SubmissionState()
        self.listeners: list[Listener] = []
        self._fetcher = fetcher or self._fetch

    async def submit(self, base: str, targets: Sequence[str] = ()) -> SubmissionState:
        if not self.api_key:
            logger.debug("Submission ignored: no API key")
            return self.state
        if not base:
            logger.debug("Submission ignored: empty base text")
            return self.state

        self._set_state(SubmissionState(status=Status.REQUESTING, message=MESSAGE_REQUESTING))
        try:
            self.store.set(API_KEY_STORAGE_KEY, self.api_key)
            results = await self._fetcher(self.api_key, [base, *targets])
        except Exception as exc:
            logger.info("Submission failed: %s", exc)
            failed = SubmissionState(status=Status.ERROR, message=error_message(exc))
            self._set_state(failed)
            return failed

        completed = SubmissionState(
            status=Status.COMPLETE,
            message=MESSAGE_COMPLETE,
            results=results,
            comparisons=compare(results),
        )
        self._set_state(completed)
        return completed

    def _set_state(self, state: SubmissionState) -> None:
        self.state = state
        for listener in self.listeners:
            listener(state)

    async def _fetch(self, api_key: str, texts: Sequence[str]) -> list[EmbeddingResult]:
        return await fetch_embeddings(
            api_key,
            texts,
            mode=self.settings.mode,
            model=self.settings.model,
            base_url=self.settings.base_url,
            timeout_s=self.settings.timeout_s,
        )
