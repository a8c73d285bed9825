from __future__ import annotations

from typing import Sequence

import httpx
import pytest

from embedcompare.config import Settings
from embedcompare.embeddings import EmbeddingResult, fetch_embeddings
from embedcompare.session import Session, Status, SubmissionState, parse_targets
from embedcompare.storage import API_KEY_STORAGE_KEY, MemoryStore
from tests.utils import RecordingTransport


def _session(store: MemoryStore, transport: RecordingTransport) -> Session:
    async def fetcher(api_key: str, texts: Sequence[str]) -> list[EmbeddingResult]:
        return await fetch_embeddings(api_key, texts, transport=transport.transport)

    return Session(store, fetcher=fetcher)


@pytest.mark.asyncio
async def test_missing_key_is_a_silent_no_op(cat_dog_transport: RecordingTransport) -> None:
    store = MemoryStore()
    session = _session(store, cat_dog_transport)
    seen: list[SubmissionState] = []
    session.listeners.append(seen.append)

    state = await session.submit("cat", ["dog"])

    assert state.status is Status.IDLE
    assert state.message is None
    assert seen == []
    assert cat_dog_transport.requests == []
    assert store.get(API_KEY_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_empty_base_is_a_no_op(cat_dog_transport: RecordingTransport) -> None:
    session = _session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), cat_dog_transport)
    state = await session.submit("", ["dog"])
    assert state.status is Status.IDLE
    assert cat_dog_transport.requests == []


@pytest.mark.asyncio
async def test_cat_dog_scenario(cat_dog_transport: RecordingTransport) -> None:
    session = _session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), cat_dog_transport)
    seen: list[Status] = []
    session.listeners.append(lambda state: seen.append(state.status))

    state = await session.submit("cat", ["dog", "cat"])

    assert seen == [Status.REQUESTING, Status.COMPLETE]
    assert state.status is Status.COMPLETE
    assert state.message == "Complete!"
    assert len(cat_dog_transport.requests) == 3
    scores = {row.target.index: row.similarity for row in state.comparisons}
    assert scores[1] == pytest.approx(0.0)
    assert scores[2] == pytest.approx(1.0)
    assert scores[2] > scores[1]


@pytest.mark.asyncio
async def test_key_is_persisted_even_when_the_batch_fails() -> None:
    transport = RecordingTransport({"cat": [1.0, 0.0]}, empty_for={"dog"})
    store = MemoryStore()
    session = _session(store, transport)
    session.api_key = "sk-typed"

    state = await session.submit("cat", ["dog"])

    assert state.status is Status.ERROR
    assert state.message is not None
    assert state.message.startswith("Error... (")
    assert state.results is None
    assert state.comparisons == []
    assert store.get(API_KEY_STORAGE_KEY) == "sk-typed"


@pytest.mark.asyncio
async def test_new_submission_clears_previous_results(cat_dog_transport: RecordingTransport) -> None:
    session = _session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), cat_dog_transport)
    await session.submit("cat", ["dog"])
    seen: list[SubmissionState] = []
    session.listeners.append(seen.append)

    await session.submit("cat", ["cat"])

    assert seen[0].status is Status.REQUESTING
    assert seen[0].message == "Requesting..."
    assert seen[0].results is None
    assert seen[-1].status is Status.COMPLETE


@pytest.mark.asyncio
async def test_error_message_carries_exception_text() -> None:
    async def failing(api_key: str, texts: Sequence[str]) -> list[EmbeddingResult]:
        raise RuntimeError("boom")

    session = Session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), fetcher=failing)
    state = await session.submit("cat")

    assert state.status is Status.ERROR
    assert state.message == "Error... (boom)"


@pytest.mark.asyncio
async def test_default_fetcher_uses_settings() -> None:
    session = Session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), settings=Settings(mode="mock", model="mock-model"))
    state = await session.submit("cat", ["dog"])

    assert state.status is Status.COMPLETE
    assert [result.model for result in state.results or []] == ["mock-model", "mock-model"]
    assert len(state.comparisons) == 1


def test_parse_targets_splits_lines() -> None:
    assert parse_targets("dog\n  cat \n\nbird") == ["dog", "cat", "", "bird"]
    assert parse_targets("") == []


class _ReadOnlyStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise PermissionError("read-only store")


@pytest.mark.asyncio
async def test_store_write_failure_becomes_error_state(cat_dog_transport: RecordingTransport) -> None:
    store = _ReadOnlyStore({API_KEY_STORAGE_KEY: "sk-test"})
    session = _session(store, cat_dog_transport)

    state = await session.submit("cat", ["dog"])

    assert state.status is Status.ERROR
    assert state.message == "Error... (read-only store)"
    assert session.state is state
    assert cat_dog_transport.requests == []


@pytest.mark.asyncio
async def test_error_without_text_names_the_exception() -> None:
    async def timing_out(api_key: str, texts: Sequence[str]) -> list[EmbeddingResult]:
        raise httpx.ReadTimeout("")

    session = Session(MemoryStore({API_KEY_STORAGE_KEY: "sk-test"}), fetcher=timing_out)
    state = await session.submit("cat")

    assert state.status is Status.ERROR
    assert state.message == "Error... (ReadTimeout)"
