"""Embedding client interface, factory and batch fan-out."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence

import httpx

from embedcompare.embeddings.mock import MockEmbeddingsClient
from embedcompare.embeddings.openai import DEFAULT_MODEL, OpenAIEmbeddingsClient
from embedcompare.embeddings.types import EmbeddingResult

logger = logging.getLogger(__name__)


class EmbeddingsClient(Protocol):
    async def embed_one(self, text: str, index: int) -> EmbeddingResult:
        ...

    async def aclose(self) -> None:
        ...


def create_embeddings_client(
    mode: str,
    *,
    api_key: str,
    model: str = DEFAULT_MODEL,
    base_url: str | None = None,
    timeout_s: float = 60.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> EmbeddingsClient:
    if mode == "mock":
        return MockEmbeddingsClient(model=model)
    if mode == "remote":
        return OpenAIEmbeddingsClient(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout_s=timeout_s,
            transport=transport,
        )
    raise ValueError(f"Unsupported embeddings mode: {mode}")


async def embed_batch(client: EmbeddingsClient, texts: Sequence[str]) -> list[EmbeddingResult]:
    """Embed every non-empty text concurrently; any failure fails the batch."""
    inputs = [text for text in texts if text]
    if not inputs:
        return []
    logger.info("Requesting %d embeddings", len(inputs))
    outcomes = await asyncio.gather(
        *(client.embed_one(text, index) for index, text in enumerate(inputs)),
        return_exceptions=True,
    )
    # Every call has settled here, so raising leaves nothing in flight.
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return sorted(outcomes, key=lambda result: result.index)


async def fetch_embeddings(
    api_key: str,
    texts: Sequence[str],
    *,
    mode: str = "remote",
    model: str = DEFAULT_MODEL,
    base_url: str | None = None,
    timeout_s: float = 60.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[EmbeddingResult]:
    """Fetch one embedding per non-empty text using a single shared credential.

    Empty strings are dropped before anything else; when nothing is left no
    client is built and no request is sent. Each result's ``index`` is the
    text's position among the non-empty inputs.
    """
    if not any(texts):
        return []
    client = create_embeddings_client(
        mode,
        api_key=api_key,
        model=model,
        base_url=base_url,
        timeout_s=timeout_s,
        transport=transport,
    )
    try:
        return await embed_batch(client, texts)
    finally:
        await client.aclose()
