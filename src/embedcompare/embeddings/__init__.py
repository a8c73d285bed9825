"""Embeddings client interfaces."""

from embedcompare.embeddings.client import (
    EmbeddingsClient,
    create_embeddings_client,
    embed_batch,
    fetch_embeddings,
)
from embedcompare.embeddings.mock import MockEmbeddingsClient
from embedcompare.embeddings.openai import (
    EmbeddingsAPIError,
    EmbeddingsError,
    EmptyEmbeddingResponse,
    OpenAIEmbeddingsClient,
)
from embedcompare.embeddings.types import BatchUsage, EmbeddingRequest, EmbeddingResult, batch_usage

__all__ = [
    "BatchUsage",
    "EmbeddingRequest",
    "EmbeddingResult",
    "EmbeddingsAPIError",
    "EmbeddingsClient",
    "EmbeddingsError",
    "EmptyEmbeddingResponse",
    "MockEmbeddingsClient",
    "OpenAIEmbeddingsClient",
    "batch_usage",
    "create_embeddings_client",
    "embed_batch",
    "fetch_embeddings",
]
