"""Mock embeddings client."""

from __future__ import annotations

import hashlib
import math
import random

from embedcompare.embeddings.types import EmbeddingResult


class MockEmbeddingsClient:
    def __init__(self, model: str, dims: int = 64) -> None:
        self._model = model
        self._dims = dims

    @property
    def model(self) -> str:
        return self._model

    async def embed_one(self, text: str, index: int) -> EmbeddingResult:
        seed = int(hashlib.sha256((self._model + "|" + text).encode("utf-8")).hexdigest(), 16) % (2**32)
        rng = random.Random(seed)
        vec = [rng.gauss(0, 1) for _ in range(self._dims)]
        norm = math.sqrt(sum(value * value for value in vec)) or 1.0
        tokens = max(1, len(text.split()))
        return EmbeddingResult(
            text=text,
            vector=[value / norm for value in vec],
            index=index,
            total_tokens=tokens,
            prompt_tokens=tokens,
            model=self._model,
            raw={"mock": True},
        )

    async def aclose(self) -> None:
        return None
