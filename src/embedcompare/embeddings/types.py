"""Embedding request/response types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EmbeddingRequest:
    model: str
    input: str

    def to_body(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "input": self.input,
        }


@dataclass(frozen=True)
class EmbeddingResult:
    text: str
    vector: list[float]
    index: int
    total_tokens: int
    prompt_tokens: int
    model: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def dims(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class BatchUsage:
    prompt_tokens: int
    total_tokens: int


def batch_usage(results: list[EmbeddingResult]) -> BatchUsage:
    return BatchUsage(
        prompt_tokens=sum(result.prompt_tokens for result in results),
        total_tokens=sum(result.total_tokens for result in results),
    )
