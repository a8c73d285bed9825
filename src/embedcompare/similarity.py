"""Cosine similarity scoring between embedding vectors."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from embedcompare.embeddings.types import EmbeddingResult


@dataclass(frozen=True)
class ComparisonRow:
    base: EmbeddingResult
    target: EmbeddingResult
    similarity: float | None


def _norm(vec: Sequence[float]) -> float:
    return math.sqrt(sum(value * value for value in vec))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Return the cosine of the angle between ``a`` and ``b``.

    Vectors of different length are not comparable and yield ``None``.
    A zero-norm vector yields NaN.
    """
    if len(a) != len(b):
        return None
    dot = sum(x * y for x, y in zip(a, b))
    denominator = _norm(a) * _norm(b)
    if denominator == 0:
        return math.nan
    return dot / denominator


def compare(results: Sequence[EmbeddingResult]) -> list[ComparisonRow]:
    ordered = sorted(results, key=lambda result: result.index)
    if not ordered:
        return []
    base, targets = ordered[0], ordered[1:]
    return [
        ComparisonRow(base=base, target=target, similarity=cosine_similarity(base.vector, target.vector))
        for target in targets
    ]
