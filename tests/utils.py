from __future__ import annotations

import json
from typing import Callable

import httpx


def embedding_payload(vector: list[float], *, model: str = "text-embedding-ada-002", tokens: int = 1) -> dict:
    return {
        "object": "list",
        "model": model,
        "data": [{"object": "embedding", "embedding": vector, "index": 0}],
        "usage": {"prompt_tokens": tokens, "total_tokens": tokens},
    }


def empty_payload(model: str = "text-embedding-ada-002") -> dict:
    return {
        "object": "list",
        "model": model,
        "data": [],
        "usage": {"prompt_tokens": 0, "total_tokens": 0},
    }


class RecordingTransport:
    """Answers embedding calls from a text -> vector table and records each request."""

    def __init__(self, vectors: dict[str, list[float]], *, empty_for: set[str] | None = None) -> None:
        self.vectors = vectors
        self.empty_for = empty_for or set()
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        text = json.loads(request.content)["input"]
        if text in self.empty_for:
            return httpx.Response(200, json=empty_payload())
        return httpx.Response(200, json=embedding_payload(self.vectors[text], tokens=len(text)))


def status_transport(status_code: int, body: str = "") -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body, headers={"x-request-id": "req_test"})

    return handler
