"""OpenAI-compatible embeddings client."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any

import httpx

from embedcompare.embeddings.types import EmbeddingRequest, EmbeddingResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "text-embedding-ada-002"


class EmbeddingsError(RuntimeError):
    """Base class for embedding request failures."""


@dataclass
class EmbeddingsAPIError(EmbeddingsError):
    status_code: int
    response_text: str
    request_id: str | None
    request: dict[str, Any]

    def __str__(self) -> str:
        return f"EmbeddingsAPIError(status={self.status_code}, request_id={self.request_id}): {self.response_text}"


class EmptyEmbeddingResponse(EmbeddingsError):
    def __init__(self, text: str) -> None:
        super().__init__("Embedding request failed: response contained no embeddings.")
        self.text = text


class OpenAIEmbeddingsClient:
    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("An API key is required for remote embeddings.")
        self._api_key = api_key
        self._model = model
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout_s, transport=transport)

    @property
    def model(self) -> str:
        return self._model

    async def embed_one(self, text: str, index: int) -> EmbeddingResult:
        request = EmbeddingRequest(model=self._model, input=text)
        body = request.to_body()
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        start = time.monotonic()
        response = await self._client.post("/embeddings", json=body, headers=headers)
        latency_ms = int((time.monotonic() - start) * 1000)
        request_id = _extract_request_id(response.headers)
        logger.debug("POST /embeddings index=%d status=%d latency_ms=%d", index, response.status_code, latency_ms)

        if response.status_code < 200 or response.status_code >= 300:
            raise EmbeddingsAPIError(
                status_code=response.status_code,
                response_text=response.text,
                request_id=request_id,
                request=_sanitize_request(body, headers),
            )

        payload = response.json()
        data = payload.get("data") or []
        if not data:
            raise EmptyEmbeddingResponse(text)

        usage = payload.get("usage") or {}
        embedding = [float(value) for value in data[0].get("embedding") or []]
        return EmbeddingResult(
            text=text,
            vector=embedding,
            index=index,
            total_tokens=int(usage.get("total_tokens", 0)),
            prompt_tokens=int(usage.get("prompt_tokens", 0)),
            model=payload.get("model", self._model),
            raw={"latency_ms": latency_ms, "request_id": request_id, "response_index": data[0].get("index")},
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def _extract_request_id(headers: httpx.Headers) -> str | None:
    return headers.get("x-request-id") or headers.get("openai-request-id")


def _sanitize_request(body: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
    scrubbed_headers = {key: value for key, value in headers.items() if key.lower() != "authorization"}
    return {
        "body": body,
        "headers": scrubbed_headers,
    }
