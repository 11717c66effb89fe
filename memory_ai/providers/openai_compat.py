"""Shared plumbing for backends that speak the OpenAI REST dialect.

Both the FastProvider (Moonshot) and the CreativeProvider (OpenAI) expose
/chat/completions, /embeddings and /audio/transcriptions with the same
request and response shapes, so the request building and response
unpacking live here once.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from memory_ai.core.exceptions import MalformedResponseError
from memory_ai.models.results import EmbeddingVector
from memory_ai.providers.base import ProviderClient


class OpenAICompatibleClient(ProviderClient):
    """ProviderClient base for OpenAI-dialect backends.

    Attributes:
        embedding_dimensions: Length of every vector the embedding model
            returns. Fixed per client class.
    """

    embedding_dimensions: ClassVar[int]

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _chat(
        self,
        operation: str,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
        model: str | None = None,
    ) -> str:
        """Run one chat completion and return the assistant message text."""
        body: dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": (
                self._config.temperature if temperature is None else temperature
            ),
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        payload = await self._post(
            operation, "/chat/completions", json=body, model=body["model"]
        )
        return self._text(payload, "choices", 0, "message", "content")

    async def _embeddings(
        self,
        operation: str,
        inputs: Sequence[str],
        *,
        model: str,
        dimensions: int | None = None,
    ) -> list[list[float]]:
        """Embed each input; vectors are returned in input order."""
        body: dict[str, Any] = {"model": model, "input": list(inputs)}
        if dimensions is not None:
            body["dimensions"] = dimensions

        payload = await self._post(operation, "/embeddings", json=body, model=model)
        rows = self._dig(payload, "data")
        count = len(rows) if isinstance(rows, list) else 0
        if count != len(inputs):
            raise MalformedResponseError(
                f"{self.identity.value} returned {count} "
                f"embeddings for {len(inputs)} input(s)",
                provider=self.identity.value,
                raw=str(payload),
            )

        # The API may return rows out of order; "index" is authoritative
        if all(isinstance(r, dict) and "index" in r for r in rows):
            rows = sorted(rows, key=lambda r: r["index"])
        return [self._dig(row, "embedding") for row in rows]

    def _vector(self, values: Any, model: str) -> EmbeddingVector:
        """Validate raw values against this client's fixed dimensionality."""
        return self._validate(
            EmbeddingVector,
            {
                "values": values,
                "dimensionality": self.embedding_dimensions,
                "source_model": model,
            },
        )
