"""FastProvider: the low-latency, multilingual backend (Moonshot, OpenAI dialect).

Strengths: real-time transcription, translation, code understanding and
semantic similarity. Its transcription endpoint accepts the audio URL
directly, so no upload is needed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from memory_ai.core.config import ProviderConfig
from memory_ai.core.constants import (
    FAST_DEFAULT_CONFIDENCE,
    FAST_EMBEDDING_DIMENSIONS,
    FAST_EMBEDDING_MODEL,
    FAST_TRANSCRIPTION_MODEL,
)
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import AudioReference
from memory_ai.models.results import (
    CodeAnalysisResult,
    ContextExtractionResult,
    EmbeddingVector,
    TranscriptionResult,
)
from memory_ai.providers import prompts
from memory_ai.providers.openai_compat import OpenAICompatibleClient


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors.

    Returns 0.0 when either vector has zero magnitude.

    Example:
        >>> cosine_similarity([1.0, 0.0], [1.0, 0.0])
        1.0
    """
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    magnitude = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if magnitude == 0.0:
        return 0.0
    return dot / magnitude


class FastProvider(OpenAICompatibleClient):
    """Client for the Moonshot API."""

    identity: ClassVar[ProviderIdentity] = ProviderIdentity.FAST
    capabilities: ClassVar[tuple[Capability, ...]] = (
        Capability.TRANSCRIPTION,
        Capability.TRANSLATION,
        Capability.CODE_ANALYSIS,
        Capability.SEARCH,
        Capability.CONTEXT_EXTRACTION,
    )
    embedding_dimensions: ClassVar[int] = FAST_EMBEDDING_DIMENSIONS

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        extraction_prompt: str = prompts.EXTRACTION_SYSTEM_PROMPT,
    ) -> None:
        super().__init__(config, transport)
        self._extraction_prompt = extraction_prompt

    @property
    def embedding_model(self) -> str:
        return self._config.embedding_model or FAST_EMBEDDING_MODEL

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def transcribe(self, audio: AudioReference) -> TranscriptionResult:
        """Transcribe a recording by URL.

        Raises:
            ProviderUnavailableError: If the backend cannot be reached.
            MalformedResponseError: If the transcript payload is incomplete.
        """
        payload = await self._post(
            "transcribe",
            "/audio/transcriptions",
            json={
                "file": audio.url,
                "model": FAST_TRANSCRIPTION_MODEL,
                "response_format": "verbose_json",
                "timestamp_granularities": ["word", "segment"],
                "language": "auto",
            },
            model=FAST_TRANSCRIPTION_MODEL,
        )
        return self._validate(TranscriptionResult, _transcript_fields(payload))

    async def translate(self, text: str, target_language: str) -> str:
        return await self._chat(
            "translate",
            [
                {
                    "role": "system",
                    "content": prompts.TRANSLATION_SYSTEM_PROMPT_TEMPLATE.format(
                        target_language=target_language
                    ),
                },
                {"role": "user", "content": text},
            ],
            temperature=0.3,
            max_tokens=self._config.max_tokens,
        )

    async def analyze_code(self, code: str) -> CodeAnalysisResult:
        reply = await self._chat(
            "analyze_code",
            [
                {"role": "system", "content": prompts.CODE_ANALYSIS_SYSTEM_PROMPT},
                {"role": "user", "content": code},
            ],
            temperature=0.2,
            max_tokens=1000,
            json_mode=True,
        )
        return self._validate(CodeAnalysisResult, self._decode_json_text(reply))

    async def extract_context(self, text: str) -> ContextExtractionResult:
        reply = await self._chat(
            "extract_context",
            [
                {"role": "system", "content": self._extraction_prompt},
                {"role": "user", "content": text},
            ],
            temperature=0.3,
            json_mode=True,
        )
        return self._validate(ContextExtractionResult, self._decode_json_text(reply))

    async def embed(self, text: str) -> EmbeddingVector:
        (values,) = await self._embeddings("embed", [text], model=self.embedding_model)
        return self._vector(values, self.embedding_model)

    async def semantic_search(self, query: str, documents: Sequence[str]) -> list[float]:
        """Score each document against the query by cosine similarity.

        The query and all documents are embedded in one request.

        Returns:
            One score per document, in document order. Empty when there are
            no documents (no request is made).
        """
        if not documents:
            return []

        rows = await self._embeddings(
            "semantic_search", [query, *documents], model=self.embedding_model
        )
        query_vector, *document_vectors = (
            self._vector(values, self.embedding_model) for values in rows
        )
        return [
            cosine_similarity(query_vector.values, doc.values) for doc in document_vectors
        ]


def _transcript_fields(payload: Any) -> Any:
    """Map a verbose_json transcription payload onto TranscriptionResult fields."""
    if not isinstance(payload, dict):
        return payload
    confidence = payload.get("confidence")
    return {
        "text": payload.get("text"),
        "language": payload.get("language"),
        "confidence": FAST_DEFAULT_CONFIDENCE if confidence is None else confidence,
        "duration_seconds": payload.get("duration"),
        "segments": payload.get("segments"),
    }
