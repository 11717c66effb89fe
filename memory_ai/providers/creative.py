"""CreativeProvider: the generative-breadth backend (OpenAI).

Strengths: broad knowledge, creative writing and natural conversation.
Also the embedding backend used by Orchestrator.generate_embedding().
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from memory_ai.core.config import ProviderConfig
from memory_ai.core.constants import (
    CREATIVE_DEFAULT_CONFIDENCE,
    CREATIVE_EMBEDDING_DIMENSIONS,
    CREATIVE_EMBEDDING_MODEL,
    CREATIVE_TRANSCRIPTION_MODEL,
)
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import AudioReference, PriorMemory, join_memories
from memory_ai.models.results import (
    ContextExtractionResult,
    EmbeddingVector,
    TranscriptionResult,
)
from memory_ai.providers import prompts
from memory_ai.providers.openai_compat import OpenAICompatibleClient


class CreativeProvider(OpenAICompatibleClient):
    """Client for the OpenAI API."""

    identity: ClassVar[ProviderIdentity] = ProviderIdentity.CREATIVE
    capabilities: ClassVar[tuple[Capability, ...]] = (
        Capability.TRANSCRIPTION,
        Capability.CONTEXT_EXTRACTION,
        Capability.CREATIVE,
        Capability.CONVERSATION,
        Capability.SUMMARIZATION,
    )
    embedding_dimensions: ClassVar[int] = CREATIVE_EMBEDDING_DIMENSIONS

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
        return self._config.embedding_model or CREATIVE_EMBEDDING_MODEL

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def transcribe(self, audio: AudioReference) -> TranscriptionResult:
        """Transcribe a recording by uploading it.

        Uses ``audio.content`` when present; otherwise the recording is
        downloaded from ``audio.url`` first.

        Raises:
            ProviderUnavailableError: If the audio or the backend cannot be reached.
            MalformedResponseError: If the transcript payload is incomplete.
        """
        content = audio.content
        if content is None:
            content = await self._get_bytes("transcribe", audio.url)

        payload = await self._post(
            "transcribe",
            "/audio/transcriptions",
            data={
                "model": CREATIVE_TRANSCRIPTION_MODEL,
                "response_format": "verbose_json",
                "timestamp_granularities[]": "segment",
            },
            files={"file": (audio.filename, content)},
            model=CREATIVE_TRANSCRIPTION_MODEL,
        )
        return self._validate(TranscriptionResult, _transcript_fields(payload))

    async def extract_context(self, text: str) -> ContextExtractionResult:
        """Extract structured context in JSON mode.

        Raises:
            ProviderUnavailableError: If the backend cannot be reached.
            MalformedResponseError: If the reply is not a valid extraction.
        """
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
        (values,) = await self._embeddings(
            "embed",
            [text],
            model=self.embedding_model,
            dimensions=self.embedding_dimensions,
        )
        return self._vector(values, self.embedding_model)

    async def create_story(self, source_texts: Sequence[PriorMemory]) -> str:
        return await self._chat(
            "create_story",
            [
                {"role": "system", "content": prompts.STORY_SYSTEM_PROMPT},
                {"role": "user", "content": join_memories(source_texts)},
            ],
            temperature=0.8,
            max_tokens=1000,
        )

    async def converse(self, query: str, prior_results: Sequence[PriorMemory]) -> str:
        return await self._chat(
            "converse",
            [
                {"role": "system", "content": prompts.CASUAL_CONVERSATION_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": prompts.CASUAL_CONVERSATION_PROMPT_TEMPLATE.format(
                        context=join_memories(prior_results), query=query
                    ),
                },
            ],
        )

    async def summarize(self, text: str, max_length: int) -> str:
        reply = await self._chat(
            "summarize",
            [
                {
                    "role": "user",
                    "content": prompts.SUMMARY_PROMPT_TEMPLATE.format(
                        max_length=max_length, text=text
                    ),
                }
            ],
            temperature=0.5,
            max_tokens=max_length * 2,
        )
        return reply.strip()


def _transcript_fields(payload: Any) -> Any:
    if not isinstance(payload, dict):
        return payload
    return {
        "text": payload.get("text"),
        "language": payload.get("language") or "en",
        "confidence": CREATIVE_DEFAULT_CONFIDENCE,
        "duration_seconds": payload.get("duration"),
        "segments": payload.get("segments"),
    }
