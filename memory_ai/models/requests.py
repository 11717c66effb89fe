"""Request-side models: audio references, prior memories and orchestration requests.

All of these are ephemeral. They are created for one orchestrator call and
carry no identity across calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from memory_ai.models.capabilities import Capability, ProviderIdentity


class AudioReference(BaseModel):
    """Where to find a recording to transcribe.

    Attributes:
        url: Location of the recording.
        content: Raw audio bytes, when the caller already has them. Backends
            that need an upload use these instead of downloading ``url``.
        filename: Name reported for uploaded audio.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    content: bytes | None = None
    filename: str = "audio.m4a"


class MemoryExcerpt(BaseModel):
    """A previously stored memory used as conversational or narrative context."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    summary: str | None = None
    content: str | None = None

    @property
    def text(self) -> str:
        """Summary when present, else the raw content."""
        return self.summary or self.content or ""


PriorMemory = MemoryExcerpt | Mapping[str, Any] | str


def memory_text(memory: PriorMemory) -> str:
    """Prompt text for one prior memory.

    Accepts a MemoryExcerpt, a plain string, or a mapping with ``summary``
    and/or ``content`` keys (as stored rows usually are).
    """
    if isinstance(memory, str):
        return memory
    if isinstance(memory, MemoryExcerpt):
        return memory.text
    return MemoryExcerpt.model_validate(dict(memory)).text


def join_memories(memories: Sequence[PriorMemory]) -> str:
    """Blank-line-separated prompt text for a sequence of prior memories."""
    return "\n\n".join(memory_text(m) for m in memories)


class OrchestrationRequest(BaseModel):
    """One capability request for Orchestrator.execute().

    Attributes:
        capability: Routing key for the request.
        text: Text payload (memory text, query, or code).
        audio: Recording to transcribe (Transcription only).
        documents: Prior memories or candidate texts (Conversation, Creative,
            Search).
        target_language: Target language (Translation only).
        provider_override: Provider that must serve the request, bypassing
            the routing table.
        ensemble: Run two providers and fuse results. Unset means true for
            ContextExtraction and false for everything else.
        prefer_depth: Conversation only; route to the depth-favoured
            provider instead of the creative one.
        max_length: Summarization only; character budget for the summary.
    """

    model_config = ConfigDict(frozen=True)

    capability: Capability
    text: str | None = None
    audio: AudioReference | None = None
    documents: list[str] = Field(default_factory=list)
    target_language: str | None = None
    provider_override: ProviderIdentity | None = None
    ensemble: bool | None = None
    prefer_depth: bool = True
    max_length: int | None = Field(default=None, gt=0)

    @property
    def use_ensemble(self) -> bool:
        """Resolved ensemble flag."""
        if self.ensemble is None:
            return self.capability == Capability.CONTEXT_EXTRACTION
        return self.ensemble

    @model_validator(mode="after")
    def check_payload(self) -> OrchestrationRequest:
        if self.capability == Capability.TRANSCRIPTION:
            if self.audio is None:
                msg = "transcription requests need an audio reference"
                raise ValueError(msg)
        elif self.capability == Capability.CREATIVE:
            if not self.documents:
                msg = "creative requests need at least one source document"
                raise ValueError(msg)
        elif self.text is None:
            msg = f"{self.capability.value} requests need a text payload"
            raise ValueError(msg)

        if self.capability == Capability.TRANSLATION and not self.target_language:
            msg = "translation requests need a target language"
            raise ValueError(msg)
        return self
