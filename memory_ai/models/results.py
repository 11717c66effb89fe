"""Result value objects produced by provider clients.

All results are frozen pydantic models. Constructing one from a provider
payload is the structural validation step: a payload that does not fit
raises pydantic.ValidationError, which clients turn into
MalformedResponseError.
"""

from __future__ import annotations

from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


def dedupe(values: list[str]) -> list[str]:
    """Drop repeated entries (exact, case-sensitive match), keeping first occurrences.

    Example:
        >>> dedupe(["a", "b", "a", "A"])
        ['a', 'b', 'A']
    """
    return list(dict.fromkeys(values))


class Sentiment(str, Enum):
    """Overall sentiment of a memory."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class MemoryCategory(str, Enum):
    """Category a memory is filed under."""

    WORK = "work"
    PERSONAL = "personal"
    IDEAS = "ideas"
    LEARNING = "learning"
    HEALTH = "health"
    FINANCE = "finance"
    SOCIAL = "social"


# =============================================================================
# Transcription
# =============================================================================


class TranscriptSegment(BaseModel):
    """One timed span of a transcript."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str
    start_seconds: float = Field(
        ge=0.0, validation_alias=AliasChoices("start_seconds", "start")
    )
    end_seconds: float = Field(
        ge=0.0, validation_alias=AliasChoices("end_seconds", "end")
    )

    @model_validator(mode="after")
    def check_order(self) -> TranscriptSegment:
        if self.end_seconds < self.start_seconds:
            msg = "segment ends before it starts"
            raise ValueError(msg)
        return self


class TranscriptionResult(BaseModel):
    """Transcript of one audio recording.

    Attributes:
        text: Full transcript.
        language: Language code detected by the backend.
        confidence: Backend confidence in [0, 1].
        duration_seconds: Length of the recording, when reported.
        segments: Timed segments in order, when reported.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    language: str
    confidence: float = Field(ge=0.0, le=1.0)
    duration_seconds: float | None = Field(default=None, ge=0.0)
    segments: list[TranscriptSegment] | None = None


# =============================================================================
# Context Extraction
# =============================================================================


class ContextExtractionResult(BaseModel):
    """Structured context extracted from a memory.

    Sequence fields are deduplicated on construction. people, places,
    dates, tasks and emotions may be omitted by a provider and default to
    empty; the remaining fields are required.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    summary: str
    title: str
    tags: list[str]
    people: list[str] = Field(default_factory=list)
    places: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    emotions: list[str] = Field(default_factory=list)
    priority: int = Field(ge=0, le=5)
    category: MemoryCategory
    sentiment: Sentiment
    confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("tags", "people", "places", "dates", "tasks", "emotions")
    @classmethod
    def unique_entries(cls, v: list[str]) -> list[str]:
        return dedupe(v)


# =============================================================================
# Embeddings
# =============================================================================


class EmbeddingVector(BaseModel):
    """Embedding of one text by one provider model."""

    model_config = ConfigDict(frozen=True)

    values: list[float]
    dimensionality: int = Field(gt=0)
    source_model: str

    @model_validator(mode="after")
    def check_length(self) -> EmbeddingVector:
        if len(self.values) != self.dimensionality:
            msg = (
                f"embedding has {len(self.values)} values, "
                f"expected {self.dimensionality}"
            )
            raise ValueError(msg)
        return self


# =============================================================================
# Code Analysis
# =============================================================================


class CodeAnalysisResult(BaseModel):
    """Description of a code snippet saved as a memory."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    language: str
    purpose: str
    tags: list[str] = Field(default_factory=list)
    documentation: str = ""

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: list[str]) -> list[str]:
        return dedupe(v)
