"""Unit tests for request-side models."""

import pytest
from pydantic import ValidationError

from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import (
    AudioReference,
    MemoryExcerpt,
    OrchestrationRequest,
    join_memories,
    memory_text,
)


class TestMemoryText:
    """Test prompt text for prior memories."""

    def test_summary_preferred_over_content(self) -> None:
        assert MemoryExcerpt(summary="short", content="long body").text == "short"

    def test_content_when_no_summary(self) -> None:
        assert MemoryExcerpt(content="long body").text == "long body"

    def test_accepts_str_mapping_and_excerpt(self) -> None:
        assert memory_text("plain") == "plain"
        assert memory_text({"summary": "s", "id": 4}) == "s"
        assert memory_text({"content": "c"}) == "c"
        assert memory_text(MemoryExcerpt(summary="e")) == "e"

    def test_join_uses_blank_lines(self) -> None:
        assert join_memories(["a", {"summary": "b"}]) == "a\n\nb"

    def test_join_empty(self) -> None:
        assert join_memories([]) == ""


class TestOrchestrationRequest:
    """Test OrchestrationRequest validation and defaults."""

    def test_ensemble_defaults_true_for_context_extraction(self) -> None:
        request = OrchestrationRequest(
            capability=Capability.CONTEXT_EXTRACTION, text="memory"
        )
        assert request.use_ensemble is True

    def test_ensemble_defaults_false_elsewhere(self) -> None:
        request = OrchestrationRequest(capability=Capability.SUMMARIZATION, text="memory")
        assert request.use_ensemble is False

    def test_explicit_ensemble_flag(self) -> None:
        request = OrchestrationRequest(
            capability=Capability.CONTEXT_EXTRACTION, text="memory", ensemble=False
        )
        assert request.use_ensemble is False

    def test_override_parses_identity(self) -> None:
        request = OrchestrationRequest(
            capability=Capability.TRANSCRIPTION,
            audio=AudioReference(url="https://cdn.test/a.m4a"),
            provider_override="creative",
        )
        assert request.provider_override == ProviderIdentity.CREATIVE

    def test_transcription_needs_audio(self) -> None:
        with pytest.raises(ValidationError, match="audio"):
            OrchestrationRequest(capability=Capability.TRANSCRIPTION, text="x")

    def test_creative_needs_documents(self) -> None:
        with pytest.raises(ValidationError, match="source document"):
            OrchestrationRequest(capability=Capability.CREATIVE)

    def test_translation_needs_target_language(self) -> None:
        with pytest.raises(ValidationError, match="target language"):
            OrchestrationRequest(capability=Capability.TRANSLATION, text="hola")

    def test_text_capabilities_need_text(self) -> None:
        with pytest.raises(ValidationError, match="text payload"):
            OrchestrationRequest(capability=Capability.CODE_ANALYSIS)

    def test_max_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            OrchestrationRequest(
                capability=Capability.SUMMARIZATION, text="x", max_length=0
            )
