"""Unit tests for FastProvider (Moonshot, OpenAI dialect)."""

import json
import math
from collections.abc import Callable

import httpx
import pytest
from fakes import EXTRACTION_PAYLOAD, RecordingTransport, chat_completion

from memory_ai.core.config import FastProviderConfig
from memory_ai.core.constants import FAST_EMBEDDING_DIMENSIONS, FAST_EMBEDDING_MODEL
from memory_ai.core.exceptions import MalformedResponseError, ProviderUnavailableError
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import AudioReference
from memory_ai.providers.fast import FastProvider, cosine_similarity


def _unit(index: int, dims: int = FAST_EMBEDDING_DIMENSIONS) -> list[float]:
    values = [0.0] * dims
    values[index] = 1.0
    return values


def _embedding_body(vectors: list[list[float]]) -> dict:
    return {
        "object": "list",
        "data": [
            {"object": "embedding", "index": i, "embedding": v}
            for i, v in enumerate(vectors)
        ],
        "model": FAST_EMBEDDING_MODEL,
    }


class TestCosineSimilarity:
    """Test cosine_similarity()."""

    def test_identical(self) -> None:
        assert cosine_similarity([1.0, 2.0], [1.0, 2.0]) == pytest.approx(1.0)

    def test_orthogonal(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite(self) -> None:
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_zero_magnitude(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarity([1.0], [1.0, 2.0])


class TestIdentity:
    """Test static provider metadata."""

    def test_identity_and_capabilities(self) -> None:
        assert FastProvider.identity == ProviderIdentity.FAST
        assert Capability.TRANSCRIPTION in FastProvider.capabilities
        assert Capability.SEARCH in FastProvider.capabilities
        assert Capability.CREATIVE not in FastProvider.capabilities


class TestTranscribe:
    """Test transcribe()."""

    async def test_sends_url_and_parses_verbose_json(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport(
            {
                "text": "hello there",
                "language": "en",
                "duration": 2.5,
                "segments": [
                    {"id": 0, "text": "hello", "start": 0.0, "end": 1.0},
                    {"id": 1, "text": "there", "start": 1.0, "end": 2.5},
                ],
            }
        )
        provider = FastProvider(fast_config, transport=transport)

        result = await provider.transcribe(AudioReference(url="https://cdn.test/a.m4a"))

        assert result.text == "hello there"
        assert result.confidence == 0.95
        assert result.duration_seconds == 2.5
        assert [s.end_seconds for s in result.segments or []] == [1.0, 2.5]

        (request,) = transport.requests
        assert request.url.path == "/v1/audio/transcriptions"
        (body,) = transport.json_bodies()
        assert body["file"] == "https://cdn.test/a.m4a"
        assert body["model"] == "whisper-large-v3"
        assert body["response_format"] == "verbose_json"

    async def test_reported_confidence_is_kept(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport({"text": "hi", "language": "fr", "confidence": 0.7})
        provider = FastProvider(fast_config, transport=transport)

        result = await provider.transcribe(AudioReference(url="https://cdn.test/a.m4a"))

        assert result.confidence == 0.7
        assert result.language == "fr"

    async def test_missing_text(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        provider = FastProvider(fast_config, transport=make_transport({"language": "en"}))

        with pytest.raises(MalformedResponseError):
            await provider.transcribe(AudioReference(url="https://cdn.test/a.m4a"))


class TestChatOperations:
    """Test translate, analyze_code and extract_context."""

    async def test_translate(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport(chat_completion("Hello, friend"))
        provider = FastProvider(fast_config, transport=transport)

        assert await provider.translate("Hola, amigo", "English") == "Hello, friend"

        (body,) = transport.json_bodies()
        assert "English" in body["messages"][0]["content"]
        assert body["messages"][1] == {"role": "user", "content": "Hola, amigo"}
        assert body["max_tokens"] == fast_config.max_tokens

    async def test_analyze_code_uses_json_mode(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport(
            chat_completion('{"language": "go", "purpose": "serve http", "tags": []}')
        )
        provider = FastProvider(fast_config, transport=transport)

        result = await provider.analyze_code("package main")

        assert result.language == "go"
        assert transport.json_bodies()[0]["response_format"] == {"type": "json_object"}

    async def test_analyze_code_documentation_with_code_fence(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        payload = {
            "language": "python",
            "purpose": "greets the user",
            "tags": ["cli"],
            "documentation": "Usage:\n```python\ngreet()\n```",
        }
        transport = make_transport(chat_completion(json.dumps(payload)))
        provider = FastProvider(fast_config, transport=transport)

        result = await provider.analyze_code("def greet(): ...")

        assert result.documentation == "Usage:\n```python\ngreet()\n```"

    async def test_extract_context(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport(chat_completion(json.dumps(EXTRACTION_PAYLOAD)))
        provider = FastProvider(fast_config, transport=transport)

        result = await provider.extract_context("Dinner with Ana")

        assert result.priority == 3


class TestEmbeddings:
    """Test embed and semantic_search."""

    async def test_embed(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport(_embedding_body([_unit(0)]))
        provider = FastProvider(fast_config, transport=transport)

        vector = await provider.embed("hello")

        assert vector.dimensionality == FAST_EMBEDDING_DIMENSIONS
        assert vector.source_model == FAST_EMBEDDING_MODEL
        (body,) = transport.json_bodies()
        assert body["input"] == ["hello"]
        assert "dimensions" not in body

    async def test_embed_wrong_dimensionality(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        provider = FastProvider(
            fast_config, transport=make_transport(_embedding_body([[0.1, 0.2]]))
        )

        with pytest.raises(MalformedResponseError, match="EmbeddingVector"):
            await provider.embed("hello")

    async def test_semantic_search_scores_in_document_order(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        diagonal = _unit(0)
        diagonal[1] = 1.0
        # Rows returned out of order; "index" decides placement
        body = _embedding_body([_unit(0), _unit(1), diagonal])
        body["data"].reverse()
        transport = make_transport(body)
        provider = FastProvider(fast_config, transport=transport)

        scores = await provider.semantic_search("query", ["other", "half"])

        assert scores[0] == 0.0
        assert scores[1] == pytest.approx(1 / math.sqrt(2))
        assert len(transport.requests) == 1
        assert transport.json_bodies()[0]["input"] == ["query", "other", "half"]

    async def test_semantic_search_without_documents(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        transport = make_transport({})
        provider = FastProvider(fast_config, transport=transport)

        assert await provider.semantic_search("query", []) == []
        assert transport.requests == []

    async def test_row_count_mismatch(
        self,
        fast_config: FastProviderConfig,
        make_transport: Callable[..., RecordingTransport],
    ) -> None:
        provider = FastProvider(
            fast_config, transport=make_transport(_embedding_body([_unit(0)]))
        )

        with pytest.raises(MalformedResponseError, match="1 embeddings for 2"):
            await provider.semantic_search("query", ["doc"])


class TestFailures:
    """Test failure propagation for the OpenAI dialect."""

    async def test_rate_limited(
        self,
        fast_config: FastProviderConfig,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": {"message": "rate limited"}})

        provider = FastProvider(fast_config, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await provider.embed("hello")
        assert exc_info.value.status_code == 429
