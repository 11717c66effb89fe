"""Base class for provider clients.

Defines the ProviderClient ABC that the three concrete clients extend.
Every capability operation is declared here with a default implementation
that raises UnsupportedCapabilityError; a client implements the subset its
backend offers by overriding those methods.

The base class also owns the HTTP transport handling shared by all clients:
one outbound request per call, no retries, no caching, and a fixed mapping
from transport failures to the provider failure taxonomy:

    httpx.HTTPStatusError / TimeoutException / RequestError
        -> ProviderUnavailableError
    non-JSON body, missing keys, pydantic.ValidationError
        -> MalformedResponseError

Clients hold no mutable state beyond their ProviderConfig, so one instance
can serve concurrent calls without locking.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from memory_ai.core.config import ProviderConfig
from memory_ai.core.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    ProviderUnavailableError,
    UnsupportedCapabilityError,
)
from memory_ai.core.logging import get_logger
from memory_ai.core.text_processing import parse_json_payload
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import AudioReference, PriorMemory
from memory_ai.models.results import (
    CodeAnalysisResult,
    ContextExtractionResult,
    EmbeddingVector,
    TranscriptionResult,
)
from memory_ai.observability.tracing import inject_trace_context, provider_span


logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class ProviderClient(ABC):
    """Abstract base class for provider clients.

    Attributes:
        identity: Which backend this client wraps.
        capabilities: Capabilities the backend is suited for, in the order
            reported by Orchestrator.get_all_capabilities().

    Example:
        class MyProvider(ProviderClient):
            identity = ProviderIdentity.FAST
            capabilities = (Capability.TRANSLATION,)

            def _auth_headers(self):
                return {"Authorization": f"Bearer {self._api_key}"}

            async def translate(self, text, target_language):
                ...
    """

    identity: ClassVar[ProviderIdentity]
    capabilities: ClassVar[tuple[Capability, ...]]

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client with fixed configuration.

        Args:
            config: Endpoint, credential and model settings.
            transport: Optional httpx transport, e.g. httpx.MockTransport in
                tests. Defaults to httpx's network transport.

        Raises:
            ConfigurationError: If the API key is empty.
        """
        if not config.api_key.get_secret_value():
            raise ConfigurationError(
                f"{self.identity.value} provider requires an API key",
                setting=f"{self.identity.value}.api_key",
            )
        self._config = config
        self._transport = transport

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ProviderConfig:
        """Get the client configuration."""
        return self._config

    @property
    def model(self) -> str:
        """Get the chat/completion model identifier."""
        return self._config.model

    @property
    def _api_key(self) -> str:
        return self._config.api_key.get_secret_value()

    def supports(self, operation: str) -> bool:
        """Check whether this client implements ``operation``.

        Args:
            operation: Operation method name, e.g. "transcribe".

        Returns:
            True if the client overrides the base implementation.
        """
        base_impl = getattr(ProviderClient, operation, None)
        if base_impl is None:
            return False
        return getattr(type(self), operation) is not base_impl

    # -------------------------------------------------------------------------
    # Capability operations (override the ones the backend offers)
    # -------------------------------------------------------------------------

    async def transcribe(self, audio: AudioReference) -> TranscriptionResult:
        """Transcribe a recording."""
        raise UnsupportedCapabilityError(self.identity.value, "transcribe")

    async def extract_context(self, text: str) -> ContextExtractionResult:
        """Extract structured context from memory text."""
        raise UnsupportedCapabilityError(self.identity.value, "extract_context")

    async def embed(self, text: str) -> EmbeddingVector:
        """Embed text with the client's embedding model."""
        raise UnsupportedCapabilityError(self.identity.value, "embed")

    async def translate(self, text: str, target_language: str) -> str:
        """Translate text, preserving emotional nuance."""
        raise UnsupportedCapabilityError(self.identity.value, "translate")

    async def analyze_code(self, code: str) -> CodeAnalysisResult:
        """Describe a code snippet."""
        raise UnsupportedCapabilityError(self.identity.value, "analyze_code")

    async def converse(self, query: str, prior_results: Sequence[PriorMemory]) -> str:
        """Answer a question about the user's memories."""
        raise UnsupportedCapabilityError(self.identity.value, "converse")

    async def summarize(self, text: str, max_length: int) -> str:
        """Summarize text in at most ``max_length`` characters."""
        raise UnsupportedCapabilityError(self.identity.value, "summarize")

    async def create_story(self, source_texts: Sequence[PriorMemory]) -> str:
        """Weave memories into a narrative."""
        raise UnsupportedCapabilityError(self.identity.value, "create_story")

    async def detect_emotions(self, text: str) -> list[str]:
        """List emotions in order of prominence."""
        raise UnsupportedCapabilityError(self.identity.value, "detect_emotions")

    async def semantic_search(self, query: str, documents: Sequence[str]) -> list[float]:
        """Score each document's similarity to the query."""
        raise UnsupportedCapabilityError(self.identity.value, "semantic_search")

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """Headers carrying the backend credential."""
        ...

    async def _post(
        self,
        operation: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        model: str | None = None,
    ) -> Any:
        """POST to the backend and decode the JSON response body.

        Args:
            operation: Operation name, for logs and spans.
            path: Path appended to the configured base_url.
            json: JSON request body.
            data: Form fields (multipart uploads).
            files: Multipart files.
            model: Model reported in logs and spans. Defaults to self.model.

        Returns:
            Decoded JSON body.

        Raises:
            ProviderUnavailableError: On transport failure or non-2xx status.
            MalformedResponseError: If the body is not JSON.
        """
        url = f"{self._config.base_url}{path}"
        model = model or self.model

        with provider_span(self.identity.value, operation, model):
            headers = inject_trace_context(self._auth_headers())
            response = await self._send(
                operation, "POST", url, headers=headers, json=json, data=data, files=files
            )
            try:
                return response.json()
            except ValueError as e:
                logger.warning(
                    "Provider returned non-JSON body",
                    provider=self.identity.value,
                    operation=operation,
                    status_code=response.status_code,
                )
                raise MalformedResponseError(
                    f"{self.identity.value} returned a non-JSON body for {operation}",
                    provider=self.identity.value,
                    raw=response.text,
                ) from e

    async def _get_bytes(self, operation: str, url: str) -> bytes:
        """GET an absolute URL and return the raw body (e.g. audio to re-upload)."""
        with provider_span(self.identity.value, operation, self.model, url=url):
            response = await self._send(operation, "GET", url, headers=inject_trace_context())
            return response.content

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        logger.debug(
            "Provider request",
            provider=self.identity.value,
            operation=operation,
            model=self.model,
            method=method,
        )
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "Provider returned error status",
                provider=self.identity.value,
                operation=operation,
                status_code=status,
            )
            raise ProviderUnavailableError(
                f"{self.identity.value} returned HTTP {status} for {operation}",
                provider=self.identity.value,
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(
                "Provider request timed out",
                provider=self.identity.value,
                operation=operation,
                timeout_s=self._config.timeout_s,
            )
            raise ProviderUnavailableError(
                f"{self.identity.value} timed out during {operation}",
                provider=self.identity.value,
            ) from e
        except httpx.RequestError as e:
            logger.warning(
                "Provider connection failed",
                provider=self.identity.value,
                operation=operation,
                error=str(e),
            )
            raise ProviderUnavailableError(
                f"{self.identity.value} connection error during {operation}: {e}",
                provider=self.identity.value,
            ) from e

    # -------------------------------------------------------------------------
    # Payload helpers
    # -------------------------------------------------------------------------

    def _dig(self, payload: Any, *path: str | int) -> Any:
        """Follow ``path`` into a decoded JSON payload.

        Raises:
            MalformedResponseError: If any step is missing.
        """
        node = payload
        for step in path:
            try:
                node = node[step]
            except (KeyError, IndexError, TypeError) as e:
                raise MalformedResponseError(
                    f"{self.identity.value} response is missing "
                    f"{'/'.join(str(s) for s in path)}",
                    provider=self.identity.value,
                    raw=str(payload),
                ) from e
        return node

    def _text(self, payload: Any, *path: str | int) -> str:
        """Like _dig, but the value must be a string."""
        value = self._dig(payload, *path)
        if not isinstance(value, str):
            raise MalformedResponseError(
                f"{self.identity.value} response field "
                f"{'/'.join(str(s) for s in path)} is not text",
                provider=self.identity.value,
                raw=str(payload),
            )
        return value

    def _decode_json_text(self, content: str) -> Any:
        """Decode JSON from model output, stripping any markdown fence."""
        try:
            return parse_json_payload(content)
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.identity.value} did not return valid JSON",
                provider=self.identity.value,
                raw=content,
            ) from e

    def _validate(self, result_type: type[ResultT], data: Any) -> ResultT:
        """Validate decoded data against a result model.

        Raises:
            MalformedResponseError: If the data does not fit the model.
        """
        try:
            return result_type.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Provider payload failed validation",
                provider=self.identity.value,
                result_type=result_type.__name__,
                error_count=e.error_count(),
            )
            raise MalformedResponseError(
                f"{self.identity.value} returned an invalid "
                f"{result_type.__name__}: {e.error_count()} validation error(s)",
                provider=self.identity.value,
                raw=str(data),
            ) from e
