"""Orchestrator - the façade over the three provider clients.

Every public operation has the same shape: select a provider through the
CapabilityRouter, invoke it, optionally fuse, return. Provider failures
propagate unchanged, except on the ensemble extraction path where a single
provider failure degrades to the other provider's result.

Two selections do not come from the routing table:
- extract_context(ensemble=False) always calls the ContextProvider.
- conversational_query() picks by prefer_depth: ContextProvider when true,
  CreativeProvider when false.

Example:
    orchestrator = Orchestrator.from_config(get_settings().orchestrator_config())
    context = await orchestrator.extract_context("Coffee with Ana, new job news")
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any, ParamSpec, TypeVar

import httpx

from memory_ai.core.config import OrchestratorConfig
from memory_ai.core.constants import DEFAULT_SUMMARY_LENGTH
from memory_ai.core.exceptions import (
    AllProvidersFailedError,
    UnsupportedCapabilityError,
)
from memory_ai.core.logging import correlation_scope, get_logger
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import (
    AudioReference,
    OrchestrationRequest,
    PriorMemory,
)
from memory_ai.models.results import (
    CodeAnalysisResult,
    ContextExtractionResult,
    TranscriptionResult,
)
from memory_ai.orchestration.modes.ensemble import EnsembleExtraction
from memory_ai.orchestration.router import CapabilityRouter
from memory_ai.providers.base import ProviderClient
from memory_ai.providers.context import ContextProvider
from memory_ai.providers.creative import CreativeProvider
from memory_ai.providers.fast import FastProvider


logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _correlated(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Run an operation under the caller's correlation ID, or a fresh one."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with correlation_scope():
            return await func(*args, **kwargs)

    return wrapper


class Orchestrator:
    """Routes capability requests across the provider clients.

    Attributes:
        router: Capability to provider selection.
        providers: Read-only mapping of identity to client.

    Example:
        orchestrator = Orchestrator(
            context=FakeProvider(ProviderIdentity.CONTEXT),
            fast=FakeProvider(ProviderIdentity.FAST),
            creative=FakeProvider(ProviderIdentity.CREATIVE),
        )
        result = await orchestrator.extract_context("text", ensemble=False)
    """

    def __init__(
        self,
        context: ProviderClient,
        fast: ProviderClient,
        creative: ProviderClient,
        router: CapabilityRouter | None = None,
    ) -> None:
        """Initialize the orchestrator with ready clients.

        Args:
            context: Precision-favoured client.
            fast: Low-latency multilingual client.
            creative: Generative-breadth client.
            router: Capability router. Defaults to the fixed routing table.
        """
        self._context = context
        self._fast = fast
        self._creative = creative
        self._router = router or CapabilityRouter()
        self._providers: Mapping[ProviderIdentity, ProviderClient] = MappingProxyType(
            {
                ProviderIdentity.CONTEXT: context,
                ProviderIdentity.FAST: fast,
                ProviderIdentity.CREATIVE: creative,
            }
        )
        self._ensemble = EnsembleExtraction(primary=context, secondary=creative)

    @classmethod
    def from_config(
        cls,
        config: OrchestratorConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Orchestrator:
        """Build the three provider clients from explicit configuration.

        Args:
            config: Credentials, endpoints and models for each provider.
            transport: Optional httpx transport shared by all clients.

        Raises:
            ConfigurationError: If any provider has no API key.
        """
        return cls(
            context=ContextProvider(config.context, transport=transport),
            fast=FastProvider(config.fast, transport=transport),
            creative=CreativeProvider(config.creative, transport=transport),
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def router(self) -> CapabilityRouter:
        """Get the capability router."""
        return self._router

    @property
    def providers(self) -> Mapping[ProviderIdentity, ProviderClient]:
        """Get the provider clients by identity."""
        return self._providers

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def _client(
        self,
        capability: Capability,
        operation: str,
        override: ProviderIdentity | str | None = None,
    ) -> ProviderClient:
        """Resolve the client for an operation.

        Raises:
            ValueError: If ``override`` names no known provider.
            UnsupportedCapabilityError: If the selected client does not
                implement ``operation``.
        """
        identity = self._router.select(
            capability, ProviderIdentity(override) if override else None
        )
        client = self._providers[identity]
        if not client.supports(operation):
            raise UnsupportedCapabilityError(identity.value, operation)

        logger.debug(
            "Routed request",
            capability=capability.value,
            operation=operation,
            provider=identity.value,
            overridden=bool(override),
        )
        return client

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @_correlated
    async def transcribe_audio(
        self,
        audio: AudioReference | str,
        provider_override: ProviderIdentity | str | None = None,
    ) -> TranscriptionResult:
        """Transcribe a recording.

        Args:
            audio: Recording reference, or its URL.
            provider_override: Provider that must serve the call.
        """
        if isinstance(audio, str):
            audio = AudioReference(url=audio)
        client = self._client(Capability.TRANSCRIPTION, "transcribe", provider_override)
        return await client.transcribe(audio)

    @_correlated
    async def extract_context(
        self,
        text: str,
        ensemble: bool = True,
        provider_override: ProviderIdentity | str | None = None,
    ) -> ContextExtractionResult:
        """Extract structured context from memory text.

        With ``ensemble`` (the default) the ContextProvider and the
        CreativeProvider run concurrently and their results are fused; one
        failing provider degrades to the other's result. Without it, the
        ContextProvider is called alone and its failure is surfaced as is.
        A provider override always means a single call to that provider.

        Raises:
            AllProvidersFailedError: If both ensemble participants fail.
            ProviderUnavailableError: Non-ensemble provider failure.
            MalformedResponseError: Non-ensemble provider failure.
        """
        if provider_override:
            client = self._client(
                Capability.CONTEXT_EXTRACTION, "extract_context", provider_override
            )
            return await client.extract_context(text)

        if not ensemble:
            logger.debug(
                "Routed request",
                capability=Capability.CONTEXT_EXTRACTION.value,
                operation="extract_context",
                provider=self._context.identity.value,
                overridden=False,
            )
            return await self._context.extract_context(text)

        try:
            return await self._ensemble.execute(text)
        except AllProvidersFailedError as e:
            logger.error(
                "All providers failed",
                capability=Capability.CONTEXT_EXTRACTION.value,
                providers=list(e.errors),
            )
            raise

    @_correlated
    async def generate_embedding(self, text: str) -> list[float]:
        """Embed text with the CreativeProvider embedding model."""
        vector = await self._creative.embed(text)
        return vector.values

    @_correlated
    async def conversational_query(
        self,
        query: str,
        prior_results: Sequence[PriorMemory] = (),
        prefer_depth: bool = True,
    ) -> str:
        """Answer a question about the user's memories.

        Args:
            query: The user's question.
            prior_results: Memories to ground the answer in.
            prefer_depth: Use the ContextProvider instead of the
                CreativeProvider.
        """
        client = self._context if prefer_depth else self._creative
        logger.debug(
            "Routed request",
            capability=Capability.CONVERSATION.value,
            operation="converse",
            provider=client.identity.value,
            prefer_depth=prefer_depth,
        )
        return await client.converse(query, prior_results)

    @_correlated
    async def translate_memory(
        self,
        text: str,
        target_language: str,
        provider_override: ProviderIdentity | str | None = None,
    ) -> str:
        client = self._client(Capability.TRANSLATION, "translate", provider_override)
        return await client.translate(text, target_language)

    @_correlated
    async def analyze_code(
        self,
        code: str,
        provider_override: ProviderIdentity | str | None = None,
    ) -> CodeAnalysisResult:
        client = self._client(Capability.CODE_ANALYSIS, "analyze_code", provider_override)
        return await client.analyze_code(code)

    @_correlated
    async def create_memory_story(
        self,
        source_texts: Sequence[PriorMemory],
        provider_override: ProviderIdentity | str | None = None,
    ) -> str:
        client = self._client(Capability.CREATIVE, "create_story", provider_override)
        return await client.create_story(source_texts)

    @_correlated
    async def summarize_memory(
        self,
        text: str,
        max_length: int = DEFAULT_SUMMARY_LENGTH,
        provider_override: ProviderIdentity | str | None = None,
    ) -> str:
        client = self._client(Capability.SUMMARIZATION, "summarize", provider_override)
        return await client.summarize(text, max_length)

    @_correlated
    async def search_memories(
        self,
        query: str,
        documents: Sequence[str],
        provider_override: ProviderIdentity | str | None = None,
    ) -> list[float]:
        """Score caller-supplied texts against a query.

        Returns:
            One similarity score per document, in document order.
        """
        client = self._client(Capability.SEARCH, "semantic_search", provider_override)
        return await client.semantic_search(query, documents)

    @_correlated
    async def detect_emotions(
        self,
        text: str,
        provider_override: ProviderIdentity | str | None = None,
    ) -> list[str]:
        client = self._client(
            Capability.CONTEXT_EXTRACTION, "detect_emotions", provider_override
        )
        return await client.detect_emotions(text)

    def get_all_capabilities(self) -> dict[ProviderIdentity, list[Capability]]:
        """Capabilities of each provider, for display. No I/O."""
        return {
            identity: list(client.capabilities)
            for identity, client in self._providers.items()
        }

    # -------------------------------------------------------------------------
    # Generic dispatch
    # -------------------------------------------------------------------------

    @_correlated
    async def execute(self, request: OrchestrationRequest) -> Any:
        """Dispatch a request to the operation for its capability.

        Args:
            request: Validated orchestration request.

        Returns:
            Whatever the selected operation returns.

        Raises:
            ValueError: If a request built without validation lacks the
                audio or target language its capability needs.
        """
        capability = request.capability
        override = request.provider_override
        text = request.text or ""

        if capability == Capability.TRANSCRIPTION:
            if request.audio is None:
                raise ValueError("transcription requests need an audio reference")
            return await self.transcribe_audio(request.audio, override)
        if capability == Capability.CONTEXT_EXTRACTION:
            return await self.extract_context(text, request.use_ensemble, override)
        if capability == Capability.SUMMARIZATION:
            return await self.summarize_memory(
                text, request.max_length or DEFAULT_SUMMARY_LENGTH, override
            )
        if capability == Capability.SEARCH:
            return await self.search_memories(text, request.documents, override)
        if capability == Capability.TRANSLATION:
            if not request.target_language:
                raise ValueError("translation requests need a target language")
            return await self.translate_memory(text, request.target_language, override)
        if capability == Capability.CODE_ANALYSIS:
            return await self.analyze_code(text, override)
        if capability == Capability.CREATIVE:
            return await self.create_memory_story(request.documents, override)
        if capability == Capability.CONVERSATION:
            return await self._converse_request(request)

        raise UnsupportedCapabilityError("orchestrator", capability.value)

    async def _converse_request(self, request: OrchestrationRequest) -> str:
        if request.provider_override:
            client = self._client(
                Capability.CONVERSATION, "converse", request.provider_override
            )
            return await client.converse(request.text or "", request.documents)
        return await self.conversational_query(
            request.text or "", request.documents, request.prefer_depth
        )
