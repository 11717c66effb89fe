"""ContextProvider: the precision-favoured backend (Anthropic Messages API).

Strengths: nuanced, context-aware analysis. Serves context extraction and
summarization by default, and conversation when depth is preferred.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from memory_ai.core.config import ProviderConfig
from memory_ai.core.constants import CONTEXT_API_VERSION
from memory_ai.core.exceptions import MalformedResponseError
from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import PriorMemory, join_memories
from memory_ai.models.results import (
    CodeAnalysisResult,
    ContextExtractionResult,
    dedupe,
)
from memory_ai.providers import prompts
from memory_ai.providers.base import ProviderClient


class ContextProvider(ProviderClient):
    """Client for the Anthropic Messages API.

    Example:
        provider = ContextProvider(ContextProviderConfig(api_key="sk-ant-..."))
        context = await provider.extract_context("Lunch with Ana at the harbour")
    """

    identity: ClassVar[ProviderIdentity] = ProviderIdentity.CONTEXT
    capabilities: ClassVar[tuple[Capability, ...]] = (
        Capability.CONTEXT_EXTRACTION,
        Capability.SUMMARIZATION,
        Capability.CONVERSATION,
        Capability.CODE_ANALYSIS,
    )

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        extraction_prompt: str = prompts.EXTRACTION_SYSTEM_PROMPT,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint, credential and model settings.
            transport: Optional httpx transport (tests).
            extraction_prompt: System prompt for context extraction.
        """
        super().__init__(config, transport)
        self._extraction_prompt = extraction_prompt

    def _auth_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": CONTEXT_API_VERSION,
        }

    async def _message(
        self,
        operation: str,
        content: str,
        *,
        max_tokens: int,
        temperature: float,
        system: str | None = None,
    ) -> str:
        """Send one user message and return the first text block of the reply."""
        body: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": content}],
        }
        if system:
            body["system"] = system

        payload = await self._post(operation, "/v1/messages", json=body)
        block = self._dig(payload, "content", 0)
        block_type = self._dig(block, "type")
        if block_type != "text":
            raise MalformedResponseError(
                f"Unexpected {block_type!r} content block from {self.identity.value}",
                provider=self.identity.value,
                raw=str(payload),
            )
        return self._text(block, "text")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def extract_context(self, text: str) -> ContextExtractionResult:
        """Extract structured context from memory text.

        Raises:
            ProviderUnavailableError: If the backend cannot be reached.
            MalformedResponseError: If the reply is not a valid extraction.
        """
        reply = await self._message(
            "extract_context",
            text,
            max_tokens=self._config.max_tokens,
            temperature=0.3,
            system=self._extraction_prompt,
        )
        return self._validate(ContextExtractionResult, self._decode_json_text(reply))

    async def summarize(self, text: str, max_length: int) -> str:
        reply = await self._message(
            "summarize",
            prompts.SUMMARY_PROMPT_TEMPLATE.format(max_length=max_length, text=text),
            max_tokens=max_length * 2,
            temperature=0.5,
        )
        return reply.strip()

    async def detect_emotions(self, text: str) -> list[str]:
        """List emotions in order of prominence.

        Raises:
            MalformedResponseError: If the reply is not a JSON array of strings.
        """
        reply = await self._message(
            "detect_emotions",
            prompts.EMOTION_PROMPT_TEMPLATE.format(text=text),
            max_tokens=200,
            temperature=0.3,
        )
        emotions = self._decode_json_text(reply)
        if not isinstance(emotions, list) or not all(isinstance(e, str) for e in emotions):
            raise MalformedResponseError(
                f"{self.identity.value} emotions reply is not a list of strings",
                provider=self.identity.value,
                raw=reply,
            )
        return dedupe(emotions)

    async def converse(self, query: str, prior_results: Sequence[PriorMemory]) -> str:
        return await self._message(
            "converse",
            prompts.DEPTH_CONVERSATION_PROMPT_TEMPLATE.format(
                context=join_memories(prior_results), query=query
            ),
            max_tokens=1000,
            temperature=0.7,
            system=prompts.DEPTH_CONVERSATION_SYSTEM_PROMPT,
        )

    async def analyze_code(self, code: str) -> CodeAnalysisResult:
        reply = await self._message(
            "analyze_code",
            code,
            max_tokens=1000,
            temperature=0.2,
            system=prompts.CODE_ANALYSIS_SYSTEM_PROMPT,
        )
        return self._validate(CodeAnalysisResult, self._decode_json_text(reply))
