"""Ensemble extraction - two providers in parallel, then fusion.

Flow:
    text → [primary, secondary](parallel, settle-all) → merge → result

Both calls always run to completion. A provider failure is recorded and
logged rather than cancelling its sibling, which gives three outcomes:

- both succeed: fusion.merge(primary_result, secondary_result)
- one succeeds: that result, unmodified (degraded success)
- both fail: AllProvidersFailedError carrying both errors

Only the provider failure kinds (ProviderUnavailableError,
MalformedResponseError) are absorbed. Anything else, including
cancellation, propagates.
"""

from __future__ import annotations

import asyncio

from memory_ai.core.exceptions import PROVIDER_FAILURES, AllProvidersFailedError
from memory_ai.core.logging import get_logger
from memory_ai.models.results import ContextExtractionResult
from memory_ai.orchestration import fusion
from memory_ai.providers.base import ProviderClient


logger = get_logger(__name__)


class EnsembleExtraction:
    """Concurrent two-provider context extraction.

    The primary provider is always ``first`` for fusion, regardless of
    which call completes earlier.

    Attributes:
        primary: Precision-favoured provider (fusion ``first``).
        secondary: Breadth provider (fusion ``second``).

    Example:
        mode = EnsembleExtraction(primary=context, secondary=creative)
        result = await mode.execute("Dinner with Sam, planning the trip")
    """

    def __init__(self, primary: ProviderClient, secondary: ProviderClient) -> None:
        self._primary = primary
        self._secondary = secondary

    @property
    def primary(self) -> ProviderClient:
        """Get the precision-favoured provider."""
        return self._primary

    @property
    def secondary(self) -> ProviderClient:
        """Get the breadth provider."""
        return self._secondary

    async def execute(self, text: str) -> ContextExtractionResult:
        """Run both extractions and combine the outcomes.

        Args:
            text: Memory text.

        Returns:
            Fused result, or the single successful result.

        Raises:
            AllProvidersFailedError: If both providers fail.
        """
        outcomes = await asyncio.gather(
            self._primary.extract_context(text),
            self._secondary.extract_context(text),
            return_exceptions=True,
        )

        results: list[ContextExtractionResult | None] = []
        errors: dict[str, BaseException] = {}
        for provider, outcome in zip((self._primary, self._secondary), outcomes):
            if isinstance(outcome, PROVIDER_FAILURES):
                logger.warning(
                    "Ensemble participant failed",
                    provider=provider.identity.value,
                    error_code=outcome.error_code,
                    error=outcome.message,
                )
                errors[provider.identity.value] = outcome
                results.append(None)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.append(outcome)

        first, second = results
        if first is None and second is None:
            raise AllProvidersFailedError(
                "All providers failed during context extraction",
                errors=errors,
            )

        if errors:
            logger.info(
                "Ensemble degraded to single result",
                failed=list(errors),
            )
        return fusion.merge(first, second)
