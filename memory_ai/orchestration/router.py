"""CapabilityRouter - capability to provider selection.

The routing table is fixed. It is checked at import time to cover every
Capability, so select() can never fall through to an unhandled case. The
only caller-visible way to change a selection is the per-call override.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from memory_ai.core.exceptions import ConfigurationError
from memory_ai.models.capabilities import Capability, ProviderIdentity


ROUTING_TABLE: Mapping[Capability, ProviderIdentity] = MappingProxyType(
    {
        Capability.TRANSCRIPTION: ProviderIdentity.FAST,
        Capability.CONTEXT_EXTRACTION: ProviderIdentity.CONTEXT,
        Capability.SUMMARIZATION: ProviderIdentity.CONTEXT,
        Capability.SEARCH: ProviderIdentity.FAST,
        Capability.TRANSLATION: ProviderIdentity.FAST,
        Capability.CODE_ANALYSIS: ProviderIdentity.FAST,
        Capability.CREATIVE: ProviderIdentity.CREATIVE,
        Capability.CONVERSATION: ProviderIdentity.CREATIVE,
    }
)


def validate_routing_table(table: Mapping[Capability, ProviderIdentity]) -> None:
    """Check that ``table`` routes every Capability.

    Raises:
        ConfigurationError: If any capability has no entry.
    """
    missing = [c.value for c in Capability if c not in table]
    if missing:
        raise ConfigurationError(
            f"Routing table has no provider for: {', '.join(missing)}",
            setting="routing_table",
        )


validate_routing_table(ROUTING_TABLE)


class CapabilityRouter:
    """Pure mapping from (capability, override) to a provider identity.

    Example:
        router = CapabilityRouter()
        router.select(Capability.TRANSLATION)  # ProviderIdentity.FAST
        router.select(Capability.TRANSLATION, ProviderIdentity.CREATIVE)
    """

    def __init__(
        self, table: Mapping[Capability, ProviderIdentity] = ROUTING_TABLE
    ) -> None:
        """Initialize the router.

        Args:
            table: Routing table. Must cover every Capability.

        Raises:
            ConfigurationError: If the table is incomplete.
        """
        validate_routing_table(table)
        self._table = MappingProxyType(dict(table))

    @property
    def table(self) -> Mapping[Capability, ProviderIdentity]:
        """Get the read-only routing table."""
        return self._table

    def select(
        self,
        capability: Capability,
        override: ProviderIdentity | None = None,
    ) -> ProviderIdentity:
        """Select the provider for a capability.

        Args:
            capability: Routing key.
            override: Provider that must serve the call; wins over the table.

        Returns:
            The selected provider identity.
        """
        if override is not None:
            return override
        return self._table[capability]
