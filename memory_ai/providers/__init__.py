"""Provider clients for memory-ai-orchestrator.

Providers:
- base: ProviderClient ABC and shared HTTP handling
- context: ContextProvider (Anthropic Messages API)
- fast: FastProvider (Moonshot, OpenAI dialect)
- creative: CreativeProvider (OpenAI)
"""

from memory_ai.providers.base import ProviderClient
from memory_ai.providers.context import ContextProvider
from memory_ai.providers.creative import CreativeProvider
from memory_ai.providers.fast import FastProvider


__all__: list[str] = [
    "ContextProvider",
    "CreativeProvider",
    "FastProvider",
    "ProviderClient",
]
