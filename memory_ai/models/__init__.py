"""Value objects for memory-ai-orchestrator.

Modules:
- capabilities: Capability and ProviderIdentity routing keys
- results: provider results (transcripts, extracted context, embeddings)
- requests: audio references, prior memories, OrchestrationRequest
"""

from memory_ai.models.capabilities import Capability, ProviderIdentity
from memory_ai.models.requests import (
    AudioReference,
    MemoryExcerpt,
    OrchestrationRequest,
    PriorMemory,
)
from memory_ai.models.results import (
    CodeAnalysisResult,
    ContextExtractionResult,
    EmbeddingVector,
    MemoryCategory,
    Sentiment,
    TranscriptionResult,
    TranscriptSegment,
)


__all__: list[str] = [
    "AudioReference",
    "Capability",
    "CodeAnalysisResult",
    "ContextExtractionResult",
    "EmbeddingVector",
    "MemoryCategory",
    "MemoryExcerpt",
    "OrchestrationRequest",
    "PriorMemory",
    "ProviderIdentity",
    "Sentiment",
    "TranscriptSegment",
    "TranscriptionResult",
]
