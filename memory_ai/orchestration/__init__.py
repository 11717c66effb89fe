"""Multi-provider orchestration for memory-ai-orchestrator.

Modules:
- orchestrator: Orchestrator façade
- router: CapabilityRouter and the fixed routing table
- fusion: deterministic merge of two context extractions
- modes/: orchestration mode implementations
"""

from memory_ai.orchestration.orchestrator import Orchestrator
from memory_ai.orchestration.router import CapabilityRouter


__all__: list[str] = ["CapabilityRouter", "Orchestrator"]
