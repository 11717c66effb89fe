"""Orchestration mode implementations.

Modes:
- ensemble: two providers in parallel, settle-all, then fusion
"""

from memory_ai.orchestration.modes.ensemble import EnsembleExtraction


__all__: list[str] = ["EnsembleExtraction"]
