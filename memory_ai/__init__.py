"""memory-ai-orchestrator: multi-provider AI orchestration for memory journaling.

This package routes transcription, context extraction, embedding,
translation, code analysis, summarization, search and conversation
requests across three hosted AI providers, and fuses concurrent context
extractions into one record.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
