"""Provider endpoint and model defaults for memory-ai-orchestrator.

This module centralizes the defaults each provider client falls back to
when its ProviderConfig leaves a field unset, so configuration, clients and
tests agree on one set of values.

Usage:
    from memory_ai.core.constants import CONTEXT_DEFAULT_MODEL, TAG_LIMIT
"""

# =============================================================================
# ContextProvider (Anthropic Messages API)
# =============================================================================

CONTEXT_BASE_URL = "https://api.anthropic.com"
CONTEXT_DEFAULT_MODEL = "claude-sonnet-4-20250514"
CONTEXT_API_VERSION = "2023-06-01"

# =============================================================================
# FastProvider (Moonshot, OpenAI-compatible)
# =============================================================================

FAST_BASE_URL = "https://api.moonshot.cn/v1"
FAST_DEFAULT_MODEL = "moonshot-v1-128k"
FAST_TRANSCRIPTION_MODEL = "whisper-large-v3"
FAST_EMBEDDING_MODEL = "kimi-embedding-v1"
FAST_EMBEDDING_DIMENSIONS = 1024
FAST_DEFAULT_CONFIDENCE = 0.95

# =============================================================================
# CreativeProvider (OpenAI)
# =============================================================================

CREATIVE_BASE_URL = "https://api.openai.com/v1"
CREATIVE_DEFAULT_MODEL = "gpt-4-turbo-preview"
CREATIVE_TRANSCRIPTION_MODEL = "whisper-1"
CREATIVE_EMBEDDING_MODEL = "text-embedding-3-large"
CREATIVE_EMBEDDING_DIMENSIONS = 1536
CREATIVE_DEFAULT_CONFIDENCE = 0.9

# =============================================================================
# Shared Defaults
# =============================================================================

DEFAULT_SERVICE_NAME = "memory-ai-orchestrator"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_TIMEOUT_S = 60.0
DEFAULT_MAX_TOKENS = 2000
DEFAULT_SUMMARY_LENGTH = 100

# Fused results keep at most this many tags
TAG_LIMIT = 10

# Characters of an unparseable payload kept on MalformedResponseError
RAW_EXCERPT_LIMIT = 200
