"""Routing keys: the closed set of AI capabilities and provider identities."""

from enum import Enum


class Capability(str, Enum):
    """Kind of AI operation, used only as a routing key."""

    TRANSCRIPTION = "transcription"
    CONTEXT_EXTRACTION = "context_extraction"
    SUMMARIZATION = "summarization"
    SEARCH = "search"
    TRANSLATION = "translation"
    CODE_ANALYSIS = "code_analysis"
    CREATIVE = "creative"
    CONVERSATION = "conversation"


class ProviderIdentity(str, Enum):
    """External AI backend wrapped by one provider client.

    - CONTEXT: precision-favoured backend (Anthropic)
    - FAST: low-latency, multilingual and code backend (Moonshot)
    - CREATIVE: generative-breadth backend (OpenAI)
    """

    CONTEXT = "context"
    FAST = "fast"
    CREATIVE = "creative"
