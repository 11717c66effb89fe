"""Configuration for memory-ai-orchestrator.

Two layers:
- ProviderConfig / OrchestratorConfig: explicit configuration structs handed
  to Orchestrator.from_config(). The orchestrator never reads the
  environment itself; credentials come from whoever builds these.
- Settings: MEMORY_AI_* environment loading via pydantic-settings, for
  applications that want to source the structs above from the environment.

Example:
    MEMORY_AI_LOG_LEVEL=DEBUG
    MEMORY_AI_CONTEXT__API_KEY=sk-ant-...
    MEMORY_AI_CREATIVE__MODEL=gpt-4o
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memory_ai.core.constants import (
    CONTEXT_BASE_URL,
    CONTEXT_DEFAULT_MODEL,
    CREATIVE_BASE_URL,
    CREATIVE_DEFAULT_MODEL,
    CREATIVE_EMBEDDING_MODEL,
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SERVICE_NAME,
    DEFAULT_TIMEOUT_S,
    FAST_BASE_URL,
    FAST_DEFAULT_MODEL,
    FAST_EMBEDDING_MODEL,
)


# =============================================================================
# Provider Configuration
# =============================================================================


class ProviderConfig(BaseModel):
    """Fixed configuration for one provider client.

    Attributes:
        api_key: Bearer credential for the backend.
        base_url: API root, without a trailing slash.
        model: Chat/completion model identifier.
        embedding_model: Embedding model identifier (embedding-capable
            providers only).
        max_tokens: Default completion budget.
        temperature: Default sampling temperature.
        timeout_s: Transport timeout for one request, in seconds.
    """

    model_config = {"frozen": True}

    api_key: SecretStr = Field(default=SecretStr(""))
    base_url: str
    model: str
    embedding_model: str | None = None
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base_url so paths can be appended with a leading slash."""
        return v.rstrip("/")


class ContextProviderConfig(ProviderConfig):
    """ContextProvider defaults (Anthropic Messages API)."""

    base_url: str = CONTEXT_BASE_URL
    model: str = CONTEXT_DEFAULT_MODEL


class FastProviderConfig(ProviderConfig):
    """FastProvider defaults (Moonshot, OpenAI-compatible)."""

    base_url: str = FAST_BASE_URL
    model: str = FAST_DEFAULT_MODEL
    embedding_model: str | None = FAST_EMBEDDING_MODEL


class CreativeProviderConfig(ProviderConfig):
    """CreativeProvider defaults (OpenAI)."""

    base_url: str = CREATIVE_BASE_URL
    model: str = CREATIVE_DEFAULT_MODEL
    embedding_model: str | None = CREATIVE_EMBEDDING_MODEL


class OrchestratorConfig(BaseModel):
    """Configuration for all three provider clients."""

    model_config = {"frozen": True}

    context: ContextProviderConfig = Field(default_factory=ContextProviderConfig)
    fast: FastProviderConfig = Field(default_factory=FastProviderConfig)
    creative: CreativeProviderConfig = Field(default_factory=CreativeProviderConfig)


# =============================================================================
# Environment Settings
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from MEMORY_AI_* environment variables.

    Nested provider fields use a double underscore, e.g.
    MEMORY_AI_FAST__BASE_URL.

    Attributes:
        service_name: Service identifier for logging and tracing.
        environment: Deployment environment.
        log_level: Logging verbosity.
        tracing_enabled: Install an OpenTelemetry tracer provider at startup.
        otlp_endpoint: Optional OTLP collector endpoint.
        context: ContextProvider configuration.
        fast: FastProvider configuration.
        creative: CreativeProvider configuration.
    """

    service_name: str = Field(
        default=DEFAULT_SERVICE_NAME,
        description="Service name for identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default=DEFAULT_ENVIRONMENT,
        description="Deployment environment",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    tracing_enabled: bool = Field(
        default=False,
        description="Install an OpenTelemetry tracer provider at startup",
    )
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC endpoint for span export",
    )

    context: ContextProviderConfig = Field(default_factory=ContextProviderConfig)
    fast: FastProviderConfig = Field(default_factory=FastProviderConfig)
    creative: CreativeProviderConfig = Field(default_factory=CreativeProviderConfig)

    model_config = SettingsConfigDict(
        env_prefix="MEMORY_AI_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level to uppercase.

        Raises:
            ValueError: If log level is not valid.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            msg = f"log_level must be one of {valid_levels}, got '{v}'"
            raise ValueError(msg)
        return normalized

    def orchestrator_config(self) -> OrchestratorConfig:
        """Build the explicit orchestrator configuration from these settings."""
        return OrchestratorConfig(
            context=self.context,
            fast=self.fast,
            creative=self.creative,
        )


@lru_cache
def get_settings() -> Settings:
    """Get the cached Settings instance."""
    return Settings()
