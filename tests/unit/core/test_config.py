"""Tests for the configuration module.

Tests verify:
- ProviderConfig defaults and normalization
- Settings loads MEMORY_AI_* environment variables, including nested
  provider fields
- Settings validates on load with clear error messages
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from memory_ai.core.config import (
    ContextProviderConfig,
    CreativeProviderConfig,
    FastProviderConfig,
    OrchestratorConfig,
    ProviderConfig,
    Settings,
    get_settings,
)
from memory_ai.core.constants import (
    CONTEXT_BASE_URL,
    CONTEXT_DEFAULT_MODEL,
    CREATIVE_EMBEDDING_MODEL,
    FAST_EMBEDDING_MODEL,
)


class TestProviderConfig:
    """Test ProviderConfig and its per-provider defaults."""

    def test_context_defaults(self) -> None:
        config = ContextProviderConfig()
        assert config.base_url == CONTEXT_BASE_URL
        assert config.model == CONTEXT_DEFAULT_MODEL
        assert config.api_key.get_secret_value() == ""

    def test_embedding_models(self) -> None:
        assert FastProviderConfig().embedding_model == FAST_EMBEDDING_MODEL
        assert CreativeProviderConfig().embedding_model == CREATIVE_EMBEDDING_MODEL
        assert ContextProviderConfig().embedding_model is None

    def test_trailing_slash_is_stripped(self) -> None:
        config = ProviderConfig(base_url="https://api.example.com/v1/", model="m")
        assert config.base_url == "https://api.example.com/v1"

    def test_api_key_is_not_in_repr(self) -> None:
        config = FastProviderConfig(api_key="sk-secret")
        assert "sk-secret" not in repr(config)

    def test_is_frozen(self) -> None:
        config = FastProviderConfig()
        with pytest.raises(ValidationError):
            config.model = "other"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "field,value",
        [("timeout_s", 0), ("max_tokens", 0), ("temperature", 2.5)],
    )
    def test_rejects_out_of_range(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            FastProviderConfig(**{field: value})


class TestOrchestratorConfig:
    """Test the explicit orchestrator configuration struct."""

    def test_defaults_per_provider(self) -> None:
        config = OrchestratorConfig()
        assert isinstance(config.context, ContextProviderConfig)
        assert isinstance(config.fast, FastProviderConfig)
        assert isinstance(config.creative, CreativeProviderConfig)


class TestSettings:
    """Test Settings environment loading."""

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        assert settings.service_name == "memory-ai-orchestrator"
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.tracing_enabled is False
        assert settings.otlp_endpoint is None

    def test_log_level_is_normalized(self) -> None:
        with patch.dict(os.environ, {"MEMORY_AI_LOG_LEVEL": "debug"}, clear=True):
            settings = Settings()
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"MEMORY_AI_LOG_LEVEL": "LOUD"}, clear=True),
            pytest.raises(ValidationError, match="log_level"),
        ):
            Settings()

    def test_invalid_environment_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"MEMORY_AI_ENVIRONMENT": "qa"}, clear=True),
            pytest.raises(ValidationError),
        ):
            Settings()

    def test_nested_provider_fields(self) -> None:
        env = {
            "MEMORY_AI_CONTEXT__API_KEY": "sk-ant-test",
            "MEMORY_AI_CREATIVE__MODEL": "gpt-4o",
            "MEMORY_AI_FAST__TIMEOUT_S": "5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.context.api_key.get_secret_value() == "sk-ant-test"
        assert settings.context.base_url == CONTEXT_BASE_URL
        assert settings.creative.model == "gpt-4o"
        assert settings.fast.timeout_s == 5.0

    def test_orchestrator_config(self) -> None:
        env = {"MEMORY_AI_FAST__API_KEY": "fast-key"}
        with patch.dict(os.environ, env, clear=True):
            config = Settings().orchestrator_config()

        assert isinstance(config, OrchestratorConfig)
        assert config.fast.api_key.get_secret_value() == "fast-key"


class TestGetSettings:
    """Test the cached settings accessor."""

    def test_returns_same_instance(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
