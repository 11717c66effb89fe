"""Fixtures for unit tests: provider configs and recording transports."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from fakes import (
    TEST_CONTEXT_URL,
    TEST_CREATIVE_URL,
    TEST_FAST_URL,
    RecordingTransport,
)

from memory_ai.core.config import (
    ContextProviderConfig,
    CreativeProviderConfig,
    FastProviderConfig,
    OrchestratorConfig,
)


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def context_config() -> ContextProviderConfig:
    return ContextProviderConfig(api_key="ctx-key", base_url=TEST_CONTEXT_URL)


@pytest.fixture
def fast_config() -> FastProviderConfig:
    return FastProviderConfig(api_key="fast-key", base_url=TEST_FAST_URL)


@pytest.fixture
def creative_config() -> CreativeProviderConfig:
    return CreativeProviderConfig(api_key="creative-key", base_url=TEST_CREATIVE_URL)


@pytest.fixture
def orchestrator_config(
    context_config: ContextProviderConfig,
    fast_config: FastProviderConfig,
    creative_config: CreativeProviderConfig,
) -> OrchestratorConfig:
    return OrchestratorConfig(
        context=context_config, fast=fast_config, creative=creative_config
    )


# =============================================================================
# Transport Fixtures
# =============================================================================


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for a RecordingTransport.

    Pass either a handler, or a JSON body (and optional status) returned for
    every request.
    """

    def factory(
        body: Any = None,
        status_code: int = 200,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> RecordingTransport:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=body)

        return RecordingTransport(handler)

    return factory
