"""pytest configuration and fixtures for memory-ai-orchestrator tests.

This module registers markers and keeps module-level state (logging
configuration, correlation id) from leaking between tests. Unit fixtures
live in tests/unit/conftest.py.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from memory_ai.core.logging import reset_logging, set_correlation_id


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (need real provider keys)"
    )


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_logging() -> Generator[None, None, None]:
    """Reset logging configuration and correlation id between tests."""
    reset_logging()
    set_correlation_id(None)
    yield
    set_correlation_id(None)
