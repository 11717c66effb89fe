"""Custom exceptions for memory-ai-orchestrator.

Exception Hierarchy:
    MemoryAIError (base)
    ├── RetriableError (transient errors)
    │   └── ProviderUnavailableError
    └── NonRetriableError (permanent errors)
        ├── MalformedResponseError
        ├── AllProvidersFailedError
        ├── UnsupportedCapabilityError
        └── ConfigurationError

ProviderUnavailableError and MalformedResponseError are raised by provider
clients. AllProvidersFailedError is raised only by the orchestrator's
ensemble path. UnsupportedCapabilityError marks a routing defect, not a
condition callers are expected to handle.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from memory_ai.core.constants import RAW_EXCERPT_LIMIT


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """Error codes for memory-ai-orchestrator exceptions.

    These codes provide a consistent way to identify error types
    in logs and in whatever the caller persists.
    """

    # Base error
    MEMORY_AI_ERROR = "MEMORY_AI_ERROR"

    # Retriable errors
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"

    # Non-retriable errors
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    ALL_PROVIDERS_FAILED = "ALL_PROVIDERS_FAILED"
    UNSUPPORTED_CAPABILITY = "UNSUPPORTED_CAPABILITY"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class MemoryAIError(Exception):
    """Base exception for all memory-ai-orchestrator errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.MEMORY_AI_ERROR,
        **kwargs: Any,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )

        for key, value in kwargs.items():
            setattr(self, key, value)


class RetriableError(MemoryAIError):
    """Base class for transient errors that may succeed on retry.

    Attributes:
        retry_after_ms: Suggested retry delay in milliseconds.
    """

    def __init__(
        self,
        message: str,
        retry_after_ms: int = 1000,
        error_code: str | ErrorCode = ErrorCode.MEMORY_AI_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.retry_after_ms = retry_after_ms


class NonRetriableError(MemoryAIError):
    """Base class for permanent errors that should not be retried."""

    pass


# =============================================================================
# Provider Failures
# =============================================================================


class ProviderUnavailableError(RetriableError):
    """A provider backend could not be reached or refused the request.

    Covers network failures, timeouts, authentication failures and any
    non-2xx HTTP status. Retrying the whole operation, or overriding the
    provider, may succeed.

    Attributes:
        provider: Identity of the provider that failed.
        status_code: HTTP status returned by the backend, if any.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        retry_after_ms: int = 1000,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            retry_after_ms=retry_after_ms,
            error_code=ErrorCode.PROVIDER_UNAVAILABLE,
            **kwargs,
        )
        self.provider = provider
        self.status_code = status_code


class MalformedResponseError(NonRetriableError):
    """A provider returned a payload that does not fit the expected shape.

    Raised when the body is not JSON, required fields are missing, or
    values have the wrong type or range. This signals contract drift on the
    provider side and is surfaced rather than retried.

    Attributes:
        provider: Identity of the provider that produced the payload.
        raw_excerpt: Leading characters of the offending payload.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        raw: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            error_code=ErrorCode.MALFORMED_RESPONSE,
            **kwargs,
        )
        self.provider = provider
        self.raw_excerpt = raw[:RAW_EXCERPT_LIMIT] if raw else None


# Failure kinds a provider client may raise at runtime
PROVIDER_FAILURES: tuple[type[MemoryAIError], ...] = (
    ProviderUnavailableError,
    MalformedResponseError,
)


# =============================================================================
# Orchestration Failures
# =============================================================================


class AllProvidersFailedError(NonRetriableError):
    """Every provider attempted by an ensemble operation failed.

    Attributes:
        errors: Mapping of provider identity to the error it raised,
            in the order the providers were attempted.
    """

    def __init__(
        self,
        message: str,
        errors: Mapping[str, BaseException] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            error_code=ErrorCode.ALL_PROVIDERS_FAILED,
            **kwargs,
        )
        self.errors = dict(errors or {})


class UnsupportedCapabilityError(NonRetriableError):
    """A provider was asked for an operation it does not implement.

    This is a programming error: routing must never select a client that
    lacks the requested operation.

    Attributes:
        provider: Identity of the selected provider.
        operation: Name of the operation that was requested.
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        **kwargs: Any,
    ) -> None:
        message = f"Provider '{provider}' does not support operation '{operation}'"
        super().__init__(
            message,
            error_code=ErrorCode.UNSUPPORTED_CAPABILITY,
            **kwargs,
        )
        self.provider = provider
        self.operation = operation


class ConfigurationError(NonRetriableError):
    """Orchestrator or provider configuration is invalid.

    Attributes:
        setting: Name of the problematic setting.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            **kwargs,
        )
        self.setting = setting
