"""
Custom exceptions for FMP API integration.

This module defines the exception hierarchy raised by the SDK. Cache
failures never appear here: they are absorbed at the provider boundary.
"""

from typing import Optional

RETRYABLE_STATUS_CODES = frozenset({408, 413, 429})


def is_retryable_status(status: int) -> bool:
    """Transient statuses: timeout, payload too large, rate limited and any 5xx."""
    return status in RETRYABLE_STATUS_CODES or 500 <= status <= 599


class FMPError(Exception):
    """
    Base exception for all FMP SDK errors.

    Use this for catching any SDK-related error.
    """

    def __init__(self, message: str) -> None:
        """
        Initialize FMPError.

        Args:
            message: Error description
        """
        self.message = message
        super().__init__(self.message)


class FMPConfigError(FMPError):
    """
    Raised when the client is constructed with invalid configuration.

    This occurs when:
    - The API key is missing or blank
    - An option has an invalid value (negative TTL, retries, ...)

    Raised synchronously at construction and never retried.

    Example:
        >>> raise FMPConfigError("API key is required")
    """


class FMPAPIError(FMPError):
    """
    Raised when an API request fails.

    Non-2xx responses carry the HTTP status and status text. Transport
    failures, timeouts and undecodable bodies are wrapped into this
    error without a status, keeping the original message.

    Attributes:
        status: HTTP status code, or None for non-HTTP failures
        status_text: HTTP reason phrase, or None

    Example:
        >>> raise FMPAPIError("Invalid API KEY.", status=401, status_text="Unauthorized")
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> None:
        """
        Initialize FMPAPIError.

        Args:
            message: Error description (response body when available)
            status: Optional HTTP status code
            status_text: Optional HTTP reason phrase
        """
        self.status = status
        self.status_text = status_text
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Whether the status belongs to the transient set."""
        return self.status is not None and is_retryable_status(self.status)

    def __str__(self) -> str:
        """Return the message prefixed with the status when known."""
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


class FMPValidationError(FMPError):
    """
    Raised when resource arguments are invalid.

    This is a client-side error detected before any request is sent
    and should not be retried.

    Example:
        >>> raise FMPValidationError("Symbol is required", field="symbol")
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize FMPValidationError.

        Args:
            message: Error description
            field: Optional parameter name that failed validation
        """
        self.field = field

        if field:
            message = f"{field}: {message}"

        super().__init__(message)
