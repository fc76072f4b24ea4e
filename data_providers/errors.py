"""
Provider error taxonomy.

Transport failures, non-200 responses and decode failures surface as
distinct exception types so callers can tell the failure mode apart.
"""
from typing import Optional


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors)."""


class ProviderStatusError(ProviderRequestError):
    """Provider answered with a non-200 status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"API request failed with status code: {status_code}")


class ProviderDecodeError(ProviderError):
    """Response body was not valid JSON or did not match the expected shape."""


class WeekNotFoundError(ProviderError):
    """No schedule week contains the requested date."""
