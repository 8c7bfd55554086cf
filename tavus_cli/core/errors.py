"""
Error taxonomy for the Tavus API client.

Local errors (configuration, arguments) are raised before any request is sent.
Everything else is raised after a round-trip and carries the HTTP status.
"""

from typing import Any


class TavusError(Exception):
    """Base error class for all client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(TavusError):
    """Invalid or missing client configuration."""


class ArgumentError(TavusError, ValueError):
    """Caller-supplied arguments violate a precondition (not an API error)."""


class APIError(TavusError):
    """API error with status code and raw response body."""

    def __init__(
        self,
        message: str,
        status: int = 0,
        details: dict | None = None,
        body: str | None = None,
    ):
        super().__init__(message, details)
        self.status = status
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        return result


class BadRequestError(APIError):
    """400 Bad Request."""


class AuthenticationError(APIError):
    """401 Unauthorized."""


class NotFoundError(APIError):
    """404 Not Found."""


class ValidationError(APIError):
    """422 Unprocessable Entity."""


class RateLimitError(APIError):
    """429 Too Many Requests."""


class ServerError(APIError):
    """5xx server-side failure."""
