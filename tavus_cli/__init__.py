"""
Tavus CLI - Three-layer client for the Tavus API.

Layers:
- core: Configuration, error taxonomy, HTTP client and JSON Patch helpers
- sdk: High-level TavusClient with one operations object per resource
- cli: Opinionated command-line interface
"""

from tavus_cli.core.config import configure, get_configuration, reset_configuration
from tavus_cli.core.errors import (
    APIError,
    ArgumentError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TavusError,
    ValidationError,
)
from tavus_cli.sdk import TavusClient

__version__ = "0.1.0"
__all__ = [
    "APIError",
    "ArgumentError",
    "AuthenticationError",
    "BadRequestError",
    "ConfigurationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TavusClient",
    "TavusError",
    "ValidationError",
    "configure",
    "get_configuration",
    "reset_configuration",
]
