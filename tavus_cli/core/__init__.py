"""
Core layer - configuration, errors and HTTP client.

This layer provides:
- Immutable client configuration with process-wide defaults
- Low-level HTTP client with auth and error classification
- JSON Patch operation helpers
"""

from tavus_cli.core.client import APIClient, classify_response
from tavus_cli.core.config import (
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
    resolve_configuration,
)
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
from tavus_cli.core.patch import PATCH_OPERATIONS, build_patch_operation, validate_patch_operations

__all__ = [
    "PATCH_OPERATIONS",
    "APIClient",
    "APIError",
    "ArgumentError",
    "AuthenticationError",
    "BadRequestError",
    "Configuration",
    "ConfigurationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TavusError",
    "ValidationError",
    "build_patch_operation",
    "classify_response",
    "configure",
    "get_configuration",
    "reset_configuration",
    "resolve_configuration",
    "validate_patch_operations",
]
