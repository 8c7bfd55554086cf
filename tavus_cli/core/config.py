"""
Client configuration.

A `Configuration` is immutable once built. The module also keeps a process-wide
default that can be set once at startup with `configure()` and cleared with
`reset_configuration()`. These functions are meant for single-threaded setup
and must not be called once clients are in use on other threads.
"""

import os
from dataclasses import dataclass, replace

from tavus_cli.core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://tavusapi.com"
DEFAULT_TIMEOUT = 30

API_KEY_ENV = "TAVUS_API_KEY"
BASE_URL_ENV = "TAVUS_BASE_URL"
TIMEOUT_ENV = "TAVUS_TIMEOUT"


@dataclass(frozen=True)
class Configuration:
    """Settings shared by every request a client makes."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def is_valid(self) -> bool:
        """Check that an API key is present."""
        return isinstance(self.api_key, str) and bool(self.api_key)

    def validate(self) -> "Configuration":
        """Raise ConfigurationError unless the configuration is usable."""
        if not self.is_valid:
            raise ConfigurationError(f"API key is required. Pass api_key or set {API_KEY_ENV}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")
        return self


_default = Configuration()
# Fields set explicitly through configure(), so a value equal to the built-in
# default still takes priority over the environment.
_configured: set[str] = set()


def configure(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> Configuration:
    """
    Set the process-wide default configuration.

    Arguments left as None keep their current default.

    Returns:
        The new default Configuration

    """
    global _default
    changes: dict = {}
    if api_key is not None:
        changes["api_key"] = api_key
    if base_url is not None:
        changes["base_url"] = base_url
    if timeout is not None:
        changes["timeout"] = timeout
    _default = replace(_default, **changes)
    _configured.update(changes)
    return _default


def get_configuration() -> Configuration:
    """Get the process-wide default configuration."""
    return _default


def reset_configuration() -> None:
    """Restore the built-in defaults."""
    global _default
    _default = Configuration()
    _configured.clear()


def resolve_configuration(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> Configuration:
    """
    Build a Configuration for a new client.

    Each setting comes from the explicit argument, then the default set via
    configure(), then the environment (TAVUS_API_KEY / TAVUS_BASE_URL /
    TAVUS_TIMEOUT), then the built-in default.

    Raises:
        ConfigurationError: If no API key is available or TAVUS_TIMEOUT is not a number

    """
    defaults = get_configuration()

    resolved_key = api_key or defaults.api_key or os.environ.get(API_KEY_ENV)

    if base_url:
        resolved_url = base_url
    elif "base_url" in _configured:
        resolved_url = defaults.base_url
    else:
        resolved_url = os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL

    if timeout is not None:
        resolved_timeout = timeout
    elif "timeout" in _configured:
        resolved_timeout = defaults.timeout
    else:
        env_timeout = os.environ.get(TIMEOUT_ENV)
        try:
            resolved_timeout = float(env_timeout) if env_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"{TIMEOUT_ENV} must be a number, got {env_timeout!r}")

    return Configuration(
        api_key=resolved_key,
        base_url=resolved_url,
        timeout=resolved_timeout,
    ).validate()
