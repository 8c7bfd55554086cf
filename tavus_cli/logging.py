"""
Logging setup for the Tavus client.

Library modules use:
    from tavus_cli.logging import get_logger
    logger = get_logger(__name__)

The library never installs handlers itself; applications (and the `tavus`
CLI) call configure_logging() once at startup.
"""

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
    stream=sys.stderr,
) -> None:
    """
    Configure the `tavus_cli` logger.

    Safe to call multiple times; a handler is only added once.
    """
    root = logging.getLogger("tavus_cli")
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger. Configuration happens in configure_logging()."""
    return logging.getLogger(name)
