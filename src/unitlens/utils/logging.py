"""Logging setup for the unitlens CLI and server.

Only the ``unitlens`` logger is configured; uvicorn and other libraries
keep their own logging.
"""

from __future__ import annotations

import logging
import sys

from unitlens.config.settings import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Attach stderr (and optionally file) handlers to the ``unitlens`` logger.

    Handlers left by an earlier call are closed and replaced, so the CLI
    and tests can call this more than once without duplicate lines.

    Args:
        config: Logging configuration. If None, INFO level to stderr.
    """
    if config is None:
        config = LoggingConfig()

    package_logger = logging.getLogger("unitlens")
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.info("Logging initialized at %s level", config.level)
