"""
Logging configuration.

Provides the shared application logger used across services and providers.
"""

import logging
import sys

LOGGER_NAME = "crola"

_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root handler once and return the application logger."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
    return logging.getLogger(LOGGER_NAME)


logger = logging.getLogger(LOGGER_NAME)
