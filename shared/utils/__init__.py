"""Shared utility modules.

- logging: JSON-formatted logging utilities
"""

from .logging import JSONFileHandler, JSONFormatter, setup_logger, setup_logging

__all__ = [
    "JSONFileHandler",
    "JSONFormatter",
    "setup_logger",
    "setup_logging",
]
