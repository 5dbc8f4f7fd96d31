"""Structured logging infrastructure.

Public API:
    - configure_logging(): Install a stderr handler on the package logger
    - get_module_logger(): Get a logger for the calling module
    - bind_locale_context(): Context manager for locale-switch logging
    - get_locale_context(): Read the currently bound logging context
"""

from phrasechain.logging.context import bind_locale_context, get_locale_context
from phrasechain.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_locale_context",
    "get_locale_context",
]
