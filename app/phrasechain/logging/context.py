"""Locale-switch context binding for structured logging.

Binds per-switch metadata so every log entry emitted while a locale
switch is in flight carries the same request id and target locale.

Usage:
    from phrasechain.logging import bind_locale_context

    with bind_locale_context(request_id=7, target_locale="es"):
        logger.info("loading_bundle")
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_locale_context(
    request_id: Optional[int] = None,
    target_locale: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind locale-switch context to all logs within the block.

    Args:
        request_id: Token of the switch request.
        target_locale: Locale being switched to.
        **extra_context: Additional key-value pairs to include in logs.
    """
    context: dict[str, Any] = {}

    if request_id is not None:
        context["switch_request_id"] = request_id

    if target_locale is not None:
        context["target_locale"] = target_locale

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_locale_context() -> dict[str, Any]:
    """Return the locale context currently bound for logging."""
    return structlog.contextvars.get_contextvars()
