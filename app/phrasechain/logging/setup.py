"""structlog wiring for phrasechain.

Every module logs through its own stdlib logger under the ``phrasechain``
namespace, so a host application tunes or silences the library with
``logging.getLogger("phrasechain")``. Importing the package only points
structlog at the stdlib tree; installing a handler is left to the host or
to `configure_logging()`, which the `phrasechain-validate` command calls.

Usage:
    from phrasechain.logging import get_module_logger

    logger = get_module_logger()
    logger.info("locale_switched", locale="es")
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from phrasechain.configuration import settings

PACKAGE_LOGGER = "phrasechain"
LOG_FORMAT = "%(message)s"


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _processors(json_output: bool) -> List[Processor]:
    """Build the processor chain, ending in a JSON or console renderer."""
    chain: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def _wire_structlog(json_output: bool) -> None:
    structlog.configure(
        processors=_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    if _is_test_environment():
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.CRITICAL + 1)


def configure_logging(
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> logging.Logger:
    """Send phrasechain events to stderr.

    Replaces any handler previously installed on the package logger and
    stops propagation to the root logger. Under pytest the package logger
    stays silenced.

    Args:
        log_level: Level name; defaults to settings.LOG_LEVEL.
        json_output: Render JSON lines instead of console output; defaults
            to settings.is_production.

    Returns:
        The stdlib package logger.
    """
    if json_output is None:
        json_output = settings.is_production
    _wire_structlog(json_output)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _is_test_environment():
        return package_logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.handlers = [handler]
    package_logger.propagate = False

    level_name = (log_level or settings.LOG_LEVEL).upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    return package_logger


def get_module_logger() -> BoundLogger:
    """Return a logger named after the calling module.

    The logger is created lazily on first use, so a later
    `configure_logging()` call still decides how it renders.

    Example:
        # In phrasechain/i18n/controller.py
        logger = get_module_logger()
        # context: {"component": "controller", "module_path": "phrasechain.i18n.controller"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return structlog.stdlib.get_logger(PACKAGE_LOGGER, component="unknown")

    name = module.__name__
    return structlog.stdlib.get_logger(
        name, component=name.rsplit(".", 1)[-1], module_path=name
    )


_wire_structlog(json_output=settings.is_production)
