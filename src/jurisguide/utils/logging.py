"""Structured logging configuration using structlog.

Output is controlled by two settings, read from the environment or ``.env``:

- ``JURISGUIDE_LOG_LEVEL``: minimum level (default ``INFO``)
- ``JURISGUIDE_DEBUG``: console rendering instead of JSON lines
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from rich.logging import RichHandler

from jurisguide.config import settings

PACKAGE_NAME = "jurisguide"


def add_package_name(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag every event with the package, unless a caller already set one."""
    event_dict.setdefault("package", PACKAGE_NAME)
    return event_dict


def configure_logging(log_level: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """
    Configure structured logging with rich output.

    Args:
        log_level: Level name overriding ``settings.log_level``
        debug: Overrides ``settings.debug``; true selects console rendering
    """
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    use_console = settings.debug if debug is None else debug

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )

    renderer = structlog.dev.ConsoleRenderer() if use_console else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_package_name,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="ISO"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_adaptation_context(
    background: str,
    legal_category: str,
    urgency: str,
    **kwargs: Any
) -> Dict[str, Any]:
    """Create a log context for an adaptation request.

    Only request parameters are included; guidance text never enters the log.
    """
    return {
        "adaptation_context": {
            "background": background,
            "legal_category": legal_category,
            "urgency": urgency,
            **{k: v for k, v in kwargs.items() if not k.startswith("_")},
        }
    }
