"""
Structured logging configuration using structlog.
Provides business-scoped logging with automatic context injection.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from drift_engine.config import Settings, get_settings


def add_severity(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add severity level for structured logging."""
    event_dict["severity"] = method_name.upper()
    return event_dict


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structured logging for batch runs.
    Uses JSON format in production, console format in development.

    Args:
        settings: Settings to read level and format from; defaults to the cached ones
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    if settings.log_format == "json" and not settings.dev_mode:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_severity,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def business_context(business_id: str, **fields: Any) -> Iterator[None]:
    """
    Bind a business to every log line emitted inside the block.

    Args:
        business_id: Business under evaluation
        **fields: Extra context (engine, dry_run, ...)

    Example:
        >>> with business_context("biz_1", engine="revenue_v1"):
        ...     logger.info("drift_computed")
    """
    with structlog.contextvars.bound_contextvars(business_id=business_id, **fields):
        yield
