"""
Logging helpers for the "plantops" logger.

Scheduler runs and calls to the automation endpoint report through these so
that timing and failure lines have the same shape everywhere.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings

PLANTOPS_LOGGER = "plantops"

# Runs faster than this are only logged when DEBUG is on.
SLOW_OPERATION_SECONDS = 1.0


def get_logger(name: str = PLANTOPS_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


logger = get_logger()


def _format_context(context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in context.items())


def log_performance(
    operation: str,
    duration: float,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Record how long an operation took and whether it succeeded."""
    slow = duration >= SLOW_OPERATION_SECONDS
    if not (slow or settings.DEBUG):
        return

    outcome = "ok" if success else "failed"
    if not slow:
        level = logging.DEBUG
    elif success:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger.log(level, f"{operation} {outcome} in {duration:.3f}s{_format_context(details)}")


def log_error(
    message: str,
    exception: Optional[Exception] = None,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Log a failure; the traceback is attached only when DEBUG is on."""
    if exception is None:
        logger.error(f"{message}{_format_context(context)}")
        return
    logger.error(
        f"{message}: {exception.__class__.__name__}: {exception}{_format_context(context)}",
        exc_info=exception if settings.DEBUG else None,
    )
