"""Structured logging helpers."""

import logging
from typing import Any, Dict

from gitb_install.errors import FetchError

# Longest error text carried in the error_message field
MAX_ERROR_MESSAGE = 500


def log_with_context(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """
    Log msg with fields attached to the record.

    The fields become record attributes, so JSONFormatter emits the ones it
    knows (url, http_status, bytes_transferred, ...) as top-level keys:

        log_with_context(logger, logging.DEBUG, "Following redirect",
                         url=current, http_status=302)
    """
    logger.log(level, msg, extra=fields)


def error_fields(exc: BaseException) -> Dict[str, Any]:
    """Describe exc as log fields: its context, category and a short message."""
    fields: Dict[str, Any] = {}
    if isinstance(exc, FetchError):
        fields.update(exc.context)
        fields["error_category"] = exc.category.value

    text = str(exc)
    if len(text) > MAX_ERROR_MESSAGE:
        text = text[:MAX_ERROR_MESSAGE] + "..."
    fields["error_message"] = text
    return fields


def log_exception(
    logger: logging.Logger,
    exc: BaseException,
    msg: str,
    level: int = logging.ERROR,
    include_traceback: bool = False,
    **fields: Any,
) -> None:
    """
    Log a failure with the fields from error_fields(exc).

    Explicit fields win over those derived from the exception. The
    traceback is attached only when include_traceback is set.
    """
    extra = {**error_fields(exc), **fields}
    logger.log(level, msg, exc_info=exc if include_traceback else None, extra=extra)
