"""
Exception types and error classification for the installer.

Provides:
- ErrorCategory enum for diagnostics
- Typed exception hierarchy for fetch failures
- HTTP status classification
"""

from enum import Enum
from typing import List, Optional


class ErrorCategory(Enum):
    """
    Classification of error types.

    The installer never retries on its own; the category is attached to
    log records so the invoking process (or a human) can decide whether
    re-running the install is worthwhile.

    Categories:
        TRANSIENT: Temporary failures that may succeed on a later run
                   (e.g., connection reset, DNS failure, 503)
        PERMANENT: Failures that won't change on re-run
                   (e.g., 404, missing version, redirect loop)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class FetchError(Exception):
    """
    Base exception for all installer errors.

    Attributes:
        message: Human-readable error description
        category: Error classification
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


class ConfigurationError(FetchError):
    """Required configuration (e.g. the version) is missing or invalid."""

    category = ErrorCategory.PERMANENT


class RedirectError(FetchError):
    """Redirect could not be followed (missing Location, too many hops)."""

    category = ErrorCategory.PERMANENT

    def __init__(
        self,
        message: str,
        chain: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        self.chain = list(chain or [])
        super().__init__(message, cause, {"redirect_chain": self.chain})


class HttpStatusError(FetchError):
    """Server answered with a status other than 200 or a followed redirect."""

    def __init__(self, status_code: int, reason: Optional[str], url: str):
        self.status_code = status_code
        self.reason = reason or ""
        self.url = url
        message = f"HTTP {status_code}"
        if self.reason:
            message = f"{message} {self.reason}"
        super().__init__(
            f"{message} while downloading {url}",
            context={"http_status": status_code, "url": url},
        )

    @property
    def category(self) -> ErrorCategory:  # type: ignore[override]
        return classify_http_status(self.status_code)


class TransportError(FetchError):
    """Network or I/O failure during connection or streaming."""

    category = ErrorCategory.TRANSIENT


# =============================================================================
# Error Classification Utilities
# =============================================================================


def classify_http_status(status_code: int) -> ErrorCategory:
    """
    Classify HTTP status code into error category.

    Args:
        status_code: HTTP response status

    Returns:
        Appropriate ErrorCategory
    """
    if 200 <= status_code < 300:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code in (408, 429):
        return ErrorCategory.TRANSIENT

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT  # Client errors, won't fix on re-run

    if status_code >= 500:
        return ErrorCategory.TRANSIENT  # Server errors, may recover

    return ErrorCategory.UNKNOWN
