"""
Error classification and exception hierarchy.

Provides:
- ErrorCategory enum for classifying errors
- FetchError hierarchy for typed exceptions
- HTTP status classification
"""

from gitb_install.errors.exceptions import (
    # Enums
    ErrorCategory,
    # Base class
    FetchError,
    # Concrete errors
    ConfigurationError,
    RedirectError,
    HttpStatusError,
    TransportError,
    # Classification utilities
    classify_http_status,
)

__all__ = [
    "ErrorCategory",
    "FetchError",
    "ConfigurationError",
    "RedirectError",
    "HttpStatusError",
    "TransportError",
    "classify_http_status",
]
