"""
Custom Exception Classes for locale routing

This module defines the exceptions raised while resolving the locale of a
root URL request, plus configuration failures detected at startup.

Segment parse errors never escape the root router: they are caught there and
turned into a 404 decision. They still carry a status code and error code so
that callers using the parser directly get a consistent error response.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes included in error responses."""

    SEGMENT_MALFORMED = "LOCALE_SEGMENT_MALFORMED"
    UNKNOWN_LANGUAGE = "LOCALE_UNKNOWN_LANGUAGE"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    CONTENT_STORE_UNAVAILABLE = "CONTENT_STORE_UNAVAILABLE"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LocaleRoutingError(Exception):
    """Base exception class for all locale routing exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# URL Segment Exceptions
# ============================================================================


class SegmentParseError(LocaleRoutingError):
    """Base class for URL language segments that cannot be routed"""

    def __init__(self, message: str, segment: str, style: str | None = None):
        details: dict[str, Any] = {"segment": segment}
        if style:
            details["style"] = style
        self.segment = segment
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND, details=details)


class MalformedSegmentError(SegmentParseError):
    """Raised when a segment has the wrong separator or casing for the URL style"""

    error_code = ErrorCode.SEGMENT_MALFORMED

    def __init__(self, segment: str, style: str | None = None, reason: str = "malformed language segment"):
        super().__init__(message=f"'{segment}': {reason}", segment=segment, style=style)


class UnknownLanguageError(SegmentParseError):
    """Raised when a well-formed language code maps to no known locale"""

    error_code = ErrorCode.UNKNOWN_LANGUAGE

    def __init__(self, segment: str, style: str | None = None):
        super().__init__(message=f"No locale is known for language '{segment}'", segment=segment, style=style)


# ============================================================================
# Configuration & Collaborator Exceptions
# ============================================================================


class ConfigurationError(LocaleRoutingError):
    """Raised when the locale configuration is invalid at startup"""

    error_code = ErrorCode.CONFIGURATION_INVALID

    def __init__(self, message: str = "Invalid locale configuration"):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ContentStoreError(LocaleRoutingError):
    """Raised when the content store fails while it reports itself ready"""

    error_code = ErrorCode.CONTENT_STORE_UNAVAILABLE

    def __init__(self, message: str = "The content store is unavailable", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)
