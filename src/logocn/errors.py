"""Error taxonomy for catalog ingestion and icon downloads.

Every failure that crosses the cache or fetcher boundary is a ``LogocnError``
carrying a machine-readable ``code``, a human-readable ``message`` and a
``recoverable`` flag telling callers whether retrying later may succeed.
Unsuccessful lookups are not errors: ``Registry.find_by_name`` returns
``None`` and ``Registry.search`` returns an empty list.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    CATALOG_FETCH_FAILED = "CATALOG_FETCH_FAILED"
    CATALOG_INVALID = "CATALOG_INVALID"
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
    ICON_NOT_FOUND = "ICON_NOT_FOUND"
    ICON_FETCH_FAILED = "ICON_FETCH_FAILED"
    INVALID_SVG = "INVALID_SVG"
    INVALID_SLUG = "INVALID_SLUG"


class LogocnError(Exception):
    """Base class for all logocn failures."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return self.message


class FetchError(LogocnError):
    """Upstream unreachable or answered with a non-success status."""


class ParseError(LogocnError):
    """A response or the persisted file is not valid JSON or has the wrong shape."""


class CacheReadError(LogocnError):
    """The persisted catalog could not be read even after refetching it."""


class InvalidSlugError(LogocnError):
    """A slug contains characters that cannot appear in an icon filename."""
