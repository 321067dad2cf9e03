"""
Catalog loading errors.

Raised inside the loading pipeline and caught at the loader boundary,
where each one turns into a fallback LoadResult. None of them reaches
callers of load_store().
"""

from enum import Enum


class FailureKind(str, Enum):
    SOURCE_UNAVAILABLE = "source_unavailable"
    TRANSPORT_FAILURE = "transport_failure"
    DECODE_FAILURE = "decode_failure"
    EMPTY_CATALOG = "empty_catalog"
    CACHE_CORRUPT = "cache_corrupt"


class CatalogError(Exception):
    """Base class for catalog loading failures."""

    kind: FailureKind


class SourceUnavailable(CatalogError):
    """No remote source configured, or the URL is still the placeholder."""
    kind = FailureKind.SOURCE_UNAVAILABLE


class TransportFailure(CatalogError):
    """Network error or non-success HTTP status."""
    kind = FailureKind.TRANSPORT_FAILURE


class DecodeFailure(CatalogError):
    """Response body is not valid UTF-8 text."""
    kind = FailureKind.DECODE_FAILURE


class EmptyCatalog(CatalogError):
    """The sheet parsed, but no row had both a name and a category."""
    kind = FailureKind.EMPTY_CATALOG


class CacheCorrupt(CatalogError):
    """Cached payload could not be deserialized."""
    kind = FailureKind.CACHE_CORRUPT
