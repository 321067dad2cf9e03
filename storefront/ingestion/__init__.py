"""
Catalog ingestion pipeline.

Modules:
    parser - Delimited text (CSV/semicolon) parsing with header detection
    builder - Row -> Product mapping with column aliases
    cache - Time-boxed Store cache in session storage
    loader - Remote fetch, cache and fallback orchestration
    errors - Failure kinds raised inside the pipeline
"""

from .builder import CatalogBuilder, build_products, build_store, pick_field
from .cache import StoreCache, now_ms
from .errors import (
    CacheCorrupt,
    CatalogError,
    DecodeFailure,
    EmptyCatalog,
    FailureKind,
    SourceUnavailable,
    TransportFailure,
)
from .loader import LoadOutcome, LoadResult, StoreLoader, load_store
from .parser import parse_delimited, pick_delimiter, split_line

__all__ = [
    # Parsing
    'parse_delimited',
    'pick_delimiter',
    'split_line',
    # Building
    'CatalogBuilder',
    'build_products',
    'build_store',
    'pick_field',
    # Cache
    'StoreCache',
    'now_ms',
    # Loading
    'StoreLoader',
    'LoadResult',
    'LoadOutcome',
    'load_store',
    # Errors
    'CatalogError',
    'FailureKind',
    'SourceUnavailable',
    'TransportFailure',
    'DecodeFailure',
    'EmptyCatalog',
    'CacheCorrupt',
]
