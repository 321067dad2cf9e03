"""
Store Loader

Fetches the published catalog sheet and turns it into a Store, with a
session cache in front and the bundled fallback Store behind.

Decision sequence for each load:
1. No source configured -> fallback
2. Fresh cache entry -> cached Store (no network I/O)
3. HTTP GET with caching disabled -> fallback on any failure
4. Decode, parse, build -> fallback when no product survives
5. Cache the new Store (best-effort) and return it

There are no retries. Loading again later (next page view, next CLI run)
is the retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import requests
import yaml

from ..common.config_loader import CatalogSettings, load_catalog_settings
from ..common.constants import FALLBACK_STORE
from ..common.storage import MemoryStorage, SessionStorage
from ..models import Store
from .builder import CatalogBuilder
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
from .parser import parse_delimited

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


class LoadOutcome(str, Enum):
    REMOTE = "remote"
    CACHE = "cache"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class LoadResult:
    """A loaded Store plus where it came from (and why, for a fallback)."""
    store: Store
    outcome: LoadOutcome
    failure: Optional[FailureKind] = None
    detail: str = ""

    @property
    def is_fallback(self) -> bool:
        return self.outcome is LoadOutcome.FALLBACK


class StoreLoader:
    """
    Loads the catalog Store from the configured sheet.

    Never raises for the failure kinds in errors.py; every one of them
    degrades to the fallback Store.

    Usage:
        loader = StoreLoader(load_catalog_settings(), storage=FileStorage(".cache/session.json"))
        result = loader.load()
        result.store, result.outcome
    """

    def __init__(
        self,
        settings: CatalogSettings,
        storage: Optional[SessionStorage] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], int] = now_ms,
        fallback: Store = FALLBACK_STORE,
    ):
        """
        Initialize the loader.

        Args:
            settings: Source URL, cache key/TTL, timeout and column aliases
            storage: Session storage for the cache (default: in-memory)
            session: requests session (default: a new one)
            clock: Millisecond clock, injectable for tests
            fallback: Store served whenever loading fails
        """
        self.settings = settings
        self.cache = StoreCache(
            storage if storage is not None else MemoryStorage(),
            key=settings.cache_key,
            ttl_ms=settings.cache_ttl_ms,
            clock=clock,
        )
        self.session = session or requests.Session()
        self.builder = CatalogBuilder(settings.field_aliases)
        self.fallback = fallback

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _fallback(self, error: CatalogError) -> LoadResult:
        logger.warning("Using fallback catalog (%s): %s", error.kind.value, error)
        return LoadResult(
            store=self.fallback,
            outcome=LoadOutcome.FALLBACK,
            failure=error.kind,
            detail=str(error),
        )

    def fetch_text(self) -> str:
        """
        Download the sheet and decode it as UTF-8.

        Raises:
            TransportFailure: On network errors or non-2xx responses
            DecodeFailure: If the body is not valid UTF-8
        """
        url = self.settings.source_url
        try:
            response = self.session.get(
                url,
                headers=NO_CACHE_HEADERS,
                timeout=self.settings.request_timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportFailure(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TransportFailure(f"HTTP {response.status_code} from {url}")

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailure(f"Response body is not UTF-8: {e}") from e

    def build_store(self, text: str) -> Store:
        """
        Parse and build a Store from sheet text.

        Raises:
            EmptyCatalog: If no row survives validation
        """
        rows = parse_delimited(text)
        products = self.builder.build(rows)
        if not products:
            raise EmptyCatalog(f"No valid products in {len(rows)} rows")
        return self.builder.to_store(products)

    def load(self) -> LoadResult:
        """Load the Store, reporting where it came from."""
        try:
            if not self.settings.source_configured:
                raise SourceUnavailable("No catalog source URL configured")

            try:
                cached = self.cache.read_entry()
            except CacheCorrupt as e:
                logger.warning("%s; discarded", e)
                cached = None
            if cached is not None:
                logger.info("Loaded %d products from session cache", len(cached.products))
                return LoadResult(store=cached, outcome=LoadOutcome.CACHE)

            store = self.build_store(self.fetch_text())
        except CatalogError as e:
            return self._fallback(e)

        self.cache.write(store)
        logger.info("Loaded %d products in %d categories from %s",
                    len(store.products), len(store.categories), self.settings.source_url)
        return LoadResult(store=store, outcome=LoadOutcome.REMOTE)

    def load_store(self) -> Store:
        """Load the Store. Always returns a usable Store."""
        return self.load().store


def load_store(
    settings: Optional[CatalogSettings] = None,
    storage: Optional[SessionStorage] = None,
) -> Store:
    """
    Convenience function: load the Store with a one-off loader.

    Args:
        settings: Catalog settings (if None, loads config/catalog.yaml;
            an unreadable config means no source, i.e. the fallback Store)
        storage: Session storage for the cache
    """
    if settings is None:
        try:
            settings = load_catalog_settings()
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("Catalog config unavailable (%s); serving fallback", e)
            settings = CatalogSettings()

    with StoreLoader(settings, storage=storage) as loader:
        return loader.load_store()
