"""
Store Cache

Keeps the last remotely loaded Store in session storage for a fixed TTL,
as a JSON string: {"timestamp": <ms since epoch>, "data": <store dict>}.
"""

from __future__ import annotations

import json
import logging
import math
import time
from typing import Callable, Optional

from ..common.constants import STORE_CACHE_KEY, STORE_CACHE_TTL_MS
from ..common.storage import SessionStorage
from ..models import Store
from .errors import CacheCorrupt

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def decode_entry(raw: str) -> tuple[int, Store]:
    """
    Deserialize a cache entry.

    Raises:
        CacheCorrupt: If the payload is not a well-formed entry
    """
    try:
        entry = json.loads(raw)
        timestamp = entry["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise TypeError(f"timestamp must be a number, got {timestamp!r}")
        if not math.isfinite(timestamp):
            raise ValueError(f"timestamp must be finite, got {timestamp!r}")
        store = Store.from_dict(entry["data"])
        timestamp = int(timestamp)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
        raise CacheCorrupt(f"Unreadable cache entry: {e}") from e
    return timestamp, store


def encode_entry(store: Store, timestamp: int) -> str:
    return json.dumps({"timestamp": timestamp, "data": store.to_dict()}, ensure_ascii=False)


class StoreCache:
    """
    Time-boxed Store cache over a SessionStorage.

    Usage:
        cache = StoreCache(MemoryStorage())
        cache.write(store)
        cache.read()  # -> store, until the TTL elapses
    """

    def __init__(
        self,
        storage: SessionStorage,
        key: str = STORE_CACHE_KEY,
        ttl_ms: int = STORE_CACHE_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.storage = storage
        self.key = key
        self.ttl_ms = ttl_ms
        self.clock = clock

    def read_entry(self) -> Optional[Store]:
        """
        Return the cached Store if present and fresh.

        Raises:
            CacheCorrupt: If the entry exists but cannot be decoded. The
                entry is removed before raising.
        """
        raw = self.storage.get_item(self.key)
        if not raw:
            return None

        try:
            timestamp, store = decode_entry(raw)
        except CacheCorrupt:
            self.discard()
            raise

        age = self.clock() - timestamp
        if age >= self.ttl_ms:
            logger.debug("Cache entry expired (%d ms old)", age)
            return None
        return store

    def read(self) -> Optional[Store]:
        """Like read_entry(), but a corrupt entry reads as absent."""
        try:
            return self.read_entry()
        except CacheCorrupt as e:
            logger.warning("%s; discarded", e)
            return None

    def write(self, store: Store) -> bool:
        """
        Store a fresh entry. Best-effort: any storage error is logged, not raised.

        Returns:
            True if the entry was written
        """
        try:
            self.storage.set_item(self.key, encode_entry(store, self.clock()))
        except Exception as e:
            logger.warning("Could not write store cache: %s", e)
            return False
        return True

    def discard(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except Exception as e:
            logger.warning("Could not remove store cache entry: %s", e)
