"""
Cache utility module for the FPL league tracker.

This module provides the league response cache. Records are JSON strings
``{"timestamp": <epoch ms>, "data": {...}}`` held in a key-value store, so the
TTL policy is independent of where the strings actually live.
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ingest.fpl.models import LeagueData
from .constants import CACHE_TTL_SECONDS, cache_key

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Minimal string store the response cache is written against."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class FileStore(KeyValueStore):
    """One JSON file per key under a cache directory."""

    def __init__(self, cache_dir: Union[str, Path] = "data/cache"):
        """
        Initialize the file store.

        Args:
            cache_dir: Directory holding one ``<key>.json`` file per record
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get_cache_path(self, key: str) -> Path:
        safe_key = re.sub(r'[^A-Za-z0-9_.-]', '_', key)
        return self.cache_dir / f"{safe_key}.json"

    def get_item(self, key: str) -> Optional[str]:
        cache_path = self.get_cache_path(key)
        if not cache_path.exists():
            return None
        return cache_path.read_text(encoding='utf-8')

    def set_item(self, key: str, value: str) -> None:
        cache_path = self.get_cache_path(key)
        tmp_path = cache_path.with_suffix(".tmp")
        try:
            tmp_path.write_text(value, encoding='utf-8')
            tmp_path.replace(cache_path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
        logger.info(f"Saved cache: {cache_path}")

    def remove_item(self, key: str) -> None:
        cache_path = self.get_cache_path(key)
        if cache_path.exists():
            cache_path.unlink()
            logger.info(f"Cleared cache: {cache_path}")


class ResponseCache:
    """Time-to-live cache of league bundles, keyed by league id."""

    def __init__(self, store: Optional[KeyValueStore] = None, ttl_seconds: float = CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.time):
        """
        Initialize the response cache.

        Args:
            store: Backing key-value store (defaults to in-memory)
            ttl_seconds: Maximum record age before it is treated as absent
            clock: Returns the current time in seconds
        """
        self.store = store if store is not None else MemoryStore()
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def get(self, league_id) -> Optional[LeagueData]:
        """
        Return the cached bundle, or None when missing, stale or unreadable.

        Stale and unreadable records are removed from the store.
        """
        key = cache_key(league_id)
        try:
            raw = self.store.get_item(key)
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable cache record {key}: {e}")
            self._discard(key)
            return None
        if raw is None:
            return None

        try:
            record = json.loads(raw)
            timestamp = int(record["timestamp"])
            data = record["data"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable cache record {key}: {e}")
            self._discard(key)
            return None

        age_ms = self._now_ms() - timestamp
        if age_ms > self.ttl_seconds * 1000:
            logger.info(f"Cache record {key} expired ({age_ms / 1000:.0f}s old)")
            self._discard(key)
            return None

        try:
            bundle = LeagueData.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding malformed cache payload {key}: {e}")
            self._discard(key)
            return None

        logger.info(f"Using cached data for {key}")
        return bundle

    def put(self, league_id, payload: LeagueData) -> None:
        key = cache_key(league_id)
        record = {'timestamp': self._now_ms(), 'data': payload.to_dict()}
        try:
            self.store.set_item(key, json.dumps(record, ensure_ascii=False))
        except OSError as e:
            logger.warning(f"Failed to save cache {key}: {e}")

    def _discard(self, key: str) -> None:
        try:
            self.store.remove_item(key)
        except OSError as e:
            logger.warning(f"Failed to remove cache record {key}: {e}")

    def clear(self, league_id) -> None:
        self.store.remove_item(cache_key(league_id))
