"""
In-process TTL cache for search responses.

Endpoints run in a worker thread pool, so every read and write of the shared
entries and counters happens under one lock.
"""
from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, NamedTuple

from .config import DEFAULT_RANKING_CONFIG


class _Entry(NamedTuple):
    value: Any
    stored_at: float


_entries: dict[str, _Entry] = {}
_stats = {"hits": 0, "misses": 0, "expired": 0}
_lock = threading.Lock()


def cache_key(request_dict: dict) -> str:
    """Stable digest of a request; key order and non-ASCII text do not matter."""
    payload = json.dumps(request_dict, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


def cache_get(request_dict: dict, ttl: float = DEFAULT_RANKING_CONFIG.cache_ttl) -> Any | None:
    key = cache_key(request_dict)
    now = time.time()
    with _lock:
        entry = _entries.get(key)
        if entry is not None and now - entry.stored_at < ttl:
            _stats["hits"] += 1
            return entry.value
        if entry is not None:
            _entries.pop(key, None)
            _stats["expired"] += 1
        _stats["misses"] += 1
    return None


def cache_set(request_dict: dict, value: Any) -> None:
    entry = _Entry(value=value, stored_at=time.time())
    with _lock:
        _entries[cache_key(request_dict)] = entry


def get_cache_stats() -> dict:
    with _lock:
        hits, misses = _stats["hits"], _stats["misses"]
        size = len(_entries)
        expired = _stats["expired"]
    lookups = hits + misses
    return {
        "size": size,
        "hits": hits,
        "misses": misses,
        "expired": expired,
        "hit_rate": round(hits / lookups * 100, 1) if lookups else 0.0,
    }


def clear_cache() -> None:
    with _lock:
        _entries.clear()
        for name in _stats:
            _stats[name] = 0
