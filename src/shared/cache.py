"""
In-memory cache for AI-derived results.

Entries are keyed by a stable hash of the prompt inputs and expire after a
fixed retention window. The cache is unbounded in size; expired entries are
only removed when looked up or when `purge_expired()` runs, so a process
that stops using a cache keeps its entries until the next use.
"""

import hashlib
import json
import math
import time
from typing import Any, Callable, Optional, Sequence

from cachetools import TTLCache
from loguru import logger


def stable_hash(text: str) -> str:
    """SHA-256 hex digest of text, stable across processes."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def analysis_cache_key(skills: Sequence[str], job_description: str) -> str:
    """Key for a relevance analysis of one job against a skill list."""
    payload = json.dumps(list(skills), ensure_ascii=False) + "\n" + job_description
    return f"analysis_{stable_hash(payload)}"


def extraction_cache_key(kind: str, text: str) -> str:
    """Key for an extraction of `kind` (e.g. skills, role) from resume text."""
    return f"{kind}_{stable_hash(text)}"


class ResponseCache:
    """Named TTL cache of provider results."""

    def __init__(
        self,
        name: str,
        ttl_seconds: float = 24 * 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=math.inf, ttl=ttl_seconds, timer=clock)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        """Return a cached value, or None if missing or expired."""
        self._entries.expire()
        return self._entries.get(key)

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def purge_expired(self) -> int:
        """Delete expired entries. Returns how many were removed."""
        removed = len(self._entries.expire())
        if removed:
            logger.debug(f"Purged {removed} expired entries from {self.name} cache")
        return removed
