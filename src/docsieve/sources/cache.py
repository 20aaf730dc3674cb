"""Text blob caches consumed by the search session.

The session only needs get/set/remove of one named blob. Expiry is enforced
by the cache on read: an expired entry is dropped and reported as a miss.
"""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

CACHE_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@runtime_checkable
class TextCache(Protocol):
    """Minimal cache contract: one text value per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _check_key(key: str) -> str:
    if not CACHE_KEY_RE.match(key):
        raise ValueError(f"Invalid cache key {key!r}: use letters, digits, '.', '_' or '-'")
    return key


def _expired(stored_at: float, ttl_seconds: float | None, now: float) -> bool:
    return ttl_seconds is not None and now - stored_at >= ttl_seconds


class MemoryCache:
    """In-process cache; lives as long as the object."""

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if _expired(stored_at, self.ttl_seconds, self._clock()):
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: str) -> None:
        self._entries[key] = (value, self._clock())

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)


class FileCache:
    """Directory-backed cache: ``<key>.txt`` holds the blob, ``<key>.json`` its metadata."""

    def __init__(
        self,
        directory: Path,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.directory = directory
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _paths(self, key: str) -> tuple[Path, Path]:
        _check_key(key)
        return self.directory / f"{key}.txt", self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        blob_path, meta_path = self._paths(key)
        if not blob_path.exists() or not meta_path.exists():
            return None
        try:
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Corrupt cache metadata at {meta_path}: {e}") from e
        stored_at = meta.get("stored_at") if isinstance(meta, dict) else None
        if not isinstance(stored_at, (int, float)):
            raise RuntimeError(f"Corrupt cache metadata at {meta_path}: missing stored_at")
        if _expired(stored_at, self.ttl_seconds, self._clock()):
            logger.info("Cache entry %r expired, removing", key)
            self.remove(key)
            return None
        return blob_path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        blob_path, meta_path = self._paths(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        blob_path.write_text(value, encoding="utf-8")
        meta_path.write_text(
            json.dumps({"stored_at": self._clock(), "chars": len(value)}),
            encoding="utf-8",
        )
        logger.debug("Cached %d chars under %r", len(value), key)

    def remove(self, key: str) -> None:
        for path in self._paths(key):
            path.unlink(missing_ok=True)
