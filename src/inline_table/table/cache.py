"""Overflow cache for payloads too large to travel inline.

Keys are SHA-256 digests of the stored value, so a key always maps to the
same value and concurrent writers racing on one key store identical data.
``set`` is therefore put-if-absent: the first write wins and later writes
are no-ops.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from inline_table.config import CACHE_FILE

logger = logging.getLogger(__name__)


class OverflowCache(Protocol):
    """Key/value capability consumed by the payload codec and query evaluator."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryOverflowCache:
    """Process-local overflow cache."""

    def __init__(self):
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._entries.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._entries)


class JsonFileOverflowCache:
    """Overflow cache persisted as a JSON object on disk.

    The file is loaded lazily on first access and rewritten after every new
    key, so payloads survive a restart of the process that serves queries.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries: dict[str, str] | None = None
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if self._entries is not None:
            return self._entries
        if self.path.exists():
            with open(self.path, "r", encoding="utf-8") as fopen:
                self._entries = json.load(fopen)
            logger.info("Loaded overflow cache with %d entries from %s", len(self._entries), self.path)
        else:
            self._entries = {}
            logger.info("No overflow cache found, will create %s", self.path)
        return self._entries

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as fopen:
            json.dump(self._entries, fopen)
        tmp_path.replace(self.path)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            entries = self._load()
            if key in entries:
                return
            entries[key] = value
            self._save()

    def __len__(self) -> int:
        with self._lock:
            return len(self._load())


def build_cache(cache_file: Path | None = CACHE_FILE) -> OverflowCache:
    """Return a file-backed cache when *cache_file* is set, else an in-memory one."""
    if cache_file is not None:
        return JsonFileOverflowCache(cache_file)
    return InMemoryOverflowCache()
