"""Key/value stores for encoded meal images.

Keys and values are strings. Entries never expire and are never evicted;
each store has an explicit capacity (total characters of keys + values) and
a write that would exceed it raises StoreFullError, leaving the store as it
was. Writing an existing key replaces it (last writer wins).
"""
from __future__ import annotations
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from nutrigen.utilities.errors import ImageStoreError, StoreFullError

logger = logging.getLogger(__name__)


class ImageStore:
    """Base class; subclasses provide _load() and _persist()."""

    def __init__(self, max_bytes: Optional[int] = None):
        self.max_bytes = max_bytes
        self._lock = Lock()
        self._entries: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        return {}

    def _persist(self, entries: Dict[str, str]) -> None:
        pass

    def _data(self) -> Dict[str, str]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    @staticmethod
    def _size(entries: Dict[str, str]) -> int:
        return sum(len(k) + len(v) for k, v in entries.items())

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data().get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            current = self._data()
            candidate = dict(current)
            candidate[key] = value
            if self.max_bytes is not None and self._size(candidate) > self.max_bytes:
                raise StoreFullError(
                    f"Storing {key!r} needs {self._size(candidate)} of {self.max_bytes} available"
                )
            self._persist(candidate)
            self._entries = candidate

    def used_bytes(self) -> int:
        with self._lock:
            return self._size(self._data())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data())

    def __bool__(self) -> bool:
        return True

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryImageStore(ImageStore):
    """Process-local store, mostly for tests."""


class JsonImageStore(ImageStore):
    """Store persisted as a single JSON object, rewritten atomically on each put."""

    def __init__(self, path: Path, max_bytes: Optional[int] = None):
        super().__init__(max_bytes=max_bytes)
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            logger.error("Unreadable image cache %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Image cache %s is not a JSON object, ignoring it", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _persist(self, entries: Dict[str, str]) -> None:
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".image_cache_", suffix=".json"
            )
        except OSError as e:
            raise ImageStoreError(f"Cannot write image cache {self.path}: {e}") from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(entries, tmp, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        except OSError as e:
            raise ImageStoreError(f"Cannot write image cache {self.path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


__all__ = ['ImageStore', 'MemoryImageStore', 'JsonImageStore']
