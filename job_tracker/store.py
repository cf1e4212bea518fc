"""Key-value persistence: string keys to JSON-serialized string values.

Every concern (preferences, status ledger, saved jobs, digests, proof)
reads and writes its whole value under one key; the backend is swappable.
"""
from __future__ import annotations

import fcntl
import json
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from job_tracker.log import get_logger

log = get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class FileStore(KeyValueStore):
    """All keys in one JSON object on disk.

    Writers hold an exclusive lock on a sidecar ``.lock`` file for the whole
    read-modify-write, and replace the data file atomically, so readers see
    either the old or the new file, never a partial one.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def _locked(self, exclusive: bool = True) -> Iterator[None]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a", encoding="utf-8") as lf:
            _lock(lf, exclusive=exclusive)
            try:
                yield
            finally:
                _unlock(lf)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            log.warning("Store file %s is unreadable (%s) — treating as empty", self.path.name, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("Store file %s is not a JSON object — treating as empty", self.path.name)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        if not self.path.exists():
            return None
        with self._locked(exclusive=False):
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._locked():
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._locked():
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


def open_store(settings: dict[str, Any]) -> KeyValueStore:
    kind = str(settings.get("store", "file")).lower()
    if kind == "memory":
        log.info("Using in-memory store (nothing persists across restarts)")
        return MemoryStore()
    if kind == "file":
        log.debug("Using file store → %s", settings["store_path"])
        return FileStore(settings["store_path"])
    raise ValueError(f"Unknown store backend: {kind!r}")


def read_json(store: KeyValueStore, key: str, expected: type) -> Any | None:
    """Decode the value under *key*; None when absent or malformed."""
    raw = store.get(key)
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        log.warning("Ignoring malformed value under %r: %s", key, exc)
        return None
    if not isinstance(value, expected):
        log.warning("Ignoring value under %r: expected %s, got %s", key, expected.__name__, type(value).__name__)
        return None
    return value


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value))
