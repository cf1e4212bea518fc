"""Tests for the key-value store backends."""
from __future__ import annotations

import json
import threading

import pytest

from job_tracker.store import FileStore, MemoryStore, open_store, read_json, write_json


def test_memory_store_basic() -> None:
    s = MemoryStore({"k": "v"})
    assert s.get("k") == "v"
    assert "k" in s
    s.delete("k")
    assert s.get("k") is None
    assert "k" not in s


def test_file_store_persists_between_instances(tmp_path) -> None:
    path = tmp_path / "nested" / "store.json"
    FileStore(path).set("k", "v")
    assert FileStore(path).get("k") == "v"
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}


def test_file_store_last_write_wins(tmp_path) -> None:
    path = tmp_path / "store.json"
    one, two = FileStore(path), FileStore(path)
    one.set("k", "first")
    two.set("k", "second")
    assert one.get("k") == "second"


def test_concurrent_writers_keep_untouched_keys(tmp_path) -> None:
    path = tmp_path / "store.json"
    FileStore(path).set("prefs", "keep me")

    def writer(key: str) -> None:
        s = FileStore(path)
        for i in range(200):
            s.set(key, str(i))

    threads = [threading.Thread(target=writer, args=(k,)) for k in ("saved", "status")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"prefs": "keep me", "saved": "199", "status": "199"}


def test_write_leaves_no_temp_files(tmp_path) -> None:
    s = FileStore(tmp_path / "store.json")
    s.set("a", "1")
    s.set("a", "2")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json", "store.json.lock"]


def test_file_store_delete(tmp_path) -> None:
    s = FileStore(tmp_path / "store.json")
    s.set("a", "1")
    s.set("b", "2")
    s.delete("a")
    s.delete("missing")
    assert s.get("a") is None
    assert s.get("b") == "2"


@pytest.mark.parametrize("content", ["", "{broken", "[1, 2]"])
def test_unreadable_file_is_empty(tmp_path, content) -> None:
    path = tmp_path / "store.json"
    path.write_text(content, encoding="utf-8")
    s = FileStore(path)
    assert s.get("k") is None
    s.set("k", "v")
    assert s.get("k") == "v"


def test_read_json_handles_absent_malformed_and_wrong_type(store) -> None:
    assert read_json(store, "k", dict) is None
    store.set("k", "{oops")
    assert read_json(store, "k", dict) is None
    write_json(store, "k", [1, 2])
    assert read_json(store, "k", dict) is None
    assert read_json(store, "k", list) == [1, 2]


def test_open_store(tmp_path) -> None:
    assert isinstance(open_store({"store": "memory"}), MemoryStore)
    fs = open_store({"store": "file", "store_path": str(tmp_path / "s.json")})
    assert isinstance(fs, FileStore)
    with pytest.raises(ValueError):
        open_store({"store": "redis"})
