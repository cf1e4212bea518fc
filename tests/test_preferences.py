"""Tests for saved preferences and the never-saved state."""
from __future__ import annotations

import json

from job_tracker.models import Preferences
from job_tracker.preferences import PREFERENCES_KEY, PreferenceStore
from job_tracker.store import FileStore
from tests.conftest import make_prefs


def test_never_saved(store) -> None:
    prefs = PreferenceStore(store)
    assert prefs.has_preferences() is False
    assert prefs.load() is None
    assert prefs.load_or_default() == Preferences()


def test_saving_defaults_counts_as_set(store) -> None:
    prefs = PreferenceStore(store)
    prefs.save(Preferences())
    assert prefs.has_preferences() is True
    assert prefs.load() == Preferences()


def test_record_shape(store) -> None:
    PreferenceStore(store).save(make_prefs())
    assert json.loads(store.get(PREFERENCES_KEY)) == {
        "roleKeywords": "frontend",
        "preferredLocations": ["Bangalore"],
        "preferredMode": ["Remote"],
        "experienceLevel": "1-3",
        "skills": "react",
        "minMatchScore": 40,
    }


def test_save_overwrites_whole_record(store) -> None:
    prefs = PreferenceStore(store)
    prefs.save(make_prefs())
    prefs.save(Preferences(role_keywords="data"))
    assert prefs.load() == Preferences(role_keywords="data")


def test_survives_reload(tmp_path) -> None:
    path = tmp_path / "store.json"
    PreferenceStore(FileStore(path)).save(make_prefs(min_match_score=70))
    loaded = PreferenceStore(FileStore(path)).load()
    assert loaded == make_prefs(min_match_score=70)


def test_malformed_record_loads_as_unset(store) -> None:
    store.set(PREFERENCES_KEY, "not json at all")
    assert PreferenceStore(store).load() is None
    assert PreferenceStore(store).has_preferences() is False

    store.set(PREFERENCES_KEY, json.dumps(["a", "list"]))
    assert PreferenceStore(store).load() is None

    store.set(PREFERENCES_KEY, json.dumps({"minMatchScore": "high"}))
    assert PreferenceStore(store).load() is None


def test_partial_record_fills_defaults(store) -> None:
    store.set(PREFERENCES_KEY, json.dumps({"roleKeywords": "backend"}))
    assert PreferenceStore(store).load() == Preferences(role_keywords="backend")
