"""Persisted user preferences.

"Never saved" and "saved with default values" are different states: a user
who saved defaults has opted in to matching, one who never saved has not.
``load()`` returns None for the former; callers gate on that, never on
equality with ``Preferences()``.
"""
from __future__ import annotations

from job_tracker.log import get_logger
from job_tracker.models import Preferences
from job_tracker.store import KeyValueStore, read_json, write_json

log = get_logger(__name__)

PREFERENCES_KEY = "jobTrackerPreferences"


class PreferenceStore:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def has_preferences(self) -> bool:
        """True iff a readable record is stored, whatever values it holds."""
        return self.load() is not None

    def load(self) -> Preferences | None:
        data = read_json(self.store, PREFERENCES_KEY, dict)
        if data is None:
            return None
        try:
            return Preferences.from_dict(data)
        except (TypeError, ValueError) as exc:
            log.warning("Ignoring malformed preferences record: %s", exc)
            return None

    def load_or_default(self) -> Preferences:
        """Form values for a settings screen; not an opt-in signal."""
        return self.load() or Preferences()

    def save(self, prefs: Preferences) -> None:
        write_json(self.store, PREFERENCES_KEY, prefs.to_dict())
        log.info(
            "Preferences saved (keywords=%r, locations=%d, modes=%d, min score=%d)",
            prefs.role_keywords, len(prefs.preferred_locations),
            len(prefs.preferred_mode), prefs.min_match_score,
        )
