"""
One user's tracker session.

Wires store, catalog, preferences, status ledger, saved jobs, digests and
proof together for whatever renders them (the run_digest.py script here).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from job_tracker.catalog import load_catalog
from job_tracker.config import load_settings
from job_tracker.digest import DigestEngine, hydrate, today_key
from job_tracker.log import get_logger
from job_tracker.models import Posting, Preferences, ScoredPosting, StatusUpdate
from job_tracker.pipeline import FilterSpec, apply_filters
from job_tracker.preferences import PreferenceStore
from job_tracker.proof import ProofLedger
from job_tracker.saved import SavedJobs
from job_tracker.scorer import score_catalog
from job_tracker.store import KeyValueStore, open_store
from job_tracker.tracker import StatusLedger

log = get_logger(__name__)


@dataclass
class TrackerSession:
    store: KeyValueStore
    catalog: tuple[Posting, ...]
    recent_updates_limit: int = 10
    digest_size: int = 10

    def __post_init__(self) -> None:
        self.preferences = PreferenceStore(self.store)
        self.statuses = StatusLedger(self.store)
        self.saved = SavedJobs(self.store)
        self.digests = DigestEngine(self.store, size=self.digest_size)
        self.proof = ProofLedger(self.store)

    @classmethod
    def open(cls, settings: dict[str, Any] | None = None) -> TrackerSession:
        settings = settings or load_settings()
        return cls(
            store=open_store(settings),
            catalog=load_catalog(settings["catalog_path"]),
            recent_updates_limit=settings.get("recent_updates_limit", 10),
            digest_size=settings.get("digest_size", 10),
        )

    def active_preferences(self) -> Preferences | None:
        """Saved preferences, or None while matching is not switched on."""
        return self.preferences.load()

    def dashboard(self, spec: FilterSpec | None = None) -> list[ScoredPosting]:
        prefs = self.active_preferences()
        scores = score_catalog(self.catalog, prefs)
        return apply_filters(
            self.catalog, scores, self.statuses.status_lookup(), spec or FilterSpec(), prefs,
        )

    def generate_digest(self, day_key: str | None = None) -> list[ScoredPosting] | None:
        """Today's (or *day_key*'s) digest, or None when preferences are unset."""
        prefs = self.active_preferences()
        if not self.digests.is_available(prefs):
            log.warning("No preferences saved — set them before generating a digest")
            return None
        snapshot = self.digests.generate(day_key or today_key(), self.catalog, prefs)
        return hydrate(snapshot, self.catalog)

    def todays_digest(self, day_key: str | None = None) -> list[ScoredPosting] | None:
        """Stored digest without generating one; None if not generated yet."""
        if self.active_preferences() is None:
            return None
        snapshot = self.digests.load(day_key or today_key())
        return hydrate(snapshot, self.catalog) if snapshot else None

    def recent_updates(self) -> list[StatusUpdate]:
        return self.statuses.recent_updates(self.catalog, self.recent_updates_limit)

    def saved_postings(self) -> list[Posting]:
        return self.saved.saved_postings(self.catalog)
