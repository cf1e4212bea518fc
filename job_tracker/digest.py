"""Daily digest of top matches, computed once per calendar day.

The day key is always passed in. ``generate`` returns the stored snapshot
for that day when one exists, so a day's digest never changes after it is
first written, even if preferences change later the same day.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable

from job_tracker.log import get_logger
from job_tracker.models import DigestEntry, DigestSnapshot, Posting, Preferences, ScoredPosting
from job_tracker.scorer import score_posting
from job_tracker.store import KeyValueStore, read_json, write_json

log = get_logger(__name__)

DIGEST_KEY_PREFIX = "jobTrackerDigest_"
DIGEST_SIZE = 10


def today_key(now: datetime | None = None) -> str:
    """YYYY-MM-DD of the local calendar date."""
    return (now or datetime.now()).strftime("%Y-%m-%d")


def digest_key(day_key: str) -> str:
    return f"{DIGEST_KEY_PREFIX}{day_key}"


def top_matches(catalog: Iterable[Posting], prefs: Preferences, size: int = DIGEST_SIZE) -> list[ScoredPosting]:
    """Best *size* postings: score desc, then freshest, then catalog order."""
    scored = [ScoredPosting(p, score_posting(p, prefs)) for p in catalog]
    scored.sort(key=lambda s: (-s.score, s.posting.posted_days_ago))
    return scored[:size]


def hydrate(snapshot: DigestSnapshot, catalog: Iterable[Posting]) -> list[ScoredPosting]:
    """Resolve stored ids to postings; ids no longer in the catalog are dropped."""
    by_id = {p.id: p for p in catalog}
    return [
        ScoredPosting(by_id[e.job_id], e.match_score)
        for e in snapshot.entries
        if e.job_id in by_id
    ]


class DigestEngine:
    def __init__(self, store: KeyValueStore, size: int = DIGEST_SIZE) -> None:
        self.store = store
        # snapshots never hold more than DIGEST_SIZE entries
        self.size = max(0, min(size, DIGEST_SIZE))

    @staticmethod
    def is_available(prefs: Preferences | None) -> bool:
        """Digests need saved preferences."""
        return prefs is not None

    def load(self, day_key: str) -> DigestSnapshot | None:
        data = read_json(self.store, digest_key(day_key), dict)
        if data is None:
            return None
        try:
            return DigestSnapshot.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Ignoring malformed digest for %s: %s", day_key, exc)
            return None

    def generate(self, day_key: str, catalog: Iterable[Posting], prefs: Preferences) -> DigestSnapshot:
        existing = self.load(day_key)
        if existing is not None:
            log.info("Digest for %s already generated (%d entries) — reusing", day_key, len(existing.entries))
            return existing

        top = top_matches(catalog, prefs, self.size)
        snapshot = DigestSnapshot(
            date=day_key,
            entries=tuple(DigestEntry(s.posting.id, s.score) for s in top),
        )
        write_json(self.store, digest_key(day_key), snapshot.to_dict())
        log.info("Generated digest for %s: %d entries", day_key, len(snapshot.entries))
        return snapshot
