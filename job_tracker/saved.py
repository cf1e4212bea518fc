"""Bookmarked postings."""
from __future__ import annotations

from typing import Iterable

from job_tracker.log import get_logger
from job_tracker.models import Posting
from job_tracker.store import KeyValueStore, read_json, write_json

log = get_logger(__name__)

SAVED_KEY = "kodnest_saved_jobs"


class SavedJobs:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def ids(self) -> list[str]:
        data = read_json(self.store, SAVED_KEY, list) or []
        return [str(i) for i in data]

    def is_saved(self, job_id: str) -> bool:
        return job_id in self.ids()

    def toggle(self, job_id: str) -> bool:
        """Flip membership; returns True when the posting is now saved."""
        ids = self.ids()
        if job_id in ids:
            ids = [i for i in ids if i != job_id]
            saved = False
        else:
            ids.append(job_id)
            saved = True
        write_json(self.store, SAVED_KEY, ids)
        log.debug("%s %s", "Saved" if saved else "Unsaved", job_id)
        return saved

    def saved_postings(self, catalog: Iterable[Posting]) -> list[Posting]:
        """Saved postings in catalog order; ids missing from the catalog drop out."""
        ids = set(self.ids())
        return [p for p in catalog if p.id in ids]
