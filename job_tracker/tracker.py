"""Track application status per posting in the persisted status ledger."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable

from job_tracker.log import get_logger
from job_tracker.models import JobStatus, Posting, StatusEntry, StatusUpdate
from job_tracker.store import KeyValueStore, read_json, write_json

log = get_logger(__name__)

STATUS_KEY = "jobTrackerStatus"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Inverse of format_timestamp; unparseable values sort as oldest."""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return _EPOCH
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class StatusLedger:
    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = _utc_now) -> None:
        self.store = store
        self.clock = clock

    def _load_all(self) -> dict[str, StatusEntry]:
        data = read_json(self.store, STATUS_KEY, dict) or {}
        entries: dict[str, StatusEntry] = {}
        for job_id, raw in data.items():
            try:
                entries[job_id] = StatusEntry(JobStatus(raw["status"]), str(raw["updatedAt"]))
            except (KeyError, TypeError, ValueError):
                log.warning("Skipping malformed status entry for %s", job_id)
        return entries

    def _save_all(self, entries: dict[str, StatusEntry]) -> None:
        write_json(self.store, STATUS_KEY, {jid: e.to_dict() for jid, e in entries.items()})

    def get_status(self, job_id: str) -> JobStatus:
        entry = self._load_all().get(job_id)
        return entry.status if entry else JobStatus.NOT_APPLIED

    def get_entry(self, job_id: str) -> StatusEntry | None:
        return self._load_all().get(job_id)

    def all_entries(self) -> dict[str, StatusEntry]:
        return self._load_all()

    def set_status(self, job_id: str, status: JobStatus | str) -> StatusEntry:
        """Upsert *status* for *job_id*, stamping updatedAt with the clock.

        Any status may follow any other; repeating a status refreshes the
        timestamp.
        """
        status = JobStatus(status)
        entries = self._load_all()
        entry = StatusEntry(status, format_timestamp(self.clock()))
        entries[job_id] = entry
        self._save_all(entries)
        log.debug("Updated %s → %s", job_id, status.value)
        return entry

    def status_lookup(self) -> Callable[[str], JobStatus]:
        """Snapshot of the ledger as a lookup function (one store read)."""
        entries = self._load_all()
        return lambda job_id: entries[job_id].status if job_id in entries else JobStatus.NOT_APPLIED

    def recent_updates(self, catalog: Iterable[Posting], limit: int = 10) -> list[StatusUpdate]:
        """Most recently changed postings, newest first, skipping Not Applied."""
        by_id = {p.id: p for p in catalog}
        updates = [
            StatusUpdate(by_id[jid], e.status, e.updated_at)
            for jid, e in self._load_all().items()
            if e.status is not JobStatus.NOT_APPLIED and jid in by_id
        ]
        updates.sort(key=lambda u: parse_timestamp(u.updated_at), reverse=True)
        return updates[:limit]
