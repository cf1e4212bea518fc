"""Release checklist and artifact links, with a derived ship status."""
from __future__ import annotations

from urllib.parse import urlparse

from job_tracker.log import get_logger
from job_tracker.store import KeyValueStore, read_json, write_json

log = get_logger(__name__)

CHECKLIST_KEY = "jobTrackerTestChecklist"
LINKS_KEY = "jobTrackerProofLinks"

CHECKLIST_ITEMS: dict[str, str] = {
    "prefs_persist": "Preferences persist after refresh",
    "match_score": "Match score calculates correctly",
    "threshold_toggle": '"Show only matches" toggle works',
    "save_persist": "Save job persists after refresh",
    "apply_tab": "Apply opens in new tab",
    "status_persist": "Status update persists after refresh",
    "status_filter": "Status filter works correctly",
    "digest_top10": "Digest generates top 10 by score",
    "digest_persist": "Digest persists for the day",
    "no_console_errors": "No console errors on main pages",
}
LINK_FIELDS: tuple[str, ...] = ("lovable", "github", "deployed")

NOT_STARTED = "Not Started"
IN_PROGRESS = "In Progress"
SHIPPED = "Shipped"


def is_valid_url(text: str) -> bool:
    """True for a well-formed http(s) URL with a host.

    Like a browser, a missing or partial "//" after http: or https: is
    tolerated, so "http:example.com" counts as valid.
    """
    if not isinstance(text, str) or not text.strip():
        return False
    text = text.strip()
    try:
        parsed = urlparse(text)
        if parsed.scheme in ("http", "https") and not parsed.netloc:
            rest = text.split(":", 1)[1].lstrip("/\\")
            parsed = urlparse(f"{parsed.scheme}://{rest}")
        host = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(host)


class ProofLedger:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def checklist(self) -> dict[str, bool]:
        data = read_json(self.store, CHECKLIST_KEY, dict) or {}
        return {item: bool(data.get(item, False)) for item in CHECKLIST_ITEMS}

    def toggle(self, item_id: str) -> bool:
        if item_id not in CHECKLIST_ITEMS:
            raise ValueError(f"Unknown checklist item: {item_id!r}")
        checked = self.checklist()
        checked[item_id] = not checked[item_id]
        write_json(self.store, CHECKLIST_KEY, checked)
        return checked[item_id]

    def reset_checklist(self) -> None:
        write_json(self.store, CHECKLIST_KEY, {})
        log.info("Checklist reset")

    def passed_count(self) -> int:
        return sum(self.checklist().values())

    def links(self) -> dict[str, str]:
        data = read_json(self.store, LINKS_KEY, dict) or {}
        return {f: str(data.get(f) or "") for f in LINK_FIELDS}

    def update_link(self, field: str, value: str) -> None:
        if field not in LINK_FIELDS:
            raise ValueError(f"Unknown link field: {field!r}")
        links = self.links()
        links[field] = value
        write_json(self.store, LINKS_KEY, links)

    def ship_status(self) -> str:
        passed = self.passed_count()
        links = self.links()
        if passed == len(CHECKLIST_ITEMS) and all(is_valid_url(v) for v in links.values()):
            return SHIPPED
        if passed > 0 or any(links.values()):
            return IN_PROGRESS
        return NOT_STARTED
