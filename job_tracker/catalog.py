"""Load the static posting catalog from YAML."""
from __future__ import annotations

from pathlib import Path

import yaml

from job_tracker.log import get_logger
from job_tracker.models import Posting

log = get_logger(__name__)


def load_catalog(path: Path | str) -> tuple[Posting, ...]:
    """Postings in file order. A missing file or bad record is a hard error."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    items = data.get("jobs") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"{path.name}: expected a 'jobs' list")

    postings: list[Posting] = []
    seen: set[str] = set()
    for i, item in enumerate(items):
        try:
            posting = Posting.from_dict(item)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"{path.name}: job #{i} is invalid ({exc!r})") from exc
        if posting.id in seen:
            raise ValueError(f"{path.name}: duplicate job id {posting.id!r}")
        seen.add(posting.id)
        postings.append(posting)

    log.info("Loaded %d postings from %s", len(postings), path.name)
    return tuple(postings)
