#!/usr/bin/env python3
"""Generate (or reload) the daily digest of top matches."""
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from job_tracker.config import ensure_dirs
from job_tracker.digest import today_key
from job_tracker.log import get_logger
from job_tracker.session import TrackerSession

log = get_logger(__name__)


def _day_key(value: str) -> str:
    try:
        return datetime.strptime(value, "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Daily job digest")
    parser.add_argument("--date", type=_day_key, default=None, help="calendar day (default: today)")
    args = parser.parse_args(argv)

    ensure_dirs()
    session = TrackerSession.open()
    day = args.date or today_key()

    entries = session.generate_digest(day)
    if entries is None:
        log.error("No preferences found. Save your preferences first.")
        return 1

    if not entries:
        log.info("No matching roles for %s. Check again tomorrow.", day)
        return 0

    log.info("Top %d jobs for %s:", len(entries), day)
    for i, e in enumerate(entries, 1):
        p = e.posting
        log.info("  %2d. %s @ %s (%s, %s) match %d%%  %s", i, p.title, p.company, p.location, p.mode, e.score, p.apply_url)

    updates = session.recent_updates()
    if updates:
        log.info("Recent status updates:")
        for u in updates:
            log.info("  %s @ %s: %s (%s)", u.posting.title, u.posting.company, u.status.value, u.updated_at[:10])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
