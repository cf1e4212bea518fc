"""Score postings against saved preferences with a fixed additive rule set."""
from __future__ import annotations

import re
from typing import Iterable

from job_tracker.log import get_logger
from job_tracker.models import Posting, Preferences

log = get_logger(__name__)

TITLE_KEYWORD_POINTS = 25
DESCRIPTION_KEYWORD_POINTS = 15
LOCATION_POINTS = 15
MODE_POINTS = 10
EXPERIENCE_POINTS = 10
SKILL_POINTS = 15
FRESH_POINTS = 5
SOURCE_POINTS = 5

FRESH_MAX_DAYS = 2
PREFERRED_SOURCE = "LinkedIn"
MAX_SCORE = 100

_FIRST_INT = re.compile(r"(\d+)")


def _normalize(s: str) -> str:
    return (s or "").lower().strip()


def parse_csv(text: str) -> list[str]:
    """Split comma-separated input into trimmed, lower-cased, non-empty terms."""
    if not isinstance(text, str):
        return []
    return [t for t in (_normalize(part) for part in text.split(",")) if t]


def score_posting(posting: Posting, prefs: Preferences) -> int:
    """Integer match score in [0, 100]; each rule counts at most once."""
    keywords = parse_csv(prefs.role_keywords)
    user_skills = parse_csv(prefs.skills)
    title = posting.title.lower()
    desc = posting.description.lower()

    score = 0

    if keywords and any(kw in title for kw in keywords):
        score += TITLE_KEYWORD_POINTS
    if keywords and any(kw in desc for kw in keywords):
        score += DESCRIPTION_KEYWORD_POINTS

    if prefs.preferred_locations and posting.location in prefs.preferred_locations:
        score += LOCATION_POINTS
    if prefs.preferred_mode and posting.mode in prefs.preferred_mode:
        score += MODE_POINTS
    if prefs.experience_level and posting.experience == prefs.experience_level:
        score += EXPERIENCE_POINTS

    if user_skills and any(s.lower() in user_skills for s in posting.skills):
        score += SKILL_POINTS

    if posting.posted_days_ago <= FRESH_MAX_DAYS:
        score += FRESH_POINTS
    if posting.source == PREFERRED_SOURCE:
        score += SOURCE_POINTS

    return min(score, MAX_SCORE)


def score_catalog(catalog: Iterable[Posting], prefs: Preferences | None) -> dict[str, int]:
    """Score keyed by posting id; everything scores 0 until preferences are saved."""
    if prefs is None:
        return {p.id: 0 for p in catalog}
    scores = {p.id: score_posting(p, prefs) for p in catalog}
    log.debug("Scored %d postings (max %d)", len(scores), max(scores.values(), default=0))
    return scores


def extract_salary_num(salary_range: str) -> int:
    """First integer in the salary text, 0 when there is none."""
    m = _FIRST_INT.search(salary_range or "")
    return int(m.group(1)) if m else 0
