"""Filter and sort the posting catalog for the dashboard view."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from job_tracker.log import get_logger
from job_tracker.models import Posting, Preferences, ScoredPosting
from job_tracker.scorer import extract_salary_num

log = get_logger(__name__)

ALL = "all"

SORT_LATEST = "latest"
SORT_OLDEST = "oldest"
SORT_MATCH_SCORE = "matchScore"
SORT_SALARY = "salary"

_SORT_KEYS: dict[str, Callable[[ScoredPosting], int]] = {
    SORT_LATEST: lambda r: r.posting.posted_days_ago,
    SORT_OLDEST: lambda r: -r.posting.posted_days_ago,
    SORT_MATCH_SCORE: lambda r: -r.score,
    SORT_SALARY: lambda r: -extract_salary_num(r.posting.salary_range),
}


@dataclass(frozen=True)
class FilterSpec:
    keyword: str = ""
    location: str = ALL
    mode: str = ALL
    experience: str = ALL
    source: str = ALL
    status: str = ALL
    sort: str = SORT_LATEST
    threshold_on: bool = False


def _matches(
    posting: Posting,
    score: int,
    spec: FilterSpec,
    status_of: Callable[[str], str],
    min_score: int | None,
) -> bool:
    if min_score is not None and score < min_score:
        return False
    if spec.keyword:
        kw = spec.keyword.lower()
        if kw not in posting.title.lower() and kw not in posting.company.lower():
            return False
    if spec.location != ALL and posting.location != spec.location:
        return False
    if spec.mode != ALL and posting.mode != spec.mode:
        return False
    if spec.experience != ALL and posting.experience != spec.experience:
        return False
    if spec.source != ALL and posting.source != spec.source:
        return False
    if spec.status != ALL and status_of(posting.id) != spec.status:
        return False
    return True


def apply_filters(
    catalog: Iterable[Posting],
    scores: Mapping[str, int],
    status_of: Callable[[str], str],
    spec: FilterSpec,
    prefs: Preferences | None = None,
) -> list[ScoredPosting]:
    """AND of every active criterion, then a stable sort on ``spec.sort``.

    The score threshold only applies when ``spec.threshold_on`` is set and
    preferences exist (*prefs* is not None).
    """
    min_score = prefs.min_match_score if spec.threshold_on and prefs is not None else None

    result = [
        ScoredPosting(p, scores.get(p.id, 0))
        for p in catalog
        if _matches(p, scores.get(p.id, 0), spec, status_of, min_score)
    ]

    sort_key = _SORT_KEYS.get(spec.sort)
    if sort_key is not None:
        result.sort(key=sort_key)
    else:
        log.debug("Unknown sort key %r — keeping catalog order", spec.sort)
    return result
