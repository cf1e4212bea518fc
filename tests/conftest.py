"""Shared fixtures: in-memory store, posting factory, preference factory."""
from __future__ import annotations

import os

os.environ.setdefault("TRACKER_LOG_FILE", "0")

from dataclasses import replace  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402

from job_tracker.models import Posting, Preferences  # noqa: E402
from job_tracker.store import MemoryStore  # noqa: E402

BASE_POSTING = Posting(
    id="p-1",
    title="Frontend Engineer",
    company="Razorpay",
    location="Bangalore",
    mode="Remote",
    experience="1-3",
    salary_range="12-18 LPA",
    skills=("React",),
    description="Build dashboards for merchants.",
    source="LinkedIn",
    posted_days_ago=1,
    apply_url="https://example.com/p-1",
)


def make_posting(**overrides) -> Posting:
    return replace(BASE_POSTING, **overrides)


def make_prefs(**overrides) -> Preferences:
    values = dict(
        role_keywords="frontend",
        preferred_locations=["Bangalore"],
        preferred_mode=["Remote"],
        experience_level="1-3",
        skills="react",
        min_match_score=40,
    )
    values.update(overrides)
    return Preferences(**values)


class FakeClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> tuple[Posting, ...]:
    return (
        make_posting(id="a", title="Frontend Engineer", company="Razorpay", posted_days_ago=3,
                     salary_range="12-18 LPA", source="Naukri"),
        make_posting(id="b", title="Backend Developer", company="Swiggy", location="Hyderabad",
                     mode="Hybrid", experience="3-5", skills=("Java",), posted_days_ago=0,
                     salary_range="20-28 LPA"),
        make_posting(id="c", title="UI Engineer", company="Frontend Labs", location="Chennai",
                     mode="Onsite", experience="Fresher", skills=("CSS",), posted_days_ago=7,
                     salary_range="Not disclosed", source="Indeed"),
        make_posting(id="d", title="Senior Frontend Engineer", company="Groww", posted_days_ago=1,
                     salary_range="25-32 LPA"),
    )
