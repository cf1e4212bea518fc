"""Data models for postings, preferences, statuses and digests."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

LOCATIONS: tuple[str, ...] = (
    "Bangalore", "Hyderabad", "Chennai", "Mumbai",
    "Pune", "Noida", "Gurgaon", "Mysore",
)
MODES: tuple[str, ...] = ("Remote", "Hybrid", "Onsite")
EXPERIENCE_LEVELS: tuple[str, ...] = ("Fresher", "0-1", "1-3", "3-5")
SOURCES: tuple[str, ...] = ("LinkedIn", "Naukri", "Indeed")

DEFAULT_MIN_MATCH_SCORE = 40


class JobStatus(str, Enum):
    """Application status a user can attach to a posting.

    Inherits from ``str`` so members compare equal to the stored strings.
    """

    NOT_APPLIED = "Not Applied"
    APPLIED = "Applied"
    REJECTED = "Rejected"
    SELECTED = "Selected"


@dataclass(frozen=True)
class Posting:
    id: str
    title: str
    company: str
    location: str
    mode: str
    experience: str
    salary_range: str
    skills: tuple[str, ...]
    description: str
    source: str
    posted_days_ago: int
    apply_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Posting:
        return cls(
            id=str(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data["location"],
            mode=data["mode"],
            experience=str(data["experience"]),
            salary_range=str(data.get("salaryRange", "")),
            skills=tuple(data.get("skills") or ()),
            description=data.get("description", ""),
            source=data["source"],
            posted_days_ago=int(data["postedDaysAgo"]),
            apply_url=data.get("applyUrl", ""),
        )


@dataclass
class Preferences:
    role_keywords: str = ""
    preferred_locations: list[str] = field(default_factory=list)
    preferred_mode: list[str] = field(default_factory=list)
    experience_level: str = ""
    skills: str = ""
    min_match_score: int = DEFAULT_MIN_MATCH_SCORE

    def to_dict(self) -> dict[str, Any]:
        return {
            "roleKeywords": self.role_keywords,
            "preferredLocations": list(self.preferred_locations),
            "preferredMode": list(self.preferred_mode),
            "experienceLevel": self.experience_level,
            "skills": self.skills,
            "minMatchScore": self.min_match_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Preferences:
        """Build from a stored record; missing fields fall back to defaults."""
        return cls(
            role_keywords=str(data.get("roleKeywords") or ""),
            preferred_locations=list(data.get("preferredLocations") or []),
            preferred_mode=list(data.get("preferredMode") or []),
            experience_level=str(data.get("experienceLevel") or ""),
            skills=str(data.get("skills") or ""),
            min_match_score=int(data.get("minMatchScore", DEFAULT_MIN_MATCH_SCORE)),
        )


@dataclass(frozen=True)
class StatusEntry:
    status: JobStatus
    updated_at: str  # ISO-8601, UTC

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status.value, "updatedAt": self.updated_at}


@dataclass(frozen=True)
class ScoredPosting:
    posting: Posting
    score: int


@dataclass(frozen=True)
class StatusUpdate:
    posting: Posting
    status: JobStatus
    updated_at: str


@dataclass(frozen=True)
class DigestEntry:
    job_id: str
    match_score: int


@dataclass(frozen=True)
class DigestSnapshot:
    date: str
    entries: tuple[DigestEntry, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "entries": [{"jobId": e.job_id, "matchScore": e.match_score} for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DigestSnapshot:
        return cls(
            date=str(data["date"]),
            entries=tuple(
                DigestEntry(job_id=str(e["jobId"]), match_score=int(e["matchScore"]))
                for e in data["entries"]
            ),
        )
