"""Core domain models for course matches, consent, and share intents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class MatchedCourse:
    """A course the user expressed interest in during the matching flow."""

    name: str
    description: str = ""
    entry_grades: Optional[str] = None
    interests: Tuple[str, ...] = ()
    link: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Matched course requires a non-empty name.")
        object.__setattr__(self, "interests", tuple(self.interests))

    @property
    def course_id(self) -> str:
        return _WHITESPACE_RUN.sub("-", self.name.lower())

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "description": self.description}
        if self.entry_grades is not None:
            payload["entryGrades"] = self.entry_grades
        if self.interests:
            payload["interests"] = list(self.interests)
        if self.link is not None:
            payload["link"] = self.link
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MatchedCourse":
        """Build a course from its stored form; raises ``ValueError`` on bad shapes."""

        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected a course mapping, got {type(payload).__name__}.")
        name = payload.get("name")
        if not isinstance(name, str):
            raise ValueError("Course name must be a string.")
        interests = payload.get("interests") or ()
        if isinstance(interests, str) or not isinstance(interests, Iterable):
            raise ValueError("Course interests must be a list of strings.")
        entry_grades = payload.get("entryGrades")
        return cls(
            name=name,
            description=str(payload.get("description") or ""),
            entry_grades=str(entry_grades) if entry_grades is not None else None,
            interests=tuple(str(item) for item in interests),
            link=payload.get("link") or None,
        )


@dataclass
class MatchSession:
    """The user's matched courses plus the one currently on screen."""

    courses: Tuple[MatchedCourse, ...]
    current_index: int = 0

    def __post_init__(self) -> None:
        self.courses = tuple(self.courses)
        if not self.courses:
            raise ValueError("A match session needs at least one course.")
        if not 0 <= self.current_index < len(self.courses):
            raise ValueError(f"current_index {self.current_index} out of range.")

    @property
    def current(self) -> MatchedCourse:
        return self.courses[self.current_index]

    @property
    def has_multiple(self) -> bool:
        return len(self.courses) > 1

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.courses) - 1

    def next(self) -> int:
        if not self.is_last:
            self.current_index += 1
        return self.current_index

    def previous(self) -> int:
        if not self.is_first:
            self.current_index -= 1
        return self.current_index

    def jump(self, index: int) -> int:
        """Show the course at ``index``; out-of-range requests are ignored."""

        if 0 <= index < len(self.courses):
            self.current_index = index
        return self.current_index


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def unique_course_names(courses: Sequence[MatchedCourse]) -> Tuple[str, ...]:
    """Return course names in match order with duplicates removed."""

    return tuple(dict.fromkeys(course.name for course in courses))


@dataclass(frozen=True)
class EmailConsentRecord:
    """Captured contact intent waiting for a mailing integration."""

    email: str
    consent: bool
    matched_course_names: Tuple[str, ...] = ()
    captured_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "consent": self.consent,
            "matchedCourses": list(self.matched_course_names),
            "timestamp": format_timestamp(self.captured_at),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EmailConsentRecord":
        if not isinstance(payload, Mapping):
            raise ValueError("Consent record must be a mapping.")
        email = payload.get("email")
        timestamp = payload.get("timestamp")
        if not isinstance(email, str) or not isinstance(timestamp, str):
            raise ValueError("Consent record is missing email or timestamp.")
        names: List[str] = [str(name) for name in payload.get("matchedCourses") or []]
        return cls(
            email=email,
            consent=bool(payload.get("consent")),
            matched_course_names=tuple(dict.fromkeys(names)),
            captured_at=parse_timestamp(timestamp),
        )


@dataclass(frozen=True)
class ShareIntent:
    """Everything needed to broadcast one course match."""

    course_name: str
    course_id: str
    target_url: str
    message_text: str

    @property
    def clipboard_text(self) -> str:
        return f"{self.message_text}\n{self.target_url}"
