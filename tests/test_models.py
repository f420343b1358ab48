from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lincoln_match.models import (
    EmailConsentRecord,
    MatchedCourse,
    MatchSession,
    format_timestamp,
)


def _session(count: int) -> MatchSession:
    return MatchSession(courses=tuple(MatchedCourse(name=f"Course {idx}") for idx in range(count)))


def test_next_twice_then_stops_at_last_index() -> None:
    session = _session(3)
    assert session.current_index == 0

    session.next()
    session.next()
    assert session.current_index == 2

    session.next()
    assert session.current_index == 2
    assert session.current.name == "Course 2"


def test_previous_is_noop_at_first_index() -> None:
    session = _session(3)
    session.previous()
    assert session.current_index == 0


def test_jump_ignores_out_of_range_indexes() -> None:
    session = _session(3)
    session.jump(1)
    assert session.current_index == 1
    session.jump(3)
    session.jump(-1)
    assert session.current_index == 1


def test_index_stays_valid_for_mixed_navigation() -> None:
    session = _session(4)
    for op in ["next", "next", "jump:9", "previous", "next", "next", "next", "jump:0", "previous"]:
        if op.startswith("jump:"):
            session.jump(int(op.split(":")[1]))
        else:
            getattr(session, op)()
        assert 0 <= session.current_index < len(session.courses)
    assert session.current_index == 0


def test_single_course_session_cannot_move() -> None:
    session = _session(1)
    session.next()
    session.previous()
    assert session.current_index == 0
    assert not session.has_multiple


def test_empty_session_is_rejected() -> None:
    with pytest.raises(ValueError):
        MatchSession(courses=())


def test_course_requires_name() -> None:
    with pytest.raises(ValueError):
        MatchedCourse(name="   ")


def test_course_id_slugifies_whitespace() -> None:
    course = MatchedCourse(name="Computer  Science and\tAI")
    assert course.course_id == "computer-science-and-ai"


def test_course_dict_uses_camel_case_and_skips_missing_fields() -> None:
    course = MatchedCourse(
        name="Psychology",
        description="Minds",
        entry_grades="120",
        interests=["Research"],
    )
    payload = course.to_dict()
    assert payload == {
        "name": "Psychology",
        "description": "Minds",
        "entryGrades": "120",
        "interests": ["Research"],
    }
    assert MatchedCourse.from_dict(payload) == course


def test_course_from_dict_rejects_string_interests() -> None:
    with pytest.raises(ValueError):
        MatchedCourse.from_dict({"name": "Law", "interests": "Debate"})


def test_consent_record_timestamp_format() -> None:
    record = EmailConsentRecord(
        email="a@b.c",
        consent=True,
        matched_course_names=("Law",),
        captured_at=datetime(2026, 10, 19, 12, 30, 5, 123456, tzinfo=timezone.utc),
    )
    payload = record.to_dict()
    assert payload["timestamp"] == "2026-10-19T12:30:05.123Z"
    assert payload["matchedCourses"] == ["Law"]
    assert EmailConsentRecord.from_dict(payload).email == "a@b.c"


def test_naive_timestamp_treated_as_utc() -> None:
    assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000Z"
