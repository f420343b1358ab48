from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from lincoln_match.email_gate import (
    EmailGate,
    EmailValidationError,
    ValidationErrorKind,
    validate_email,
)
from lincoln_match.models import MatchedCourse
from lincoln_match.storage import InMemoryBackend, PersistenceStore, StorageKey

FIXED_NOW = datetime(2026, 10, 19, 9, 15, tzinfo=timezone.utc)
COURSES = [MatchedCourse(name="Law"), MatchedCourse(name="Psychology"), MatchedCourse(name="Law")]


def _gate() -> tuple[EmailGate, InMemoryBackend]:
    backend = InMemoryBackend()
    return EmailGate(PersistenceStore(backend), clock=lambda: FIXED_NOW), backend


def test_minimal_address_is_accepted() -> None:
    validate_email("a@b.c")


@pytest.mark.parametrize(
    ("email", "kind"),
    [
        ("", ValidationErrorKind.EMPTY),
        ("abc", ValidationErrorKind.MALFORMED),
        ("a@b", ValidationErrorKind.MALFORMED),
        ("a@@b.c", ValidationErrorKind.MALFORMED),
        ("a b@c.d", ValidationErrorKind.MALFORMED),
        (" a@b.c", ValidationErrorKind.MALFORMED),
    ],
)
def test_invalid_addresses(email: str, kind: ValidationErrorKind) -> None:
    with pytest.raises(EmailValidationError) as excinfo:
        validate_email(email)
    assert excinfo.value.kind is kind


def test_lightweight_pattern_accepts_consecutive_dots() -> None:
    validate_email("first..last@example..com")


def test_submit_persists_record_and_marks_captured() -> None:
    gate, backend = _gate()
    assert not gate.has_captured()

    record = gate.submit("ada@example.com", COURSES)

    assert gate.has_captured()
    assert record.captured_at == FIXED_NOW
    assert record.matched_course_names == ("Law", "Psychology")
    assert backend.get_item("userEmail") == "ada@example.com"
    assert json.loads(backend.get_item("emailConsent")) == {
        "email": "ada@example.com",
        "consent": True,
        "matchedCourses": ["Law", "Psychology"],
        "timestamp": "2026-10-19T09:15:00.000Z",
    }


def test_failed_submit_leaves_gate_closed() -> None:
    gate, _ = _gate()
    with pytest.raises(EmailValidationError):
        gate.submit("nope", COURSES)
    assert not gate.has_captured()


def test_consent_required_for_modal_capture() -> None:
    gate, _ = _gate()
    with pytest.raises(EmailValidationError) as excinfo:
        gate.submit("ada@example.com", COURSES, consent=False)
    assert excinfo.value.kind is ValidationErrorKind.CONSENT_REQUIRED
    assert not gate.has_captured()


def test_second_submit_overwrites_record() -> None:
    gate, _ = _gate()
    gate.submit("ada@example.com", COURSES)
    gate.submit("grace@example.com", [MatchedCourse(name="History")])

    record = gate.load_record()
    assert record is not None
    assert record.email == "grace@example.com"
    assert record.matched_course_names == ("History",)


def test_bare_email_marker_counts_as_captured() -> None:
    store = PersistenceStore(InMemoryBackend())
    store.save_text(StorageKey.USER_EMAIL, "ada@example.com")
    gate = EmailGate(store)
    assert gate.has_captured()
    assert gate.load_record() is None


def test_unreadable_consent_record_is_ignored() -> None:
    store = PersistenceStore(InMemoryBackend({"emailConsent": json.dumps({"consent": True})}))
    assert EmailGate(store).load_record() is None
