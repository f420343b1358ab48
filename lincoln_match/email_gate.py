"""Email capture gate for unlocking course-information requests."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Sequence

from lincoln_match.models import EmailConsentRecord, MatchedCourse, unique_course_names
from lincoln_match.storage import PersistenceStore, StorageKey

logger = logging.getLogger(__name__)

# Single "@" and a dot somewhere after it. Intentionally lighter than RFC 5322.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class ValidationErrorKind(str, Enum):
    EMPTY = "empty"
    MALFORMED = "malformed"
    CONSENT_REQUIRED = "consent_required"


_MESSAGES = {
    ValidationErrorKind.EMPTY: "Please enter your email address",
    ValidationErrorKind.MALFORMED: "Please enter a valid email address",
    ValidationErrorKind.CONSENT_REQUIRED: "Please agree to receive course information",
}


class EmailValidationError(ValueError):
    """Raised when submitted contact details cannot be accepted."""

    def __init__(self, kind: ValidationErrorKind) -> None:
        super().__init__(_MESSAGES[kind])
        self.kind = kind


def validate_email(email: str) -> None:
    if not email:
        raise EmailValidationError(ValidationErrorKind.EMPTY)
    if not EMAIL_PATTERN.fullmatch(email):
        raise EmailValidationError(ValidationErrorKind.MALFORMED)


class EmailGate:
    """Single source of truth for whether contact consent was already captured."""

    def __init__(
        self,
        store: PersistenceStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def has_captured(self) -> bool:
        return self._store.has(StorageKey.USER_EMAIL) or self._store.has(StorageKey.EMAIL_CONSENT)

    def load_record(self) -> Optional[EmailConsentRecord]:
        payload = self._store.load(StorageKey.EMAIL_CONSENT)
        if payload is None:
            return None
        try:
            return EmailConsentRecord.from_dict(payload)
        except ValueError as err:
            logger.warning("Ignoring unreadable consent record: %s", err)
            return None

    def submit(
        self,
        email: str,
        matched_courses: Sequence[MatchedCourse],
        *,
        consent: bool = True,
    ) -> EmailConsentRecord:
        """Validate and persist the contact details, replacing any earlier record."""

        validate_email(email)
        if not consent:
            raise EmailValidationError(ValidationErrorKind.CONSENT_REQUIRED)

        record = EmailConsentRecord(
            email=email,
            consent=consent,
            matched_course_names=unique_course_names(matched_courses),
            captured_at=self._clock(),
        )
        self._store.save_text(StorageKey.USER_EMAIL, email)
        self._store.save(StorageKey.EMAIL_CONSENT, record.to_dict())
        logger.info("Captured contact consent for %d matched course(s)", len(record.matched_course_names))
        return record
