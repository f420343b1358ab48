"""Durable key/value persistence for the match session and consent record.

The store mirrors browser ``localStorage``: string values keyed by name, one
profile per backend, no expiry. ``PersistenceStore`` layers JSON handling on
top and never lets a read failure escape to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from lincoln_match.config import DEFAULT_STUDENT_NAME
from lincoln_match.models import MatchedCourse, MatchSession

logger = logging.getLogger(__name__)


class StorageKey(str, Enum):
    USER_EMAIL = "userEmail"
    EMAIL_CONSENT = "emailConsent"
    MATCHED_COURSES = "matchedCourses"
    STUDENT_NAME = "studentName"


class KeyValueBackend(Protocol):
    """Raw string storage used by ``PersistenceStore``."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class InMemoryBackend:
    """Dictionary-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend:
    """Keeps every key of one device profile in a single JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as err:
            logger.warning("Ignoring unreadable store file %s: %s", self._path, err)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring store file %s: expected a JSON object", self._path)
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)


def _key(key: StorageKey | str) -> str:
    return key.value if isinstance(key, StorageKey) else key


class PersistenceStore:
    """JSON persistence over a ``KeyValueBackend``."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend

    def save(self, key: StorageKey | str, value: Any) -> None:
        self._backend.set_item(_key(key), json.dumps(value, ensure_ascii=False))

    def load(self, key: StorageKey | str) -> Optional[Any]:
        """Return the decoded value, or ``None`` when it is missing or unreadable."""

        name = _key(key)
        try:
            raw = self._backend.get_item(name)
        except OSError as err:
            logger.warning("Could not read %r from storage: %s", name, err)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as err:
            logger.warning("Discarding malformed value for %r: %s", name, err)
            return None

    def save_text(self, key: StorageKey | str, value: str) -> None:
        self._backend.set_item(_key(key), value)

    def load_text(self, key: StorageKey | str) -> Optional[str]:
        name = _key(key)
        try:
            return self._backend.get_item(name)
        except OSError as err:
            logger.warning("Could not read %r from storage: %s", name, err)
            return None

    def has(self, key: StorageKey | str) -> bool:
        return bool(self.load_text(key))

    def clear(self, key: StorageKey | str) -> None:
        self._backend.remove_item(_key(key))


# Match-session helpers ------------------------------------------------------


def save_matched_courses(store: PersistenceStore, courses: Sequence[MatchedCourse]) -> None:
    payload: List[Dict[str, Any]] = [course.to_dict() for course in courses]
    store.save(StorageKey.MATCHED_COURSES, payload)


def load_match_session(store: PersistenceStore) -> Optional[MatchSession]:
    """Rebuild the session from storage; anything unusable counts as no session."""

    payload = store.load(StorageKey.MATCHED_COURSES)
    if not payload:
        return None
    if not isinstance(payload, list):
        logger.warning("Stored matches are not a list; treating session as absent")
        return None
    try:
        courses = [MatchedCourse.from_dict(item) for item in payload]
    except ValueError as err:
        logger.warning("Stored matches are invalid (%s); treating session as absent", err)
        return None
    return MatchSession(courses=tuple(courses))


def clear_match_session(store: PersistenceStore) -> None:
    store.clear(StorageKey.MATCHED_COURSES)


def load_student_name(store: PersistenceStore) -> str:
    name = store.load_text(StorageKey.STUDENT_NAME)
    return name.strip() if name and name.strip() else DEFAULT_STUDENT_NAME
