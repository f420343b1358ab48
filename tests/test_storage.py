from __future__ import annotations

import json
from pathlib import Path

from lincoln_match.models import MatchedCourse
from lincoln_match.storage import (
    InMemoryBackend,
    JsonFileBackend,
    PersistenceStore,
    StorageKey,
    clear_match_session,
    load_match_session,
    load_student_name,
    save_matched_courses,
)

COURSES = [
    {
        "name": "Computer Science",
        "description": "Code",
        "entryGrades": "112",
        "interests": ["AI", "Web"],
        "link": "https://example.ac.uk/cs",
    },
    {"name": "History", "description": "Past"},
]


def test_save_then_load_roundtrip_in_memory() -> None:
    store = PersistenceStore(InMemoryBackend())
    store.save(StorageKey.MATCHED_COURSES, COURSES)
    assert store.load(StorageKey.MATCHED_COURSES) == COURSES


def test_save_then_load_roundtrip_on_disk(tmp_path: Path) -> None:
    path = tmp_path / "profile" / "store.json"
    store = PersistenceStore(JsonFileBackend(path))
    store.save("matchedCourses", COURSES)

    reopened = PersistenceStore(JsonFileBackend(path))
    assert reopened.load("matchedCourses") == COURSES
    assert list(tmp_path.joinpath("profile").iterdir()) == [path]


def test_load_missing_key_is_none() -> None:
    store = PersistenceStore(InMemoryBackend())
    assert store.load(StorageKey.EMAIL_CONSENT) is None


def test_malformed_value_loads_as_absent() -> None:
    store = PersistenceStore(InMemoryBackend({"matchedCourses": "{not json"}))
    assert store.load(StorageKey.MATCHED_COURSES) is None
    assert load_match_session(store) is None


def test_corrupt_store_file_is_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[[[", encoding="utf-8")
    store = PersistenceStore(JsonFileBackend(path))
    assert store.load(StorageKey.MATCHED_COURSES) is None

    store.save_text(StorageKey.USER_EMAIL, "a@b.c")
    assert json.loads(path.read_text(encoding="utf-8")) == {"userEmail": "a@b.c"}


def test_clear_removes_entry() -> None:
    store = PersistenceStore(InMemoryBackend())
    store.save_text(StorageKey.USER_EMAIL, "a@b.c")
    assert store.has(StorageKey.USER_EMAIL)
    store.clear(StorageKey.USER_EMAIL)
    assert not store.has(StorageKey.USER_EMAIL)


def test_match_session_helpers() -> None:
    store = PersistenceStore(InMemoryBackend())
    courses = [MatchedCourse.from_dict(item) for item in COURSES]
    save_matched_courses(store, courses)

    session = load_match_session(store)
    assert session is not None
    assert session.courses == tuple(courses)
    assert session.current_index == 0

    clear_match_session(store)
    assert load_match_session(store) is None


def test_empty_or_invalid_match_list_is_absent() -> None:
    store = PersistenceStore(InMemoryBackend())
    store.save(StorageKey.MATCHED_COURSES, [])
    assert load_match_session(store) is None

    store.save(StorageKey.MATCHED_COURSES, {"name": "Not a list"})
    assert load_match_session(store) is None

    store.save(StorageKey.MATCHED_COURSES, [{"name": ""}])
    assert load_match_session(store) is None


def test_student_name_defaults() -> None:
    store = PersistenceStore(InMemoryBackend())
    assert load_student_name(store) == "Student"
    store.save_text(StorageKey.STUDENT_NAME, "Ada")
    assert load_student_name(store) == "Ada"
