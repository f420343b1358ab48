#!/usr/bin/env python3
"""Load a matched-course export (JSON list) into the local match store."""

import json
import sys
from pathlib import Path

from lincoln_match.config import MATCH_STORE_PATH
from lincoln_match.models import MatchedCourse
from lincoln_match.storage import (
    JsonFileBackend,
    PersistenceStore,
    StorageKey,
    save_matched_courses,
)

if len(sys.argv) not in (2, 3):
    print("Usage: seed_matches.py <matched_courses.json> [student name]")
    sys.exit(1)

path = Path(sys.argv[1])
if not path.exists():
    print(f"File does not exist: {path}")
    sys.exit(1)

data = json.loads(path.read_text())
if not isinstance(data, list) or not data:
    print("Expected a non-empty JSON list of courses.")
    sys.exit(1)

try:
    courses = [MatchedCourse.from_dict(item) for item in data]
except ValueError as err:
    print(f"Invalid course entry: {err}")
    sys.exit(1)

store = PersistenceStore(JsonFileBackend(MATCH_STORE_PATH))
save_matched_courses(store, courses)
if len(sys.argv) == 3:
    store.save_text(StorageKey.STUDENT_NAME, sys.argv[2])

for course in courses:
    print(f"{course.name} ({course.course_id})")
print(f"Saved {len(courses)} match(es) to {MATCH_STORE_PATH}")
