"""Session-state helpers for Lincoln Match."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import streamlit as st

from lincoln_match.config import MATCH_STORE_PATH
from lincoln_match.models import MatchSession
from lincoln_match.storage import JsonFileBackend, PersistenceStore, load_match_session

SESSION_DEFAULTS = {
    "match_session": None,
    "match_session_loaded": False,
    "email_submitted": False,
    "story_card_in_progress": False,
    "share_in_progress": False,
    "story_card_png": None,
    "story_card_filename": None,
    "story_card_course": None,
}


def bootstrap_session_state() -> None:
    """Ensure frequently used keys exist in ``st.session_state``."""

    for key, value in SESSION_DEFAULTS.items():
        st.session_state.setdefault(key, value)


@st.cache_resource(show_spinner=False)
def get_store() -> PersistenceStore:
    return PersistenceStore(JsonFileBackend(MATCH_STORE_PATH))


def get_match_session(store: PersistenceStore) -> Optional[MatchSession]:
    """Load the match set once per browser session; the index lives only in memory."""

    if not st.session_state.get("match_session_loaded"):
        st.session_state["match_session"] = load_match_session(store)
        st.session_state["match_session_loaded"] = True
    return st.session_state.get("match_session")


def reset_match_session() -> None:
    st.session_state["match_session"] = None
    st.session_state["match_session_loaded"] = False
    for key in ("story_card_png", "story_card_filename", "story_card_course"):
        st.session_state[key] = None


@contextmanager
def in_progress(flag: str) -> Iterator[bool]:
    """Hold ``flag`` for the duration of the block.

    Yields ``False`` when the flag was already held so a second click during a
    running operation does nothing.
    """

    if st.session_state.get(flag):
        yield False
        return
    st.session_state[flag] = True
    try:
        yield True
    finally:
        st.session_state[flag] = False
