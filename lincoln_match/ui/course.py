"""Course card, navigation, and overview rendering."""

from __future__ import annotations

import html
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from lincoln_match.config import UNIVERSITY_LABEL
from lincoln_match.models import MatchedCourse, MatchSession


def render_navigation(session: MatchSession) -> None:
    """Previous/next buttons plus one dot per match."""

    if not session.has_multiple:
        return

    prev_col, dots_col, next_col = st.columns([1, 4, 1])
    with prev_col:
        if st.button("◀", key="course-prev", disabled=session.is_first, help="Previous course"):
            session.previous()
            st.rerun()
    with next_col:
        if st.button("▶", key="course-next", disabled=session.is_last, help="Next course"):
            session.next()
            st.rerun()
    with dots_col:
        dot_cols = st.columns(len(session.courses))
        for idx, dot_col in enumerate(dot_cols):
            with dot_col:
                label = "●" if idx == session.current_index else "○"
                if st.button(label, key=f"course-dot-{idx}", help=f"Go to course {idx + 1}"):
                    session.jump(idx)
                    st.rerun()

    st.caption(f"Course {session.current_index + 1} of {len(session.courses)}")


def render_course_card(course: MatchedCourse) -> None:
    sections: List[str] = [
        f"<span class='badge'>{html.escape(UNIVERSITY_LABEL)}</span>",
        f"<h2>{html.escape(course.name)}</h2>",
        "<div class='section-label'>About this course</div>",
        f"<p>{html.escape(course.description)}</p>",
    ]
    if course.entry_grades:
        sections.append("<div class='section-label'>Entry requirements</div>")
        sections.append(f"<p>{html.escape(course.entry_grades)} UCAS points</p>")
    if course.interests:
        chips = "".join(f"<span class='interest'>{html.escape(item)}</span>" for item in course.interests)
        sections.append("<div class='section-label'>Key topics</div>")
        sections.append(f"<div>{chips}</div>")

    st.markdown(
        "<div class='course-card'>" + "".join(sections) + "</div>",
        unsafe_allow_html=True,
    )

    if course.link:
        apply_col, prospectus_col = st.columns(2)
        with apply_col:
            st.link_button("View Full Course Details & Apply", course.link, type="primary", use_container_width=True)
        with prospectus_col:
            st.link_button("Course Prospectus", course.link, use_container_width=True)


def build_matches_frame(session: MatchSession) -> pd.DataFrame:
    """Tabulate every match for the overview expander."""

    rows: List[Dict[str, Any]] = []
    for idx, course in enumerate(session.courses, start=1):
        rows.append(
            {
                "#": idx,
                "Course": course.name,
                "Entry (UCAS)": course.entry_grades or "—",
                "Key topics": ", ".join(course.interests),
                "Current": "✓" if idx - 1 == session.current_index else "",
            }
        )
    return pd.DataFrame(rows, columns=["#", "Course", "Entry (UCAS)", "Key topics", "Current"])


def render_matches_overview(session: MatchSession) -> None:
    if not session.has_multiple:
        return
    with st.expander(f"All {len(session.courses)} matches"):
        st.dataframe(build_matches_frame(session), hide_index=True, use_container_width=True)
