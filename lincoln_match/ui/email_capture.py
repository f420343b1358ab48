"""Email capture surfaces (inline panel and modal dialog)."""

from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

from lincoln_match.config import UNIVERSITY_LABEL
from lincoln_match.email_gate import EmailGate, EmailValidationError
from lincoln_match.models import MatchedCourse

_BENEFITS = ("Course details", "Open days", "Entry requirements", "Application tips")
_SUCCESS = "Perfect! We'll send you course details soon! 📧"


def _matches_heading(count: int) -> str:
    noun = "Match" if count == 1 else "Matches"
    return f"You Found {count} Perfect {noun}! 🎓"


def render_inline_capture(gate: EmailGate, matched_courses: Sequence[MatchedCourse]) -> None:
    """Inline capture card; hidden for good once an email is on record."""

    if gate.has_captured() or st.session_state.get("email_submitted"):
        return

    st.markdown(
        "<div class='email-capture'><strong>Get Your Match Details</strong><br>"
        "We'll email you course information, entry requirements, open days, and application tips"
        "</div>",
        unsafe_allow_html=True,
    )
    with st.form("inline-email-capture", clear_on_submit=False):
        email = st.text_input("Email", placeholder="your.email@example.com", label_visibility="collapsed")
        submitted = st.form_submit_button("Send Me Course Info", type="primary")
    st.caption("✓ Unsubscribe anytime • We respect your privacy")

    if submitted:
        try:
            gate.submit(email, matched_courses, consent=True)
        except EmailValidationError as err:
            st.error(str(err))
        else:
            st.session_state["email_submitted"] = True
            st.toast(_SUCCESS)
            st.rerun()


@st.dialog("Email me course information")
def email_capture_dialog(gate: EmailGate, matched_courses: Sequence[MatchedCourse]) -> None:
    """Modal capture with explicit consent, opened from the course actions."""

    st.markdown(f"### {_matches_heading(len(matched_courses))}")
    st.caption("Get detailed course information sent directly to your inbox")

    st.markdown("**Your Matched Courses:**")
    for course in matched_courses[:3]:
        st.markdown(f"- {html.escape(course.name)}")
    if len(matched_courses) > 3:
        st.caption(f"+{len(matched_courses) - 3} more")

    st.markdown(" · ".join(_BENEFITS))

    email = st.text_input("Your Email Address", placeholder="your.email@example.com", key="modal-email")
    consent = st.checkbox(
        f"I agree to receive course information from {UNIVERSITY_LABEL}. You can unsubscribe anytime.",
        key="modal-consent",
    )

    send_col, later_col = st.columns(2)
    with send_col:
        if st.button("Send Me Course Info", type="primary", key="modal-send"):
            try:
                gate.submit(email, matched_courses, consent=consent)
            except EmailValidationError as err:
                st.error(str(err))
            else:
                st.session_state["email_submitted"] = True
                st.toast(_SUCCESS)
                st.rerun()
    with later_col:
        if st.button("Maybe Later", key="modal-later"):
            st.toast("No problem! You can always find course details on our website")
            st.rerun()
