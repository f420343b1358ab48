import html

import streamlit as st

from lincoln_match.config import LOG_LEVEL, OPEN_DAYS_URL, PAGE_ICON
from lincoln_match.email_gate import EmailGate
from lincoln_match.logging_setup import configure_logging
from lincoln_match.state import (
    bootstrap_session_state,
    get_match_session,
    get_store,
    reset_match_session,
)
from lincoln_match.storage import clear_match_session, load_student_name
from lincoln_match.ui.course import render_course_card, render_matches_overview, render_navigation
from lincoln_match.ui.email_capture import email_capture_dialog, render_inline_capture
from lincoln_match.ui.layout import inject_global_styles, render_header
from lincoln_match.ui.share import render_share_panel


st.set_page_config(
    page_title="Lincoln Match",
    page_icon=PAGE_ICON,
    layout="centered",
)

configure_logging(LOG_LEVEL)
bootstrap_session_state()
inject_global_styles()

store = get_store()
session = get_match_session(store)

if session is None:
    st.markdown("## No course matches yet")
    st.info("Swipe through courses in the matching flow first. Your matches will show up here.")
    st.stop()

render_header(len(session.courses))
render_navigation(session)

course = session.current
render_course_card(course)

gate = EmailGate(store)
email_label = "📧 Update My Email" if gate.has_captured() else "📧 Email Me Course Information"
if st.button(email_label, key="open-email-modal", use_container_width=True):
    email_capture_dialog(gate, session.courses)

render_inline_capture(gate, session.courses)
render_matches_overview(session)

share_panel = st.container()
with share_panel:
    render_share_panel(course)

student_name = load_student_name(store)
st.markdown(f"### What's Next, {html.escape(student_name)}?")
next_cols = st.columns(2)
with next_cols[0]:
    st.link_button("📅 Book an Open Day", OPEN_DAYS_URL, use_container_width=True)
with next_cols[1]:
    if st.button("🔄 Start Over", key="start-over", use_container_width=True):
        clear_match_session(store)
        reset_match_session()
        st.rerun()
