"""Share panel UI elements."""

from __future__ import annotations

import json

import streamlit as st
import streamlit.components.v1 as components

from lincoln_match.config import UNIVERSITY_LABEL
from lincoln_match.controllers import dispatch_share, generate_story_card
from lincoln_match.models import MatchedCourse
from lincoln_match.sharing import ShareOutcome, SharePlatform, build_deep_link, build_share_intent

_PLATFORM_LABELS = {
    SharePlatform.WHATSAPP: "💬 WhatsApp",
    SharePlatform.FACEBOOK: "📘 Facebook",
    SharePlatform.TWITTER: "🐦 Twitter",
}


def copy_to_clipboard(text: str) -> None:
    """Write ``text`` to the visitor's clipboard from the browser side."""

    components.html(
        f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>",
        height=0,
    )


def _release_story_card() -> None:
    st.session_state["story_card_png"] = None
    st.session_state["story_card_filename"] = None
    st.session_state["story_card_course"] = None


def render_share_panel(course: MatchedCourse) -> None:
    """Render share-now, social links, and the story-card download."""

    st.markdown(
        """
        <div class='share-panel'>
            <h3>Share Your Match! 🎉</h3>
            <p>Let your friends know you found your perfect course at Lincoln.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    intent = build_share_intent(course)

    if st.button("Share Now", type="primary", key="share-now"):
        outcome = dispatch_share(course=course, clipboard=copy_to_clipboard)
        if outcome is ShareOutcome.COMPLETED:
            st.toast("Thanks for sharing! 🎉")
        elif outcome is ShareOutcome.FALLBACK_COPIED:
            st.toast("Link copied to clipboard! 📋")

    st.caption("Or share to")
    cols = st.columns(len(_PLATFORM_LABELS) + 1)
    for col, (platform, label) in zip(cols, _PLATFORM_LABELS.items()):
        with col:
            st.link_button(label, build_deep_link(platform, intent), use_container_width=True)

    with cols[-1]:
        creating = bool(st.session_state.get("story_card_in_progress"))
        if st.button(
            "Creating…" if creating else "📸 Instagram",
            key="story-card",
            disabled=creating,
            use_container_width=True,
        ):
            with st.spinner("Rendering your story card…"):
                result = generate_story_card(course=course, university_label=UNIVERSITY_LABEL)
            if result.error:
                st.error(f"{result.error}. Please try again.")
            elif result.png:
                st.session_state["story_card_png"] = result.png
                st.session_state["story_card_filename"] = result.filename
                st.session_state["story_card_course"] = course.name

    png = st.session_state.get("story_card_png")
    if png and st.session_state.get("story_card_course") == course.name:
        preview_col, action_col = st.columns([1, 2])
        with preview_col:
            st.image(png, caption="Story card preview", use_container_width=True)
        with action_col:
            st.success("Story card ready! Upload it to your Instagram Story 📸")
            st.download_button(
                "Download story card",
                data=png,
                file_name=st.session_state.get("story_card_filename") or "lincoln-match.png",
                mime="image/png",
                on_click=_release_story_card,
            )

    st.info("✨ Sharing helps other students discover Lincoln!")
    st.divider()
