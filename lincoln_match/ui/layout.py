"""Top-level layout helpers (header, global styles)."""

from __future__ import annotations

import streamlit as st

from lincoln_match.config import BRAND_GOLD, BRAND_PINK, BRAND_PINK_DARK, BRAND_PURPLE


def render_header(match_count: int) -> None:
    """Render the celebration heading above the course card."""

    header_container = st.container()
    with header_container:
        if match_count == 1:
            subtitle = "Here's your perfect match"
        else:
            subtitle = f"You have <strong>{match_count} matches</strong> to explore"
        st.markdown(
            f"""
            <div class='match-header'>
                <div class='title'>You Matched With This Course! 🎓</div>
                <div class='subtitle'>{subtitle}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )


def inject_global_styles() -> None:
    """Push shared CSS overrides used across Streamlit widgets."""

    st.markdown(
        f"""
        <style>
.match-header .title {{
        font-size: 2.2rem;
        font-weight: 800;
        color: {BRAND_PURPLE};
}}
.match-header .subtitle {{
        font-size: 1.05rem;
        color: #475569;
}}

/* Primary CTA */
div[data-testid="stButton"] button[kind="primary"] {{
        background: linear-gradient(135deg, {BRAND_GOLD}, #ffd700);
        color: {BRAND_PURPLE};
        font-size: 1.05rem;
        font-weight: 700;
        padding: 0.9rem 2.4rem;
        border-radius: 18px;
        border: none;
        box-shadow: 0 15px 32px rgba(205, 31, 128, 0.28);
        width: 100%;
    }}
    div[data-testid="stButton"] button[kind="primary"]:disabled {{
        background: #94a3b8;
        box-shadow: none;
        cursor: not-allowed;
    }}
    .course-card {{
        background: linear-gradient(135deg, {BRAND_PINK}, {BRAND_PINK_DARK} 55%, {BRAND_PURPLE});
        color: #ffffff;
        border-radius: 24px;
        padding: 2rem 2.2rem;
        margin: 1rem 0 1.4rem 0;
        box-shadow: 0 24px 48px rgba(26, 10, 46, 0.35);
    }}
    .course-card .badge {{
        display: inline-block;
        background: rgba(253, 219, 53, 0.2);
        color: {BRAND_GOLD};
        border: 1px solid rgba(253, 219, 53, 0.35);
        border-radius: 999px;
        padding: 0.25rem 0.9rem;
        font-size: 0.8rem;
        font-weight: 700;
    }}
    .course-card h2 {{
        color: #ffffff;
        margin: 0.9rem 0 0.6rem 0;
    }}
    .course-card .section-label {{
        font-size: 0.8rem;
        letter-spacing: 0.1em;
        text-transform: uppercase;
        opacity: 0.75;
        margin-top: 1rem;
    }}
    .course-card .interest {{
        display: inline-block;
        background: rgba(255, 255, 255, 0.15);
        border-radius: 999px;
        padding: 0.2rem 0.75rem;
        margin: 0.25rem 0.35rem 0 0;
        font-size: 0.85rem;
    }}
    .share-panel h3 {{
        margin-bottom: 0.2rem;
    }}
    .share-panel p {{
        color: #64748b;
    }}
    .email-capture {{
        background: rgba(253, 219, 53, 0.12);
        border: 1px solid rgba(253, 219, 53, 0.4);
        border-radius: 16px;
        padding: 1.1rem 1.3rem;
        margin-bottom: 0.8rem;
    }}
        </style>
        """,
        unsafe_allow_html=True,
    )
