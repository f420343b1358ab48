"""Story-card and share flow coordination for Lincoln Match."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from lincoln_match.models import MatchedCourse
from lincoln_match.sharing import (
    ClipboardWriteFn,
    NativeShareFn,
    ShareError,
    ShareOutcome,
    build_share_intent,
    default_strategies,
    share,
)
from lincoln_match.state import in_progress
from lincoln_match.story_card import (
    CanvasFactory,
    EncodeError,
    RenderError,
    render_story_card,
    story_card_filename,
)

logger = logging.getLogger(__name__)


@dataclass
class StoryCardResult:
    """Outcome of attempting to render the story card."""

    png: Optional[bytes]
    filename: Optional[str]
    error: Optional[str] = None
    busy: bool = False


def generate_story_card(
    *,
    course: MatchedCourse,
    university_label: str,
    canvas_factory: Optional[CanvasFactory] = None,
) -> StoryCardResult:
    """Render the story card while holding the in-progress flag."""

    with in_progress("story_card_in_progress") as acquired:
        if not acquired:
            return StoryCardResult(png=None, filename=None, busy=True)
        try:
            png = render_story_card(course, university_label, canvas_factory=canvas_factory)
        except EncodeError as err:
            logger.exception("Story card export failed for %r", course.name)
            return StoryCardResult(png=None, filename=None, error=f"Could not export story card: {err}")
        except RenderError as err:
            logger.exception("Story card drawing failed for %r", course.name)
            return StoryCardResult(png=None, filename=None, error=f"Could not draw story card: {err}")

    return StoryCardResult(png=png, filename=story_card_filename())


def dispatch_share(
    *,
    course: MatchedCourse,
    clipboard: ClipboardWriteFn,
    native_share: Optional[NativeShareFn] = None,
    base_url: Optional[str] = None,
) -> Optional[ShareOutcome]:
    """Share ``course`` through the native sheet, falling back to the clipboard.

    Returns ``None`` when a share for this session is already running.
    """

    intent = build_share_intent(course) if base_url is None else build_share_intent(course, base_url)
    with in_progress("share_in_progress") as acquired:
        if not acquired:
            return None
        try:
            return share(intent, default_strategies(native_share, clipboard))
        except ShareError as err:
            st.error(f"Sharing failed: {err}")
            return None
