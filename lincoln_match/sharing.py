"""Share dispatch: native share sheet, clipboard fallback, and social deep links."""

from __future__ import annotations

import logging
import webbrowser
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Sequence
from urllib.parse import quote

from lincoln_match.config import (
    SHARE_HASHTAGS,
    SHARE_PUBLIC_BASE,
    SHARE_TEXT_TEMPLATE,
    SHARE_TITLE,
)
from lincoln_match.models import MatchedCourse, ShareIntent

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ShareOutcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FALLBACK_COPIED = "fallback_copied"


class SharePlatform(str, Enum):
    WHATSAPP = "whatsapp"
    FACEBOOK = "facebook"
    TWITTER = "twitter"


class ShareError(RuntimeError):
    """Raised by share targets when a share could not be completed."""


class ShareCancelled(ShareError):
    """The user dismissed the share sheet."""


class ShareUnavailable(ShareError):
    """No native share capability exists in this environment."""


NativeShareFn = Callable[[Dict[str, str]], None]
ClipboardWriteFn = Callable[[str], None]


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_share_intent(course: MatchedCourse, base_url: str = SHARE_PUBLIC_BASE) -> ShareIntent:
    course_id = course.course_id or "match"
    return ShareIntent(
        course_name=course.name,
        course_id=course_id,
        target_url=f"{base_url.rstrip('/')}/course/{course_id}",
        message_text=SHARE_TEXT_TEMPLATE.format(course_name=course.name),
    )


def native_share_payload(intent: ShareIntent) -> Dict[str, str]:
    return {"title": SHARE_TITLE, "text": intent.message_text, "url": intent.target_url}


class ShareStrategy(Protocol):
    """One step of the share chain; ``None`` hands over to the next step."""

    def attempt(self, intent: ShareIntent) -> Optional[ShareOutcome]:
        ...


class NativeShareStrategy:
    def __init__(self, share_fn: Optional[NativeShareFn]) -> None:
        self._share_fn = share_fn

    def attempt(self, intent: ShareIntent) -> Optional[ShareOutcome]:
        if self._share_fn is None:
            return None
        try:
            self._share_fn(native_share_payload(intent))
        except ShareCancelled:
            return ShareOutcome.CANCELLED
        except Exception as err:
            logger.info("Native share failed, falling back: %s", err)
            return None
        return ShareOutcome.COMPLETED


class ClipboardStrategy:
    def __init__(self, write_fn: ClipboardWriteFn) -> None:
        self._write_fn = write_fn

    def attempt(self, intent: ShareIntent) -> Optional[ShareOutcome]:
        self._write_fn(intent.clipboard_text)
        return ShareOutcome.FALLBACK_COPIED


def default_strategies(
    native_share: Optional[NativeShareFn],
    clipboard: ClipboardWriteFn,
) -> List[ShareStrategy]:
    return [NativeShareStrategy(native_share), ClipboardStrategy(clipboard)]


def share(intent: ShareIntent, strategies: Sequence[ShareStrategy]) -> ShareOutcome:
    """Run ``strategies`` in order and return the first outcome produced."""

    for strategy in strategies:
        outcome = strategy.attempt(intent)
        if outcome is not None:
            return outcome
    raise ShareError("No share strategy could handle the request.")


def build_deep_link(platform: SharePlatform | str, intent: ShareIntent) -> str:
    """Return the pre-filled composer URL for ``platform``."""

    try:
        platform = SharePlatform(platform)
    except ValueError as err:
        raise ValueError(f"Unsupported share platform: {platform!r}") from err

    text = encode_uri_component(intent.message_text)
    url = encode_uri_component(intent.target_url)
    if platform is SharePlatform.WHATSAPP:
        return "https://wa.me/?text=" + encode_uri_component(f"{intent.message_text} {intent.target_url}")
    if platform is SharePlatform.FACEBOOK:
        return f"https://www.facebook.com/sharer/sharer.php?u={url}&quote={text}"
    hashtags = encode_uri_component(",".join(SHARE_HASHTAGS))
    return f"https://twitter.com/intent/tweet?text={text}&url={url}&hashtags={hashtags}"


def open_deep_link(
    platform: SharePlatform | str,
    intent: ShareIntent,
    opener: Callable[[str], object] = webbrowser.open_new,
) -> str:
    """Build the deep link and open it in a new window via ``opener``.

    For hosts that run on the user's own machine, such as a desktop shell.
    The Streamlit page renders ``build_deep_link`` URLs as ``st.link_button``
    instead, since ``webbrowser`` would open on the server.
    """

    url = build_deep_link(platform, intent)
    opener(url)
    return url
