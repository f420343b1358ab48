"""Controller helpers coordinating UI, storage, and services."""

from .share_flow import StoryCardResult, dispatch_share, generate_story_card

__all__ = [
    "StoryCardResult",
    "dispatch_share",
    "generate_story_card",
]
