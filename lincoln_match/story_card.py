"""Story-card image generation for sharing a course match.

Layout happens against the small ``RasterCanvas`` protocol so the word-wrap
logic can be exercised with a fake canvas; ``PillowCanvas`` is the concrete
backend used by the app.
"""

from __future__ import annotations

import io
import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from lincoln_match.config import (
    CARD_BOX,
    CARD_BOX_FILL,
    CARD_BOX_RADIUS,
    CARD_CENTER_X,
    CARD_CTA,
    CARD_CTA_Y,
    CARD_EMBLEM,
    CARD_EMBLEM_Y,
    CARD_FONTS,
    CARD_GRADIENT,
    CARD_HASHTAG,
    CARD_HASHTAG_Y,
    CARD_HEIGHT,
    CARD_NAME_LINE_HEIGHT,
    CARD_NAME_START_Y,
    CARD_TEXT_MAX_WIDTH,
    CARD_TITLE,
    CARD_TITLE_Y,
    CARD_UNIVERSITY_Y,
    CARD_WIDTH,
)
from lincoln_match.models import MatchedCourse

logger = logging.getLogger(__name__)

Color = str | Tuple[int, ...]
GradientStops = Sequence[Tuple[int, str]]


class RenderError(RuntimeError):
    """Raised when a story card cannot be produced."""


class SurfaceUnavailableError(RenderError):
    """The drawing surface could not be acquired."""


class DrawError(RenderError):
    """Painting onto an acquired surface failed."""


class EncodeError(RenderError):
    """The canvas was drawn but could not be exported as PNG."""


@dataclass(frozen=True)
class FontSpec:
    bold: bool
    size: int


CARD_FONT_SPECS: Dict[str, FontSpec] = {
    role: FontSpec(bold=bold, size=size) for role, (bold, size) in CARD_FONTS.items()
}


class RasterCanvas(Protocol):
    """Drawing operations the story-card layout needs."""

    def fill_background(self, stops: GradientStops) -> None:
        ...

    def draw_rect(self, box: Tuple[int, int, int, int], fill: Color, radius: int = 0) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, fill: Color = "white") -> None:
        ...

    def measure_text(self, text: str, font: FontSpec) -> float:
        ...

    def encode_png(self) -> bytes:
        ...


CanvasFactory = Callable[[int, int], RasterCanvas]


# ── Font discovery ──────────────────────────────────────────────────────────

_BOLD_CANDIDATES = (
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
)
_REGULAR_CANDIDATES = (
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
)


def _find_font_path(bold: bool) -> Optional[str]:
    override = os.getenv("CARD_FONT_BOLD" if bold else "CARD_FONT_REGULAR")
    if override and os.path.exists(override):
        return override
    for candidate in _BOLD_CANDIDATES if bold else _REGULAR_CANDIDATES:
        if os.path.exists(candidate):
            return candidate
    return None


def _load_font(spec: FontSpec) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    path = _find_font_path(spec.bold)
    if path:
        try:
            return ImageFont.truetype(path, spec.size)
        except OSError as err:
            logger.debug("Could not load font %s: %s", path, err)
    return ImageFont.load_default(size=spec.size)


# ── Pillow backend ──────────────────────────────────────────────────────────


def _interpolate(start: Tuple[int, ...], end: Tuple[int, ...], ratio: float) -> Tuple[int, ...]:
    return tuple(int(round(a + (b - a) * ratio)) for a, b in zip(start, end))


class PillowCanvas:
    """``RasterCanvas`` implementation drawing onto an RGBA Pillow image."""

    def __init__(self, width: int, height: int) -> None:
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 255))
        self._draw = ImageDraw.Draw(self._image)
        self._fonts: Dict[FontSpec, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    def _font(self, spec: FontSpec):
        font = self._fonts.get(spec)
        if font is None:
            font = _load_font(spec)
            self._fonts[spec] = font
        return font

    def fill_background(self, stops: GradientStops) -> None:
        """Paint a vertical gradient through ``(offset_px, colour)`` stops."""

        width, height = self._image.size
        points = [(offset, ImageColor.getrgb(color)[:3]) for offset, color in sorted(stops)]
        for y in range(height):
            lower = points[0]
            upper = points[-1]
            for idx in range(len(points) - 1):
                if points[idx][0] <= y <= points[idx + 1][0]:
                    lower, upper = points[idx], points[idx + 1]
                    break
            span = upper[0] - lower[0]
            ratio = (y - lower[0]) / span if span else 0.0
            ratio = max(0.0, min(1.0, ratio))
            self._draw.line([(0, y), (width, y)], fill=_interpolate(lower[1], upper[1], ratio) + (255,))

    def draw_rect(self, box: Tuple[int, int, int, int], fill: Color, radius: int = 0) -> None:
        x, y, w, h = box
        overlay = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        ImageDraw.Draw(overlay).rounded_rectangle((x, y, x + w, y + h), radius=radius, fill=fill)
        self._image.alpha_composite(overlay)
        self._draw = ImageDraw.Draw(self._image)

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, fill: Color = "white") -> None:
        # "ms": horizontally centred on x, baseline at y.
        self._draw.text((x, y), text, font=self._font(font), fill=fill, anchor="ms")

    def measure_text(self, text: str, font: FontSpec) -> float:
        return float(self._draw.textlength(text, font=self._font(font)))

    def encode_png(self) -> bytes:
        buf = io.BytesIO()
        try:
            self._image.convert("RGB").save(buf, format="PNG", optimize=True)
            return buf.getvalue()
        finally:
            buf.close()


# ── Layout ──────────────────────────────────────────────────────────────────


def wrap_course_name(
    name: str,
    measure: Callable[[str], float],
    max_width: float = CARD_TEXT_MAX_WIDTH,
) -> List[str]:
    """Greedily fill lines with whitespace-separated tokens.

    A token joins the current line while the joined text measures at most
    ``max_width``; otherwise the line is flushed and the token opens the next
    one. Words are never split, so a lone token wider than the limit keeps a
    line to itself.
    """

    lines: List[str] = []
    line = ""
    for token in name.split():
        candidate = f"{line} {token}" if line else token
        if line and measure(candidate) > max_width:
            lines.append(line)
            line = token
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


def layout_course_name(
    name: str,
    measure: Callable[[str], float],
    *,
    max_width: float = CARD_TEXT_MAX_WIDTH,
    start_y: int = CARD_NAME_START_Y,
    line_height: int = CARD_NAME_LINE_HEIGHT,
) -> List[Tuple[str, int]]:
    """Return ``(line, baseline_y)`` pairs for the course-name block."""

    return [
        (line, start_y + idx * line_height)
        for idx, line in enumerate(wrap_course_name(name, measure, max_width))
    ]


def render_story_card(
    course: MatchedCourse,
    university_label: str,
    canvas_factory: Optional[CanvasFactory] = None,
) -> bytes:
    """Draw the 1080×1920 story card for ``course`` and return PNG bytes."""

    factory = canvas_factory or PillowCanvas
    try:
        canvas = factory(CARD_WIDTH, CARD_HEIGHT)
    except (OSError, ValueError, MemoryError) as err:
        raise SurfaceUnavailableError(f"Could not create drawing surface: {err}") from err

    try:
        _draw_card(canvas, course, university_label)
    except (OSError, ValueError, MemoryError) as err:
        raise DrawError(str(err) or type(err).__name__) from err

    try:
        data = canvas.encode_png()
    except (OSError, ValueError) as err:
        raise EncodeError(f"Could not export story card: {err}") from err
    if not data:
        raise EncodeError("Story card export produced no data.")
    return data


def _draw_card(canvas: RasterCanvas, course: MatchedCourse, university_label: str) -> None:
    fonts = CARD_FONT_SPECS
    canvas.fill_background(CARD_GRADIENT)
    canvas.draw_text(CARD_EMBLEM, CARD_CENTER_X, CARD_EMBLEM_Y, fonts["emblem"])
    canvas.draw_text(CARD_TITLE, CARD_CENTER_X, CARD_TITLE_Y, fonts["title"])
    canvas.draw_rect(CARD_BOX, CARD_BOX_FILL, radius=CARD_BOX_RADIUS)

    course_font = fonts["course"]
    for line, y in layout_course_name(course.name, lambda text: canvas.measure_text(text, course_font)):
        canvas.draw_text(line, CARD_CENTER_X, y, course_font)

    canvas.draw_text(f"at {university_label}", CARD_CENTER_X, CARD_UNIVERSITY_Y, fonts["university"])
    canvas.draw_text(CARD_HASHTAG, CARD_CENTER_X, CARD_HASHTAG_Y, fonts["hashtag"])
    canvas.draw_text(CARD_CTA, CARD_CENTER_X, CARD_CTA_Y, fonts["cta"])


def story_card_filename(now: Optional[datetime] = None) -> str:
    millis = int(now.timestamp() * 1000) if now is not None else time.time_ns() // 1_000_000
    return f"lincoln-match-{millis}.png"
