"""Global configuration and constants for the Lincoln Match app."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple

from dotenv import load_dotenv

# Resolve project paths -----------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"

# Load environment variables _after_ paths are available so `.env` at root is found.
load_dotenv()

# Runtime configuration -----------------------------------------------------
MATCH_STORE_PATH = Path(os.getenv("MATCH_STORE_PATH") or DATA_DIR / "match_store.json")
SHARE_PUBLIC_BASE = os.getenv("SHARE_PUBLIC_BASE") or os.getenv("BASE_URL", "http://localhost:8501")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
UNIVERSITY_LABEL = os.getenv("UNIVERSITY_LABEL", "University of Lincoln")

OPEN_DAYS_URL = "https://www.lincoln.ac.uk/studywithus/opendaysandvisits/"
DEFAULT_STUDENT_NAME = "Student"

# Share copy ----------------------------------------------------------------
SHARE_TITLE = "My Lincoln Course Match"
SHARE_HASHTAGS: Tuple[str, ...] = ("MyLincolnMatch", "UniLincoln", "CourseMatch")
SHARE_TEXT_TEMPLATE = (
    "I matched with {course_name} at University of Lincoln! 🎓 "
    "Find your perfect course match! #MyLincolnMatch #UniLincoln"
)

# Story card geometry (canvas pixels) ---------------------------------------
CARD_WIDTH = 1080
CARD_HEIGHT = 1920
CARD_CENTER_X = CARD_WIDTH // 2

BRAND_PINK = "#cd1f80"
BRAND_PINK_DARK = "#a01866"
BRAND_PURPLE = "#1a0a2e"
BRAND_GOLD = "#fddb35"

# (offset in pixels, colour) pairs for the vertical background gradient.
CARD_GRADIENT: Tuple[Tuple[int, str], ...] = (
    (0, BRAND_PINK),
    (CARD_HEIGHT // 2, BRAND_PINK_DARK),
    (CARD_HEIGHT, BRAND_PURPLE),
)

CARD_EMBLEM = "🎓"
CARD_TITLE = "I Found My Match!"
CARD_HASHTAG = "#MyLincolnMatch"
CARD_CTA = "Find your perfect course →"

CARD_EMBLEM_Y = 400
CARD_TITLE_Y = 600
CARD_BOX = (90, 700, 900, 400)  # x, y, width, height
CARD_BOX_FILL = (255, 255, 255, 51)
CARD_BOX_RADIUS = 40
CARD_TEXT_MAX_WIDTH = 800
CARD_NAME_START_Y = 850
CARD_NAME_LINE_HEIGHT = 90
CARD_UNIVERSITY_Y = 1250
CARD_HASHTAG_Y = 1400
CARD_CTA_Y = 1550

# font role -> (bold, size)
CARD_FONTS: Dict[str, Tuple[bool, int]] = {
    "emblem": (True, 180),
    "title": (True, 100),
    "course": (True, 70),
    "university": (False, 60),
    "hashtag": (True, 80),
    "cta": (False, 50),
}


PAGE_ICON = "🎓"
