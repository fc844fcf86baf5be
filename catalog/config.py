"""Configuration for the Netflix catalog query library."""

import os
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent

# ─── Directories ─────────────────────────────────────────────
RAW_DIR = Path(os.environ.get("NETFLIX_RAW_DIR", str(PROJECT_ROOT / "data" / "raw")))
OUTPUT_DIR = Path(
    os.environ.get("NETFLIX_OUTPUT_DIR", str(PROJECT_ROOT / "data" / "results"))
)
SAMPLE_DIR = PROJECT_ROOT / "data" / "sample"
EXCEL_DIR = PROJECT_ROOT / "excel"
SQL_DIR = PACKAGE_DIR / "sql"

# ─── Source file ─────────────────────────────────────────────
TITLES_CSV = "netflix_titles.csv"

# The Kaggle export calls the cast column "cast", a SQL keyword
SOURCE_COLUMN_RENAMES = {"cast": "casts"}

# ─── Table schema ────────────────────────────────────────────
TABLE_NAME = "netflix"

NETFLIX_COLS = [
    "show_id",
    "type",
    "title",
    "director",
    "casts",
    "country",
    "date_added",
    "release_year",
    "rating",
    "duration",
    "listed_in",
    "description",
]

MULTI_VALUED_COLS = [
    "director",
    "casts",
    "country",
    "listed_in",
]

CONTENT_TYPES = ("Movie", "TV Show")

# Accepted trailing unit tokens of `duration`, per content type
DURATION_UNITS = {
    "Movie": ("min",),
    "TV Show": ("Season", "Seasons"),
}

# strptime format of `date_added`, e.g. "September 25, 2021"
DATE_ADDED_FORMAT = "%B %d, %Y"

# ─── Query defaults ──────────────────────────────────────────
DEFAULT_RELEASE_YEAR = 2020
DEFAULT_TOP_COUNTRIES = 5
DEFAULT_RECENT_WINDOW_YEARS = 5
DEFAULT_DIRECTOR = "Rajiv Chilaka"
DEFAULT_MIN_SEASONS = 5
DEFAULT_COUNTRY = "India"
DEFAULT_TOP_YEARS = 5
DEFAULT_ACTOR = "Salman Khan"
DEFAULT_ACTOR_YEARS_BACK = 10
DEFAULT_TOP_ACTORS = 10
DEFAULT_BAD_KEYWORDS = ("kill", "violence")
