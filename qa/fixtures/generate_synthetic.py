"""Generate synthetic Netflix titles for QA/demo purposes.

Creates a fabricated netflix_titles.csv in the Kaggle export layout (including
the "cast" column name and padded date_added values) with a designed set of
edge-case rows that exercise the parse-exclusion rules of the query catalog.

All data is generated from scratch. No real Netflix data is sampled or used.

Usage:
    python qa/fixtures/generate_synthetic.py
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from catalog.config import SAMPLE_DIR, TITLES_CSV, NETFLIX_COLS, SOURCE_COLUMN_RENAMES

# Fixed seed for deterministic output
SEED = 42
N_RANDOM_TITLES = 80

# ─── Value pools ─────────────────────────────────────────────

COUNTRIES = ["India", "United States", "United Kingdom", "Japan", "Spain", "Nigeria"]
DIRECTORS = ["Rajiv Chilaka", "Ava Marlow", "Kenji Sato", "Lucia Ortega", "Tunde Bello"]
ACTORS = [
    "Salman Khan", "Katrina Kaif", "Shah Rukh Khan", "Mia Hart", "Ryo Tanaka",
    "Pablo Ruiz", "Ada Eze", "Tom Reed", "Priya Nair", "Omar Said",
]
MOVIE_GENRES = ["Dramas", "Comedies", "Action & Adventure", "International Movies", "Documentaries"]
TV_GENRES = ["TV Dramas", "International TV Shows", "Kids' TV", "Docuseries", "Crime TV Shows"]
MOVIE_RATINGS = ["TV-MA", "TV-14", "PG-13", "R", "PG"]
TV_RATINGS = ["TV-MA", "TV-14", "TV-PG", "TV-Y7"]
DESCRIPTIONS = [
    "A family reunites for one last summer.",
    "Two rivals kill time on a road trip that goes wrong.",
    "Violence spills over when a heist unravels.",
    "A chef rebuilds her life in a new city.",
    "Friends solve mysteries in a sleepy town.",
]
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# ─── Designed edge cases ─────────────────────────────────────
# Absent vs empty director, unparseable durations and dates, co-produced and
# trailing-comma countries. `cast` is the source column name.

EDGE_ROWS = [
    {
        "show_id": "s9001", "type": "Movie", "title": "Unmeasured",
        "director": None, "cast": "Tom Reed", "country": "United States, India",
        "date_added": "not a date", "release_year": 2020, "rating": "TV-MA",
        "duration": "abc min", "listed_in": "Documentaries",
        "description": "A look at killer whales.",
    },
    {
        "show_id": "s9002", "type": "TV Show", "title": "Miniseries",
        "director": "", "cast": None, "country": "Cambodia,",
        "date_added": " July 4, 2022", "release_year": 2021, "rating": "TV-PG",
        "duration": "Limited", "listed_in": "Docuseries, Documentaries",
        "description": None,
    },
    {
        "show_id": "s9003", "type": "TV Show", "title": "Long Runner",
        "director": None, "cast": "Salman Khan, Priya Nair", "country": "India",
        "date_added": None, "release_year": 2015, "rating": "TV-14",
        "duration": "12 Seasons", "listed_in": "TV Dramas",
        "description": "Generations of a family run a hotel.",
    },
    {
        "show_id": "s9004", "type": "Movie", "title": "Epic Cut",
        "director": "Rajiv Chilaka, Ava Marlow", "cast": "Katrina Kaif",
        "country": "India", "date_added": "February 29, 2020", "release_year": 2019,
        "rating": "PG-13", "duration": "312 min",
        "listed_in": "Dramas, International Movies",
        "description": "An epic about violence and redemption.",
    },
]


def _pick_many(rng, pool, low, high):
    n = int(rng.integers(low, high + 1))
    return list(rng.choice(pool, size=n, replace=False))


def generate_titles(n_titles: int = N_RANDOM_TITLES, seed: int = SEED) -> pd.DataFrame:
    """Generate title rows in the source CSV layout (with a `cast` column)."""
    rng = np.random.default_rng(seed=seed)
    rows = []

    for idx in range(1, n_titles + 1):
        is_movie = rng.random() < 0.65
        content_type = "Movie" if is_movie else "TV Show"

        if is_movie:
            duration = f"{int(rng.integers(70, 180))} min"
            genres = _pick_many(rng, MOVIE_GENRES, 1, 3)
            rating = str(rng.choice(MOVIE_RATINGS))
        else:
            seasons = int(rng.integers(1, 9))
            duration = f"{seasons} Season" + ("s" if seasons > 1 else "")
            genres = _pick_many(rng, TV_GENRES, 1, 3)
            rating = str(rng.choice(TV_RATINGS))

        # ~20% of titles have no director, ~10% no country
        director = None
        if rng.random() >= 0.2:
            director = ", ".join(_pick_many(rng, DIRECTORS, 1, 2))
        country = None
        if rng.random() >= 0.1:
            country = ", ".join(_pick_many(rng, COUNTRIES, 1, 2))

        release_year = int(rng.integers(2008, 2022))
        added_year = min(release_year + int(rng.integers(0, 3)), 2021)
        month = MONTHS[int(rng.integers(0, 12))]
        day = int(rng.integers(1, 29))
        # Source data pads some dates with a leading space
        pad = " " if rng.random() < 0.1 else ""

        rows.append(
            {
                "show_id": f"s{idx}",
                "type": content_type,
                "title": f"Synthetic Title {idx}",
                "director": director,
                "cast": ", ".join(_pick_many(rng, ACTORS, 1, 4)),
                "country": country,
                "date_added": f"{pad}{month} {day}, {added_year}",
                "release_year": release_year,
                "rating": rating,
                "duration": duration,
                "listed_in": ", ".join(genres),
                "description": str(rng.choice(DESCRIPTIONS)),
            }
        )

    rows.extend(dict(row) for row in EDGE_ROWS)

    source_cols = [
        {v: k for k, v in SOURCE_COLUMN_RENAMES.items()}.get(col, col)
        for col in NETFLIX_COLS
    ]
    return pd.DataFrame(rows)[source_cols]


def main():
    titles = generate_titles()

    SAMPLE_DIR.mkdir(parents=True, exist_ok=True)
    output_path = SAMPLE_DIR / TITLES_CSV
    titles.to_csv(output_path, index=False)

    # Summary
    print(f"Generated {len(titles)} titles ({len(EDGE_ROWS)} designed edge cases)")
    for content_type, n in titles["type"].value_counts().sort_index().items():
        print(f"  {content_type}: {n}")
    print(f"\nOutput: {output_path}")
    print("Synthetic fixtures generated from scratch. No Netflix data sampled.")


if __name__ == "__main__":
    main()
