"""Run every catalog query against the Netflix titles table and export CSVs.

Usage:
    python catalog/run_queries.py                      # Query data/raw/netflix_titles.csv
    python catalog/run_queries.py --sample             # Query data/sample/netflix_titles.csv
    python catalog/run_queries.py --now 2024-01-01     # Pin "today" for the date windows
"""

import argparse
import sys
from datetime import date
from pathlib import Path

import duckdb

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from catalog.config import (
    RAW_DIR,
    OUTPUT_DIR,
    SAMPLE_DIR,
    TITLES_CSV,
    DEFAULT_RELEASE_YEAR,
    DEFAULT_DIRECTOR,
    DEFAULT_COUNTRY,
    DEFAULT_ACTOR,
)
from catalog import queries
from catalog.store import load_titles, connect, table_row_count


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the Netflix catalog queries")
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use data/sample/netflix_titles.csv as input",
    )
    parser.add_argument("--input", type=Path, help="Explicit titles CSV path")
    parser.add_argument(
        "--now",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD) for recent-additions and actor windows",
    )
    parser.add_argument("--year", type=int, default=DEFAULT_RELEASE_YEAR)
    parser.add_argument("--director", default=DEFAULT_DIRECTOR)
    parser.add_argument("--country", default=DEFAULT_COUNTRY)
    parser.add_argument("--actor", default=DEFAULT_ACTOR)
    return parser.parse_args(argv)


def resolve_input(args) -> Path:
    if args.input is not None:
        return args.input
    if args.sample:
        return SAMPLE_DIR / TITLES_CSV
    return RAW_DIR / TITLES_CSV


def run_all(con, args) -> dict:
    """Run the full catalog with CLI parameters. Returns name -> DataFrame."""
    now = args.now or date.today()
    return {
        "count_by_type": queries.count_by_type(con),
        "modal_rating_by_type": queries.modal_rating_by_type(con),
        "filter_by_release_year": queries.filter_by_release_year(con, args.year),
        "top_countries_by_content_count": queries.top_countries_by_content_count(con),
        "longest_movie": queries.longest_movie(con),
        "recent_additions": queries.recent_additions(con, now=now),
        "filter_by_director": queries.filter_by_director(con, args.director),
        "tv_shows_with_min_seasons": queries.tv_shows_with_min_seasons(con),
        "count_by_genre": queries.count_by_genre(con),
        "top_years_by_country_share": queries.top_years_by_country_share(
            con, args.country
        ),
        "documentaries_only": queries.documentaries_only(con),
        "content_without_director": queries.content_without_director(con),
        "actor_recent_appearances": queries.actor_recent_appearances(
            con, args.actor, now=now
        ),
        "top_actors_by_country": queries.top_actors_by_country(con, args.country),
        "categorize_by_keywords": queries.categorize_by_keywords(con),
    }


def open_catalog(input_path: Path):
    """Load the titles CSV and open a session, exiting on bad input."""
    if not input_path.exists():
        print(f"ERROR: {input_path} not found")
        print("Run qa/fixtures/generate_synthetic.py for sample data, or set NETFLIX_RAW_DIR")
        sys.exit(1)

    try:
        titles = load_titles(input_path)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    # Duplicate show_id, unknown type or non-integer release_year
    try:
        con = connect(titles)
    except duckdb.Error as e:
        print(f"ERROR: {input_path} could not be loaded: {e}")
        sys.exit(1)

    return titles, con


def main(argv=None):
    args = parse_args(argv)
    mode = "sample" if args.sample else "full"
    input_path = resolve_input(args)

    print(f"=== Netflix Catalog Queries (mode: {mode}) ===\n")
    print(f"Input: {input_path}")

    titles, con = open_catalog(input_path)
    print(f"  netflix: {table_row_count(con)} rows ({len(titles)} read)\n")

    results = run_all(con, args)
    con.close()

    # ── Export CSVs ──────────────────────────────────────────────
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for name, df in results.items():
        df.to_csv(OUTPUT_DIR / f"{name}.csv", index=False)
        print(f"  {name + '.csv':<36} ({len(df)} rows)")
    print(f"\nExported CSVs to {OUTPUT_DIR}")

    # ── Summary ──────────────────────────────────────────────────
    print(f"\n{'='*50}")
    print("Summary:")
    for _, row in results["count_by_type"].iterrows():
        print(f"  {row['type']}: {int(row['title_count'])} titles")

    print("\nMost common rating:")
    for _, row in results["modal_rating_by_type"].iterrows():
        print(f"  {row['type']}: {row['rating']} ({int(row['rating_count'])})")

    print("\nLongest movie:")
    for _, row in results["longest_movie"].iterrows():
        print(f"  {row['title']}: {int(row['duration_minutes'])} min")

    print(f"\nTop years for {args.country}:")
    for _, row in results["top_years_by_country_share"].iterrows():
        print(f"  {int(row['release_year'])}: {row['share_pct']:.2f}%")

    print("\nDone.")


if __name__ == "__main__":
    main()
