"""Validation entry point for the Netflix titles table and query outputs.

Usage:
    python qa/validate.py            # Validate data/raw/netflix_titles.csv
    python qa/validate.py --sample   # Validate data/sample/ fixtures
    python qa/validate.py --all      # Also run query sanity checks
"""

import argparse
import sys
from pathlib import Path

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from catalog.config import (
    RAW_DIR,
    SAMPLE_DIR,
    TITLES_CSV,
    NETFLIX_COLS,
    SOURCE_COLUMN_RENAMES,
    MULTI_VALUED_COLS,
    CONTENT_TYPES,
    DURATION_UNITS,
    DATE_ADDED_FORMAT,
    DEFAULT_COUNTRY,
)
from catalog import queries
from catalog.store import load_titles, connect


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Validate the Netflix titles table")
    parser.add_argument(
        "--sample", action="store_true", help="Validate data/sample/ fixtures"
    )
    parser.add_argument(
        "--all", action="store_true", help="Also run query sanity checks"
    )
    return parser.parse_args(argv)


# ─── Check helpers ────────────────────────────────────────────


class CheckRunner:
    """Tracks pass/fail/warn counts across all checks."""

    def __init__(self):
        self.failures = 0
        self.warnings = 0
        self.total = 0

    def check(self, name, passed, detail=""):
        self.total += 1
        status = "PASS" if passed else "FAIL"
        suffix = f" — {detail}" if detail else ""
        print(f"  [{status}] {name}{suffix}")
        if not passed:
            self.failures += 1

    def warn(self, name, ok, detail=""):
        self.total += 1
        status = "PASS" if ok else "WARN"
        suffix = f" — {detail}" if detail else ""
        print(f"  [{status}] {name}{suffix}")
        if not ok:
            self.warnings += 1


def duration_unit_mismatches(df: pd.DataFrame) -> pd.DataFrame:
    """Rows with a numeric duration whose unit does not belong to their type."""
    present = df[df["duration"].notna()]
    present = present[present["duration"].str.strip().str.match(r"^\d+\s+\S")]
    units = present["duration"].str.strip().str.split().str[-1]
    allowed = present["type"].map(DURATION_UNITS)
    ok = [
        isinstance(valid, tuple) and unit in valid
        for unit, valid in zip(units, allowed)
    ]
    return present.loc[[not flag for flag in ok]]


def duration_exclusions(df: pd.DataFrame) -> int:
    """Present durations whose leading token is not a number."""
    # str.strip() drops all whitespace, matching the strip_ws SQL macro
    durations = df["duration"].dropna().astype(str).str.strip()
    return int((~durations.str.match(r"^\d+(\s|$)")).sum())


def date_added_exclusions(df: pd.DataFrame) -> int:
    """Present date_added values that do not parse with DATE_ADDED_FORMAT."""
    present = df["date_added"].dropna().astype(str).str.strip()
    parsed = pd.to_datetime(present, format=DATE_ADDED_FORMAT, errors="coerce")
    return int(parsed.isna().sum())


# ─── Table validation ─────────────────────────────────────────


def validate_titles(df: pd.DataFrame, runner: CheckRunner) -> bool:
    """Run schema and invariant checks. Returns False if columns are missing."""
    print("── Table Checks ──\n")

    # ── Check 1: Schema — expected columns present ────────────
    print("Check 1: Schema validation")
    missing = set(NETFLIX_COLS) - set(df.columns)
    runner.check(
        "netflix columns",
        len(missing) == 0,
        f"all {len(NETFLIX_COLS)} present" if not missing else f"missing {missing}",
    )
    if missing:
        return False

    # ── Check 2: show_id unique and present ───────────────────
    print("\nCheck 2: show_id uniqueness")
    null_ids = df["show_id"].isna().sum()
    dup_ids = df["show_id"].dropna().duplicated().sum()
    runner.check(
        "unique non-NULL show_id",
        null_ids == 0 and dup_ids == 0,
        f"{len(df)} unique"
        if (null_ids == 0 and dup_ids == 0)
        else f"{dup_ids} duplicates, {null_ids} NULL",
    )

    # ── Check 3: type in enum ─────────────────────────────────
    print("\nCheck 3: type values")
    bad_types = df[~df["type"].isin(CONTENT_TYPES)]
    runner.check(
        f"type in {list(CONTENT_TYPES)}",
        len(bad_types) == 0,
        "all valid"
        if len(bad_types) == 0
        else f"{len(bad_types)} rows, e.g. {sorted(bad_types['type'].dropna().unique())[:3]}",
    )

    # ── Check 4: release_year castable ────────────────────────
    print("\nCheck 4: release_year dtype")
    years = pd.to_numeric(df["release_year"], errors="coerce")
    bad_years = years.isna().sum()
    runner.check(
        "release_year integer",
        bad_years == 0,
        f"range [{years.min()}, {years.max()}]"
        if bad_years == 0
        else f"{bad_years} non-integer values",
    )

    # ── Check 5: duration unit matches type ───────────────────
    print("\nCheck 5: duration units")
    mismatched = duration_unit_mismatches(df)
    runner.check(
        "duration unit consistent with type",
        len(mismatched) == 0,
        "no mixed units"
        if len(mismatched) == 0
        else f"{len(mismatched)} rows, e.g. {list(mismatched['show_id'][:3])}",
    )
    unparsed = duration_exclusions(df)
    absent_duration = df["duration"].isna().sum()
    runner.warn(
        "duration has a leading number",
        unparsed == 0 and absent_duration == 0,
        "all parse"
        if (unparsed == 0 and absent_duration == 0)
        else f"{unparsed} unparseable, {absent_duration} absent (excluded from duration queries)",
    )

    # ── Check 6: empty strings in multi-valued fields (WARN) ──
    print("\nCheck 6: Multi-valued fields")
    for col in MULTI_VALUED_COLS:
        empty = (df[col].notna() & (df[col].astype(str).str.strip() == "")).sum()
        runner.warn(
            f"{col} has no empty strings",
            empty == 0,
            f"{df[col].isna().sum()} absent" if empty == 0 else f"{empty} empty strings",
        )

    # ── Check 7: date_added parseable (WARN) ──────────────────
    print("\nCheck 7: date_added format")
    present = df["date_added"].dropna()
    unparsed = date_added_exclusions(df)
    runner.warn(
        f"date_added matches {DATE_ADDED_FORMAT!r}",
        unparsed == 0,
        f"{len(present)} parse"
        if unparsed == 0
        else f"{unparsed} of {len(present)} excluded from recent additions",
    )

    return True


# ─── Query sanity checks ──────────────────────────────────────


def validate_queries(con, df: pd.DataFrame, runner: CheckRunner):
    """Cross-check query outputs against the loaded DataFrame."""
    print("\n── Query Checks ──\n")

    # ── Check 8: count_by_type sums to row count ──────────────
    print("Check 8: count_by_type total")
    by_type = queries.count_by_type(con)
    total = int(by_type["title_count"].sum())
    runner.check(
        "count_by_type sums to row count",
        total == len(df),
        f"{total} of {len(df)}",
    )

    # ── Check 9: modal ratings are at the per-type maximum ────
    print("\nCheck 9: modal_rating_by_type")
    counts = df.groupby(["type", "rating"], dropna=False).size()
    modal = queries.modal_rating_by_type(con)
    for content_type, group in modal.groupby("type"):
        expected_max = counts.loc[content_type].max()
        runner.check(
            f"modal rating {content_type}",
            (group["rating_count"] == expected_max).all(),
            f"{len(group)} rating(s) at {expected_max}",
        )

    # ── Check 10: share_pct recomputes from counts ────────────
    print(f"\nCheck 10: top_years_by_country_share ({DEFAULT_COUNTRY})")
    shares = queries.top_years_by_country_share(con, DEFAULT_COUNTRY)
    country_years = pd.to_numeric(
        df.loc[df["country"] == DEFAULT_COUNTRY, "release_year"]
    )
    country_total = len(country_years)
    for _, row in shares.iterrows():
        year_count = int((country_years == row["release_year"]).sum())
        expected = round(year_count / country_total * 100, 2)
        runner.check(
            f"share_pct {int(row['release_year'])}",
            abs(row["share_pct"] - expected) < 0.006,
            f"{row['share_pct']} vs {expected}",
        )

    # ── Check 11: longest movie is not an unparsed row ────────
    print("\nCheck 11: longest_movie")
    longest = queries.longest_movie(con)
    runner.check(
        "longest_movie durations parsed",
        longest["duration_minutes"].notna().all(),
        f"{len(longest)} row(s)",
    )


# ─── Main validation orchestrator ───────────────────────────────


def validate(csv_path: Path, run_all: bool) -> int:
    """Run validation checks. Returns number of failures (0 = success)."""
    runner = CheckRunner()
    print(f"Validating {csv_path}\n")

    if not csv_path.exists():
        print(f"  [FAIL] File not found: {csv_path}")
        return 1

    # Read raw columns so a missing one is reported as a check, not an error
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[""])
    df = df.rename(columns=SOURCE_COLUMN_RENAMES)
    table_ok = validate_titles(df, runner)

    if run_all:
        if table_ok and runner.failures == 0:
            titles = load_titles(csv_path)
            con = connect(titles)
            validate_queries(con, titles, runner)
            con.close()
        else:
            print("\n── Query Checks ── SKIPPED (table checks failed)")

    # ── Summary ───────────────────────────────────────────────
    print(f"\n{'='*50}")
    print(
        f"Results: {runner.total} checks — "
        f"{runner.total - runner.failures - runner.warnings} passed, "
        f"{runner.failures} failed, {runner.warnings} warnings"
    )

    if runner.failures == 0:
        print("Validation: ALL CHECKS PASSED")
    else:
        print(f"Validation: {runner.failures} FAILURE(S)")

    return runner.failures


def main(argv=None):
    args = parse_args(argv)
    data_dir = SAMPLE_DIR if args.sample else RAW_DIR
    failures = validate(data_dir / TITLES_CSV, run_all=args.all)
    sys.exit(1 if failures > 0 else 0)


if __name__ == "__main__":
    main()
