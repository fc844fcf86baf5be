"""Load the Netflix titles table into an in-memory DuckDB session."""

from pathlib import Path

import duckdb
import pandas as pd

from catalog.config import (
    SQL_DIR,
    NETFLIX_COLS,
    SOURCE_COLUMN_RENAMES,
    DATE_ADDED_FORMAT,
)

# Placeholder tokens substituted into every SQL file
SQL_TOKENS = {
    "__DATE_ADDED_FORMAT__": DATE_ADDED_FORMAT,
}


def read_sql(filename: str, token_map: dict = None) -> str:
    """Read a SQL file and replace placeholder tokens with their values."""
    sql_text = (SQL_DIR / filename).read_text()
    for token, resolved in (token_map or SQL_TOKENS).items():
        sql_text = sql_text.replace(token, resolved)
    return sql_text


def _absent_as_none(df: pd.DataFrame) -> pd.DataFrame:
    # NaN -> None so DuckDB sees NULL rather than a float in text columns
    df = df.astype(object)
    return df.where(df.notna(), None)


def load_titles(csv_path: Path) -> pd.DataFrame:
    """Read the titles CSV as text columns. Empty fields become absent (None).

    Raises ValueError when the file lacks any column of the netflix schema.
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[""])
    df = df.rename(columns=SOURCE_COLUMN_RENAMES)

    missing = [col for col in NETFLIX_COLS if col not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} missing required columns: {missing}")

    return _absent_as_none(df[NETFLIX_COLS])


def titles_frame(rows) -> pd.DataFrame:
    """Build a titles DataFrame from an iterable of row dicts.

    Keys outside the schema are ignored and missing keys are absent.
    Empty strings are kept as-is.
    """
    df = pd.DataFrame(list(rows), columns=NETFLIX_COLS)
    return _absent_as_none(df)


def connect(titles: pd.DataFrame, database: str = ":memory:"):
    """Open a DuckDB connection holding `titles` as the read-only netflix table.

    Installs the parsing macros first. A duplicate show_id or an unknown type
    raises duckdb.ConstraintException.
    """
    con = duckdb.connect(database)
    try:
        con.execute(read_sql("00_macros.sql"))
        con.register("titles_raw", titles)
        con.execute(read_sql("01_schema.sql"))
        con.unregister("titles_raw")
    except duckdb.Error:
        con.close()
        raise
    return con


def table_row_count(con) -> int:
    return con.execute("SELECT COUNT(*) FROM netflix").fetchone()[0]
