"""Read-only analytical queries over the netflix table.

Every function takes a connection opened by ``catalog.store.connect`` and
returns a pandas DataFrame. Rows whose duration or date_added fail to parse
are left out of the result of the query that needs them; a filter that matches
nothing returns an empty frame.
"""

from datetime import date

import pandas as pd

from catalog.config import (
    DEFAULT_TOP_COUNTRIES,
    DEFAULT_RECENT_WINDOW_YEARS,
    DEFAULT_MIN_SEASONS,
    DEFAULT_TOP_YEARS,
    DEFAULT_ACTOR_YEARS_BACK,
    DEFAULT_TOP_ACTORS,
    DEFAULT_BAD_KEYWORDS,
)
from catalog.store import read_sql


def _run(con, filename: str, params: dict = None) -> pd.DataFrame:
    sql = read_sql(filename)
    if params is None:
        return con.execute(sql).fetchdf()
    return con.execute(sql, params).fetchdf()


def _as_date(now) -> date:
    if now is None:
        return date.today()
    # datetime is a subclass of date
    if hasattr(now, "date"):
        return now.date()
    return now


def count_by_type(con) -> pd.DataFrame:
    """Number of titles per type."""
    return _run(con, "q01_count_by_type.sql")


def modal_rating_by_type(con) -> pd.DataFrame:
    """Most common rating per type. Ties at the maximum are all returned."""
    return _run(con, "q02_modal_rating_by_type.sql")


def filter_by_release_year(con, year: int, content_type: str = None) -> pd.DataFrame:
    """Titles released in `year`, optionally restricted to one type."""
    return _run(
        con,
        "q03_filter_by_release_year.sql",
        {"year": year, "content_type": content_type},
    )


def top_countries_by_content_count(con, k: int = DEFAULT_TOP_COUNTRIES) -> pd.DataFrame:
    """Top `k` countries by number of titles.

    A title listing several countries counts once toward each of them.
    Equal counts are ordered by country name.
    """
    return _run(con, "q04_top_countries.sql", {"k": k})


def longest_movie(con) -> pd.DataFrame:
    """Movie(s) with the largest runtime in minutes."""
    return _run(con, "q05_longest_movie.sql")


def recent_additions(
    con, window_years: int = DEFAULT_RECENT_WINDOW_YEARS, now=None
) -> pd.DataFrame:
    """Titles added on or after `now` minus `window_years` years."""
    return _run(
        con,
        "q06_recent_additions.sql",
        {"window_years": window_years, "now": _as_date(now)},
    )


def filter_by_director(con, name: str, ignore_case: bool = False) -> pd.DataFrame:
    """Titles where `name` is one of the listed directors."""
    return _run(
        con,
        "q07_filter_by_director.sql",
        {"name": name, "ignore_case": ignore_case},
    )


def tv_shows_with_min_seasons(con, min_seasons: int = DEFAULT_MIN_SEASONS) -> pd.DataFrame:
    """TV shows with strictly more than `min_seasons` seasons."""
    return _run(con, "q08_tv_shows_min_seasons.sql", {"min_seasons": min_seasons})


def count_by_genre(con) -> pd.DataFrame:
    return _run(con, "q09_count_by_genre.sql")


def top_years_by_country_share(
    con, country: str, k: int = DEFAULT_TOP_YEARS
) -> pd.DataFrame:
    """Release years with the largest share of a country's titles.

    `country` must equal the stored field exactly. share_pct is the year's
    count over the country total, times 100, rounded to 2 decimals.
    """
    return _run(
        con,
        "q10_top_years_by_country_share.sql",
        {"country": country, "k": k},
    )


def documentaries_only(con) -> pd.DataFrame:
    return _run(con, "q11_documentaries_only.sql")


def content_without_director(con) -> pd.DataFrame:
    return _run(con, "q12_content_without_director.sql")


def actor_recent_appearances(
    con, actor_name: str, years_back: int = DEFAULT_ACTOR_YEARS_BACK, now=None
) -> pd.DataFrame:
    """Titles whose cast mentions `actor_name`, released within `years_back` years."""
    return _run(
        con,
        "q13_actor_recent_appearances.sql",
        {"actor_name": actor_name, "years_back": years_back, "now": _as_date(now)},
    )


def top_actors_by_country(
    con, country: str, k: int = DEFAULT_TOP_ACTORS
) -> pd.DataFrame:
    """Top `k` cast members across titles whose country equals `country`."""
    return _run(
        con,
        "q14_top_actors_by_country.sql",
        {"country": country, "k": k},
    )


def categorize_by_keywords(con, keywords=DEFAULT_BAD_KEYWORDS) -> pd.DataFrame:
    """Count titles per (category, type); 'Bad' descriptions mention a keyword."""
    if isinstance(keywords, str):
        keywords = (keywords,)
    return _run(
        con,
        "q15_categorize_by_keywords.sql",
        {"keywords": sorted(set(keywords))},
    )


# Operation name -> function, in catalog order
QUERIES = {
    "count_by_type": count_by_type,
    "modal_rating_by_type": modal_rating_by_type,
    "filter_by_release_year": filter_by_release_year,
    "top_countries_by_content_count": top_countries_by_content_count,
    "longest_movie": longest_movie,
    "recent_additions": recent_additions,
    "filter_by_director": filter_by_director,
    "tv_shows_with_min_seasons": tv_shows_with_min_seasons,
    "count_by_genre": count_by_genre,
    "top_years_by_country_share": top_years_by_country_share,
    "documentaries_only": documentaries_only,
    "content_without_director": content_without_director,
    "actor_recent_appearances": actor_recent_appearances,
    "top_actors_by_country": top_actors_by_country,
    "categorize_by_keywords": categorize_by_keywords,
}
