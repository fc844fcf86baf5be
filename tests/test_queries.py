import datetime as dt

import pytest

from catalog import queries
from catalog.store import table_row_count
from conftest import CATALOG_ROWS, make_row

NOW = dt.date(2024, 1, 1)


def show_ids(df):
    return list(df["show_id"])


def as_dict(df, key, value="title_count"):
    return dict(zip(df[key], df[value]))


# ─── CountByType / ModalRatingByType ──────────────────────────


def test_count_by_type(catalog_con):
    result = queries.count_by_type(catalog_con)
    assert as_dict(result, "type") == {"Movie": 4, "TV Show": 3}
    assert result["title_count"].sum() == len(CATALOG_ROWS)


def test_modal_rating_by_type_returns_all_ties(catalog_con):
    result = queries.modal_rating_by_type(catalog_con)

    movies = result[result["type"] == "Movie"]
    assert list(movies["rating"]) == ["TV-MA"]
    assert list(movies["rating_count"]) == [2]

    shows = result[result["type"] == "TV Show"]
    assert list(shows["rating"]) == ["TV-14", "TV-MA", "TV-PG"]


def test_modal_rating_two_way_tie(connect_rows):
    ratings = ["A"] * 5 + ["B"] * 5 + ["C"] * 2
    con = connect_rows(
        [make_row(f"s{i}", rating=rating) for i, rating in enumerate(ratings)]
    )

    result = queries.modal_rating_by_type(con)

    assert list(result["rating"]) == ["A", "B"]
    assert list(result["rating_count"]) == [5, 5]


# ─── FilterByReleaseYear ──────────────────────────────────────


def test_filter_by_release_year(catalog_con):
    assert show_ids(queries.filter_by_release_year(catalog_con, 2020)) == ["s2", "s3", "s6"]


def test_filter_by_release_year_and_type(catalog_con):
    result = queries.filter_by_release_year(catalog_con, 2020, content_type="Movie")
    assert show_ids(result) == ["s2", "s3"]


def test_filter_by_release_year_no_match(catalog_con):
    result = queries.filter_by_release_year(catalog_con, 1900)
    assert result.empty


# ─── TopCountriesByContentCount ───────────────────────────────


def test_top_countries_splits_co_productions(catalog_con):
    result = queries.top_countries_by_content_count(catalog_con)
    assert as_dict(result, "country") == {"India": 5, "United States": 2}
    assert list(result["country"]) == ["India", "United States"]


def test_top_countries_counts_each_constituent_once(connect_rows):
    con = connect_rows([make_row("s1", country="United States, India")])
    result = queries.top_countries_by_content_count(con, k=5)
    assert as_dict(result, "country") == {"India": 1, "United States": 1}


def test_top_countries_tie_break_is_by_name(connect_rows):
    con = connect_rows(
        [
            make_row("s1", country="Spain"),
            make_row("s2", country="Spain"),
            make_row("s3", country="Japan"),
            make_row("s4", country="France"),
            make_row("s5", country=None),
            make_row("s6", country="Cambodia,"),
        ]
    )
    result = queries.top_countries_by_content_count(con, k=3)
    assert list(result["country"]) == ["Spain", "Cambodia", "France"]


# ─── LongestMovie ─────────────────────────────────────────────


def test_longest_movie(catalog_con):
    result = queries.longest_movie(catalog_con)
    assert show_ids(result) == ["s2"]
    assert list(result["duration_minutes"]) == [154]


def test_longest_movie_excludes_unparseable_duration(connect_rows):
    con = connect_rows(
        [
            make_row("s1", duration="90 min"),
            make_row("s2", duration="154 min"),
            make_row("s3", duration="abc min"),
        ]
    )
    result = queries.longest_movie(con)
    assert list(result["duration"]) == ["154 min"]


def test_longest_movie_returns_ties(connect_rows):
    con = connect_rows(
        [
            make_row("s1", duration="120 min"),
            make_row("s2", duration="120 min"),
            make_row("s3", type="TV Show", duration="200 Seasons"),
        ]
    )
    assert show_ids(queries.longest_movie(con)) == ["s1", "s2"]


# ─── RecentAdditions ──────────────────────────────────────────


def test_recent_additions(catalog_con):
    result = queries.recent_additions(catalog_con, window_years=5, now=NOW)
    # s2 is too old, s3 has no date, s5 does not parse
    assert show_ids(result) == ["s7", "s4", "s6", "s1"]


def test_recent_additions_lower_bound(connect_rows):
    con = connect_rows(
        [
            make_row("s1", date_added="January 1, 2020"),
            make_row("s2", date_added="December 31, 2018"),
        ]
    )
    result = queries.recent_additions(con, 5, now=dt.datetime(2024, 1, 1, 12, 30))
    assert show_ids(result) == ["s1"]


# ─── FilterByDirector ─────────────────────────────────────────


def test_filter_by_director_exact_constituent(catalog_con):
    assert show_ids(queries.filter_by_director(catalog_con, "Rajiv Chilaka")) == ["s1", "s2"]
    assert show_ids(queries.filter_by_director(catalog_con, "Anurag Kashyap")) == ["s2"]
    assert queries.filter_by_director(catalog_con, "Rajiv").empty


def test_filter_by_director_ignore_case(catalog_con):
    result = queries.filter_by_director(catalog_con, "RAJIV CHILAKA", ignore_case=True)
    assert show_ids(result) == ["s1", "s2", "s7"]


# ─── TVShowsWithMinSeasons ────────────────────────────────────


def test_tv_shows_with_min_seasons(connect_rows):
    con = connect_rows(
        [
            make_row("s1", type="TV Show", duration="3 Seasons"),
            make_row("s2", type="TV Show", duration="7 Seasons"),
            make_row("s3", type="TV Show", duration="Limited"),
            make_row("s4", type="Movie", duration="95 min"),
        ]
    )
    result = queries.tv_shows_with_min_seasons(con, 5)
    assert list(result["duration"]) == ["7 Seasons"]
    assert list(result["season_count"]) == [7]


def test_tv_shows_min_seasons_is_strict(catalog_con):
    assert show_ids(queries.tv_shows_with_min_seasons(catalog_con, 7)) == []
    assert show_ids(queries.tv_shows_with_min_seasons(catalog_con, 2)) == ["s5", "s4"]


# ─── CountByGenre ─────────────────────────────────────────────


def test_count_by_genre(catalog_con):
    result = queries.count_by_genre(catalog_con)
    counts = as_dict(result, "genre")

    assert list(result["genre"][:2]) == ["Documentaries", "Dramas"]
    assert counts["Dramas"] == 2
    assert counts["Kids' TV"] == 1
    assert result["title_count"].sum() == 11


# ─── TopYearsByCountryShare ───────────────────────────────────


def test_top_years_by_country_share(catalog_con):
    result = queries.top_years_by_country_share(catalog_con, "India")

    # s3 ("United States, India") is not an exact match
    assert list(result["release_year"]) == [2021, 2020, 2019]
    assert list(result["title_count"]) == [2, 1, 1]
    assert list(result["share_pct"]) == pytest.approx([50.0, 25.0, 25.0])


def test_top_years_share_is_rounded(connect_rows):
    con = connect_rows(
        [
            make_row("s1", country="India", release_year=2020),
            make_row("s2", country="India", release_year=2020),
            make_row("s3", country="India", release_year=2021),
        ]
    )
    result = queries.top_years_by_country_share(con, "India")
    for _, row in result.iterrows():
        expected = round(row["title_count"] / 3 * 100, 2)
        assert row["share_pct"] == pytest.approx(expected)
    assert list(result["share_pct"]) == pytest.approx([66.67, 33.33])


def test_top_years_limits_to_k(connect_rows):
    con = connect_rows(
        [make_row(f"s{year}", country="India", release_year=year) for year in range(2010, 2018)]
    )
    result = queries.top_years_by_country_share(con, "India")
    assert len(result) == 5
    assert list(result["release_year"]) == [2017, 2016, 2015, 2014, 2013]


def test_top_years_unknown_country(catalog_con):
    assert queries.top_years_by_country_share(catalog_con, "Atlantis").empty


# ─── DocumentariesOnly / ContentWithoutDirector ───────────────


def test_documentaries_only(catalog_con):
    assert show_ids(queries.documentaries_only(catalog_con)) == ["s3", "s5"]


def test_content_without_director_ignores_empty_string(catalog_con):
    # s5 has an empty director, which is not absent
    assert show_ids(queries.content_without_director(catalog_con)) == ["s3", "s4", "s6"]


# ─── ActorRecentAppearances / TopActorsByCountry ──────────────


def test_actor_recent_appearances(catalog_con):
    result = queries.actor_recent_appearances(catalog_con, "Salman Khan", now=NOW)
    assert show_ids(result) == ["s4", "s2", "s1"]


def test_actor_recent_appearances_window(catalog_con):
    result = queries.actor_recent_appearances(
        catalog_con, "Salman Khan", years_back=4, now=NOW
    )
    assert show_ids(result) == ["s4"]


def test_top_actors_by_country(catalog_con):
    result = queries.top_actors_by_country(catalog_con, "India")
    assert list(result["actor"]) == ["Salman Khan", "Katrina Kaif", "Priyanka Chopra"]
    assert list(result["title_count"]) == [3, 2, 1]


def test_top_actors_by_country_k(catalog_con):
    result = queries.top_actors_by_country(catalog_con, "India", k=1)
    assert list(result["actor"]) == ["Salman Khan"]


# ─── CategorizeByKeywords ─────────────────────────────────────


def test_categorize_by_keywords(catalog_con):
    result = queries.categorize_by_keywords(catalog_con)
    counts = {
        (row["category"], row["type"]): row["title_count"]
        for _, row in result.iterrows()
    }
    assert counts == {
        ("Bad", "Movie"): 2,
        ("Good", "Movie"): 2,
        ("Good", "TV Show"): 3,
    }


def test_categorize_by_keywords_substring_match(connect_rows):
    con = connect_rows(
        [
            make_row("s1", description="A violent heist"),
            make_row("s2", description="A family drama"),
        ]
    )

    custom = queries.categorize_by_keywords(con, keywords={"kill", "violent"})
    assert as_dict(custom, "category") == {"Bad": 1, "Good": 1}

    # "violent" does not contain the default keyword "violence"
    default = queries.categorize_by_keywords(con)
    assert as_dict(default, "category") == {"Good": 2}


def test_categorize_by_keywords_is_case_insensitive(connect_rows):
    con = connect_rows([make_row("s1", description="KILLER instinct")])
    result = queries.categorize_by_keywords(con, keywords=["Kill"])
    assert list(result["category"]) == ["Bad"]


# ─── Read-only contract ───────────────────────────────────────


def test_queries_do_not_mutate_the_table(catalog_con):
    before = catalog_con.execute("SELECT * FROM netflix ORDER BY show_id").fetchall()

    queries.count_by_type(catalog_con)
    queries.longest_movie(catalog_con)
    queries.recent_additions(catalog_con, now=NOW)
    queries.count_by_genre(catalog_con)
    queries.categorize_by_keywords(catalog_con)

    after = catalog_con.execute("SELECT * FROM netflix ORDER BY show_id").fetchall()
    assert after == before
    assert table_row_count(catalog_con) == len(CATALOG_ROWS)


def test_registry_lists_every_operation():
    assert len(queries.QUERIES) == 15
    assert all(callable(fn) for fn in queries.QUERIES.values())


def test_categorize_by_keywords_single_string(connect_rows):
    con = connect_rows(
        [
            make_row("s1", description="A killer on the loose"),
            make_row("s2", description="A family drama"),
        ]
    )
    # "kill" is one keyword, not the letters k, i and l
    result = queries.categorize_by_keywords(con, keywords="kill")
    assert as_dict(result, "category") == {"Bad": 1, "Good": 1}


# ─── Whitespace around constituents ───────────────────────────


def test_top_countries_ignores_tabs_and_newlines(connect_rows):
    con = connect_rows(
        [
            make_row("s1", country="India\n"),
            make_row("s2", country="\tIndia"),
            make_row("s3", country="India"),
        ]
    )
    result = queries.top_countries_by_content_count(con)
    assert as_dict(result, "country") == {"India": 3}


def test_filter_by_director_ignores_trailing_tab(connect_rows):
    con = connect_rows([make_row("s1", director="Rajiv Chilaka\t")])
    assert show_ids(queries.filter_by_director(con, "Rajiv Chilaka")) == ["s1"]


def test_longest_movie_parses_tab_padded_duration(connect_rows):
    con = connect_rows(
        [make_row("s1", duration="\t200 min"), make_row("s2", duration="90 min")]
    )
    assert show_ids(queries.longest_movie(con)) == ["s1"]
