import pytest

from catalog.store import titles_frame, connect


def make_row(show_id, **overrides):
    row = {
        "show_id": show_id,
        "type": "Movie",
        "title": f"Title {show_id}",
        "director": None,
        "casts": None,
        "country": None,
        "date_added": None,
        "release_year": 2020,
        "rating": "TV-MA",
        "duration": "90 min",
        "listed_in": "Dramas",
        "description": "A family drama",
    }
    row.update(overrides)
    return row


CATALOG_ROWS = [
    make_row(
        "s1", title="Alpha", director="Rajiv Chilaka",
        casts="Salman Khan, Katrina Kaif", country="India",
        date_added="January 1, 2020", release_year=2019, rating="TV-MA",
        duration="90 min", listed_in="Dramas, International Movies",
        description="A family drama",
    ),
    make_row(
        "s2", title="Bravo", director="Rajiv Chilaka, Anurag Kashyap",
        casts="Salman Khan", country="India",
        date_added="December 31, 2018", release_year=2020, rating="TV-14",
        duration="154 min", listed_in="Action & Adventure",
        description="Violence erupts after a heist",
    ),
    make_row(
        "s3", title="Charlie", director=None, casts="Tom Hanks",
        country="United States, India", date_added=None, release_year=2020,
        rating="TV-MA", duration="abc min", listed_in="Documentaries",
        description="A look at killer whales",
    ),
    make_row(
        "s4", type="TV Show", title="Delta", director=None,
        casts="Priyanka Chopra, Salman Khan", country="India",
        date_added=" March 5, 2023", release_year=2021, rating="TV-14",
        duration="3 Seasons", listed_in="International TV Shows, TV Dramas",
        description="A family saga",
    ),
    make_row(
        "s5", type="TV Show", title="Echo", director="", casts=None,
        country="United States", date_added="not a date", release_year=2015,
        rating="TV-MA", duration="7 Seasons",
        listed_in="Docuseries, Documentaries", description=None,
    ),
    make_row(
        "s6", type="TV Show", title="Foxtrot", director=None, casts="Tom Hanks",
        country=None, date_added="July 4, 2022", release_year=2020,
        rating="TV-PG", duration="Limited", listed_in="Kids' TV",
        description="Friends solve mysteries",
    ),
    make_row(
        "s7", title="Golf", director="rajiv chilaka", casts="Katrina Kaif",
        country="India", date_added="February 29, 2024", release_year=2021,
        rating="PG", duration="120 min", listed_in="Comedies, Dramas",
        description="A comedy",
    ),
]


@pytest.fixture
def connect_rows():
    """Open a catalog session over the given rows; closed after the test."""
    opened = []

    def _connect(rows):
        con = connect(titles_frame(rows))
        opened.append(con)
        return con

    yield _connect
    for con in opened:
        con.close()


@pytest.fixture
def catalog_con(connect_rows):
    return connect_rows(CATALOG_ROWS)
