"""Tests for record construction and derived display fields."""
from __future__ import annotations

from datetime import date

import pytest

from data_models import (
    NO_BIRTHDATE,
    Author,
    Book,
    BookInstance,
    BookStatus,
    Genre,
    ModelValidationError,
    years_between,
)


def test_age_between_birth_and_death():
    author = Author(first_name="Jane", family_name="Doe",
                    date_of_birth=date(2000, 1, 1), date_of_death=date(2020, 1, 1))
    assert author.age() == 20
    assert author.formatted_age == 20


def test_age_of_living_author_counts_from_today():
    author = Author(first_name="Jane", family_name="Doe", date_of_birth=date(2000, 1, 1))
    assert author.age(today=date(2026, 10, 19)) == 26
    assert author.age(today=date(2025, 12, 31)) == 25

    today = date.today()
    assert author.formatted_age == years_between(date(2000, 1, 1), today)


def test_age_adjusts_for_month_and_day():
    author = Author(first_name="Jane", family_name="Doe",
                    date_of_birth=date(1990, 6, 15), date_of_death=date(2020, 6, 14))
    assert author.age() == 29


def test_age_without_birth_date_is_a_placeholder():
    author = Author(first_name="Jane", family_name="Doe", date_of_death=date(2020, 1, 1))
    assert author.age() == NO_BIRTHDATE
    assert isinstance(author.formatted_age, str)


def test_name_is_family_then_first():
    assert Author(first_name="Jane", family_name="Doe").name == "Doe, Jane"
    assert Author(first_name="Jane").name == ""


def test_lifespan_and_iso_dates():
    author = Author(first_name="Jane", family_name="Doe",
                    date_of_birth=date(1920, 5, 2), date_of_death=date(1992, 4, 6))
    assert author.lifespan == "1920 - 1992"
    assert author.birth_formatted == "1920-05-02"
    assert author.death_formatted == "1992-04-06"

    alive = Author(first_name="Jane", family_name="Doe", date_of_birth=date(1980, 1, 1))
    assert alive.lifespan == "1980 - "
    assert alive.death_formatted is None


def test_urls_use_catalog_prefix():
    author = Author(id="abc", first_name="Jane", family_name="Doe")
    assert author.url == "/catalog/author/abc"
    assert Genre(id="g1", name="Poetry").url == "/catalog/genre/g1"
    assert Book(id="b1", title="X", isbn="1", author_id="abc").url == "/catalog/book/b1"
    assert BookInstance(id="c1", book_id="b1", imprint="Imp").url == "/catalog/bookinstance/c1"


@pytest.mark.parametrize("kwargs", [
    {"first_name": "", "family_name": "Doe"},
    {"first_name": "   ", "family_name": "Doe"},
    {"first_name": "Jane", "family_name": "x" * 101},
])
def test_author_rejects_invalid_names(kwargs):
    with pytest.raises(ModelValidationError):
        Author(**kwargs)


def test_genre_and_book_reject_missing_required_text():
    with pytest.raises(ModelValidationError):
        Genre(name="")
    with pytest.raises(ModelValidationError):
        Book(title="", isbn="1", author_id="a")


def test_book_instance_status_is_enumerated():
    copy = BookInstance(book_id="b1", imprint="Imp", status="Loaned")
    assert copy.status is BookStatus.LOANED

    with pytest.raises(ModelValidationError):
        BookInstance(book_id="b1", imprint="Imp", status="Lost")


@pytest.mark.parametrize("due, expected", [
    (date(2026, 10, 1), "Oct 1st, 2026"),
    (date(2026, 10, 2), "Oct 2nd, 2026"),
    (date(2026, 10, 3), "Oct 3rd, 2026"),
    (date(2026, 10, 11), "Oct 11th, 2026"),
    (date(2026, 10, 22), "Oct 22nd, 2026"),
])
def test_due_back_formatting(due, expected):
    copy = BookInstance(book_id="b1", imprint="Imp", due_back=due)
    assert copy.due_back_formatted == expected
    assert copy.due_back_iso == due.isoformat()
