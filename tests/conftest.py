"""Shared fixtures: one app per test on a throwaway SQLite file."""
from __future__ import annotations

from datetime import date

import pytest

from app import create_app
from data_models import Author, Book, BookInstance, BookStatus, Genre
from store import get_store


@pytest.fixture
def app(tmp_path):
    # A file database, not :memory:, so pooled reads see the same data.
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'library.sqlite'}",
        "WTF_CSRF_ENABLED": False,
        "SUMMARY_LOOKUP_ENABLED": False,
        "STORE_MAX_WORKERS": 2,
    })
    yield app
    get_store(app).close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return get_store(app)


@pytest.fixture
def seed(app, store):
    """Insert a document and return its id."""

    def _seed(document):
        with app.app_context():
            store.insert(document)
            return document.id

    return _seed


@pytest.fixture
def fetch(app, store):
    """Look a document up in a fresh session; returns None when missing."""

    def _fetch(model, doc_id):
        with app.app_context():
            document = store.find_by_id(model, doc_id)
            if document is not None:
                store.db.session.expunge(document)
            return document

    return _fetch


@pytest.fixture
def library(seed):
    """A small catalog: one author with one book in one genre, plus a copy."""
    author_id = seed(Author(first_name="Jane", family_name="Doe", date_of_birth=date(1950, 3, 1)))
    lonely_id = seed(Author(first_name="Solo", family_name="Writer"))
    genre_id = seed(Genre(name="Fiction"))
    book_id = seed(Book(title="X", author_id=author_id, summary="About X", isbn="9780000000001"))
    copy_id = seed(BookInstance(book_id=book_id, imprint="First edition", status=BookStatus.AVAILABLE))
    return {
        "author": author_id,
        "lonely_author": lonely_id,
        "genre": genre_id,
        "book": book_id,
        "copy": copy_id,
    }


@pytest.fixture
def tag_book(app, store):
    """Attach a genre to a book."""

    def _tag(book_id, genre_id):
        with app.app_context():
            book = store.find_by_id(Book, book_id)
            book.genres.append(store.find_by_id(Genre, genre_id))
            store.db.session.commit()

    return _tag
