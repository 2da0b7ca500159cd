"""
Genre views. Names are kept unique by looking up an existing genre before
every insert or rename; two concurrent submissions of the same name can
still both succeed.
"""

from functools import partial

from flask import redirect, render_template, url_for

from app_logging import get_logger
from data_models import Book, Genre
from errors import DocumentNotFound
from forms import GenreForm, run_validation

logger = get_logger("catalog.genres")


class GenreController:

    def __init__(self, store):
        self.store = store

    def _genre_with_books(self, doc_id):
        return self.store.gather(
            genre=partial(self.store.find_by_id, Genre, doc_id),
            genre_books=partial(
                self.store.find_all, Book, Book.genres.any(Genre.id == doc_id), order_by=Book.title,
            ),
        )

    def list_all(self):
        genres = self.store.find_all(Genre, order_by=Genre.name)
        return render_template("genre_list.html", title="Genre List", genre_list=genres)

    def detail(self, doc_id):
        results = self._genre_with_books(doc_id)
        if results["genre"] is None:
            raise DocumentNotFound("Genre", doc_id)
        return render_template("genre_detail.html", title="Genre Detail", **results)

    def create_form(self):
        return render_template("genre_form.html", title="Create Genre", form=GenreForm())

    def create(self):
        form = GenreForm()
        values, errors = run_validation(form)
        if errors:
            return render_template("genre_form.html", title="Create Genre", form=form, errors=errors)

        existing = self.store.find_one(Genre, name=values["name"])
        if existing is not None:
            return redirect(existing.url)

        genre = self.store.insert(Genre(name=values["name"]))
        logger.info("genre created: %s (%s)", genre.name, genre.id)
        return redirect(genre.url)

    def delete_form(self, doc_id):
        results = self._genre_with_books(doc_id)
        if results["genre"] is None:
            return redirect(url_for("catalog.genre_list"))
        return render_template("genre_delete.html", title="Delete Genre", **results)

    def delete(self, doc_id):
        # No dependent check here: books simply lose the genre.
        if self.store.delete(Genre, doc_id):
            logger.info("genre deleted: %s", doc_id)
        return redirect(url_for("catalog.genre_list"))

    def update_form(self, doc_id):
        genre = self.store.find_by_id(Genre, doc_id)
        if genre is None:
            raise DocumentNotFound("Genre", doc_id)
        return render_template("genre_form.html", title="Update Genre", form=GenreForm(obj=genre), genre=genre)

    def update(self, doc_id):
        if self.store.find_by_id(Genre, doc_id) is None:
            raise DocumentNotFound("Genre", doc_id)

        form = GenreForm()
        values, errors = run_validation(form)
        if errors:
            return render_template("genre_form.html", title="Update Genre", form=form, errors=errors)

        existing = self.store.find_one(Genre, name=values["name"])
        if existing is not None:
            return redirect(existing.url)

        genre = self.store.replace(Genre, doc_id, {"name": values["name"]})
        if genre is None:
            raise DocumentNotFound("Genre", doc_id)
        logger.info("genre renamed: %s -> %s", doc_id, genre.name)
        return redirect(genre.url)
