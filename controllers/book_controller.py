"""
Book views. A book can only be deleted once all of its copies are gone.
"""

from functools import partial

from flask import current_app, redirect, render_template, url_for

from app_logging import get_logger
from data_models import Author, Book, BookInstance, Genre
from errors import DocumentNotFound
from forms import BookForm, escape_markup, run_validation
from openlibrary import fetch_summary_by_isbn

logger = get_logger("catalog.books")


class BookController:

    def __init__(self, store):
        self.store = store

    def _book_with_copies(self, doc_id):
        return self.store.gather(
            book=partial(self.store.find_by_id, Book, doc_id),
            book_instances=partial(self.store.find_all, BookInstance, book_id=doc_id, order_by=BookInstance.imprint),
        )

    def _choices(self, **extra):
        """Authors and genres for the form's select list and checkboxes."""
        return self.store.gather(
            authors=partial(self.store.find_all, Author, order_by=[Author.family_name, Author.first_name]),
            genres=partial(self.store.find_all, Genre, order_by=Genre.name),
            **extra,
        )

    def _render_form(self, title, form, errors=None, **choices):
        if not choices:
            choices = self._choices()
        return render_template("book_form.html", title=title, form=form, errors=errors, **choices)

    def _summary_for(self, values):
        """
        The submitted summary, or one looked up by ISBN when left empty.
        """
        if values["summary"]:
            return values["summary"]
        if not current_app.config.get("SUMMARY_LOOKUP_ENABLED"):
            return None
        summary = fetch_summary_by_isbn(values["isbn"])
        return escape_markup(summary) if summary else None

    def _fields(self, values):
        genres = self.store.find_all(Genre, Genre.id.in_(values["genre"])) if values["genre"] else []
        return {
            "title": values["title"],
            "author_id": values["author"],
            "summary": self._summary_for(values),
            "isbn": values["isbn"],
            "genres": genres,
        }

    def list_all(self):
        books = self.store.find_all(Book, order_by=Book.title)
        return render_template("book_list.html", title="Book List", book_list=books)

    def detail(self, doc_id):
        results = self._book_with_copies(doc_id)
        if results["book"] is None:
            raise DocumentNotFound("Book", doc_id)
        return render_template("book_detail.html", title=results["book"].title, **results)

    def create_form(self):
        return self._render_form("Create Book", BookForm())

    def create(self):
        form = BookForm()
        values, errors = run_validation(form)
        if errors:
            return self._render_form("Create Book", form, errors)

        book = self.store.insert(Book(**self._fields(values)))
        logger.info("book created: %s (%s)", book.title, book.id)
        return redirect(book.url)

    def delete_form(self, doc_id):
        results = self._book_with_copies(doc_id)
        if results["book"] is None:
            return redirect(url_for("catalog.book_list"))
        return render_template("book_delete.html", title="Delete Book", **results)

    def delete(self, doc_id):
        results = self._book_with_copies(doc_id)
        if results["book"] is None:
            return redirect(url_for("catalog.book_list"))
        if results["book_instances"]:
            logger.info("book %s has %d copies, not deleted", doc_id, len(results["book_instances"]))
            return render_template("book_delete.html", title="Delete Book", **results)

        self.store.delete(Book, doc_id)
        logger.info("book deleted: %s", doc_id)
        return redirect(url_for("catalog.book_list"))

    def update_form(self, doc_id):
        results = self._choices(book=partial(self.store.find_by_id, Book, doc_id))
        book = results.pop("book")
        if book is None:
            raise DocumentNotFound("Book", doc_id)
        form = BookForm(data={
            "title": book.title,
            "author": book.author_id,
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [genre.id for genre in book.genres],
        })
        return self._render_form("Update Book", form, book=book, **results)

    def update(self, doc_id):
        form = BookForm()
        values, errors = run_validation(form)
        if errors:
            return self._render_form("Update Book", form, errors)

        book = self.store.replace(Book, doc_id, self._fields(values))
        if book is None:
            raise DocumentNotFound("Book", doc_id)
        logger.info("book updated: %s", doc_id)
        return redirect(book.url)
