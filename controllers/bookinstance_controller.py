"""
Book copy views. Copies are deleted without any dependent check.
"""

from datetime import date
from functools import partial

from flask import redirect, render_template, url_for

from app_logging import get_logger
from data_models import Book, BookInstance
from errors import DocumentNotFound
from forms import BookInstanceForm, run_validation

logger = get_logger("catalog.bookinstances")


def _sort_key(copy):
    return (copy.book.title if copy.book else "", copy.imprint)


class BookInstanceController:

    def __init__(self, store):
        self.store = store

    def _books(self):
        return self.store.find_all(Book, order_by=Book.title)

    def _render_form(self, title, form, errors=None, book_list=None, **context):
        if book_list is None:
            book_list = self._books()
        return render_template(
            "bookinstance_form.html",
            title=title,
            form=form,
            errors=errors,
            book_list=book_list,
            statuses=form.status.choices,
            **context,
        )

    @staticmethod
    def _fields(values):
        return {
            "book_id": values["book"],
            "imprint": values["imprint"],
            "status": values["status"],
            "due_back": values["due_back"] or date.today(),
        }

    def list_all(self):
        copies = sorted(self.store.find_all(BookInstance), key=_sort_key)
        return render_template("bookinstance_list.html", title="Book Instance List", bookinstance_list=copies)

    def detail(self, doc_id):
        # The parent book is joined into the same query.
        copy = self.store.find_by_id(BookInstance, doc_id)
        if copy is None:
            raise DocumentNotFound("Book copy", doc_id)
        title = f"Copy: {copy.book.title}" if copy.book else "Copy"
        return render_template("bookinstance_detail.html", title=title, bookinstance=copy)

    def create_form(self):
        return self._render_form("Create BookInstance", BookInstanceForm())

    def create(self):
        form = BookInstanceForm()
        values, errors = run_validation(form)
        if errors:
            return self._render_form("Create BookInstance", form, errors)

        copy = self.store.insert(BookInstance(**self._fields(values)))
        logger.info("book copy created: %s (book %s)", copy.id, copy.book_id)
        return redirect(copy.url)

    def delete_form(self, doc_id):
        copy = self.store.find_by_id(BookInstance, doc_id)
        if copy is None:
            return redirect(url_for("catalog.bookinstance_list"))
        return render_template("bookinstance_delete.html", title="Delete Book Instance", bookinstance=copy)

    def delete(self, doc_id):
        if self.store.delete(BookInstance, doc_id):
            logger.info("book copy deleted: %s", doc_id)
        return redirect(url_for("catalog.bookinstance_list"))

    def update_form(self, doc_id):
        results = self.store.gather(
            book_list=self._books,
            bookinstance=partial(self.store.find_by_id, BookInstance, doc_id),
        )
        copy = results["bookinstance"]
        if copy is None:
            raise DocumentNotFound("Book copy", doc_id)
        form = BookInstanceForm(data={
            "book": copy.book_id,
            "imprint": copy.imprint,
            "status": copy.status.value,
            "due_back": copy.due_back,
        })
        return self._render_form("Update Book Instance", form, book_list=results["book_list"], bookinstance=copy)

    def update(self, doc_id):
        form = BookInstanceForm()
        values, errors = run_validation(form)
        if errors:
            return self._render_form("Update Book Instance", form, errors)

        copy = self.store.replace(BookInstance, doc_id, self._fields(values))
        if copy is None:
            raise DocumentNotFound("Book copy", doc_id)
        logger.info("book copy updated: %s", doc_id)
        return redirect(copy.url)
