"""
Author views: list, detail, create, update and delete (refused while the author has books).
"""

from functools import partial

from flask import redirect, render_template, url_for

from app_logging import get_logger
from data_models import Author, Book
from errors import DocumentNotFound
from forms import AuthorForm, run_validation

logger = get_logger("catalog.authors")


class AuthorController:

    def __init__(self, store):
        self.store = store

    def _author_with_books(self, doc_id):
        return self.store.gather(
            author=partial(self.store.find_by_id, Author, doc_id),
            author_books=partial(self.store.find_all, Book, author_id=doc_id, order_by=Book.title),
        )

    def list_all(self):
        authors = self.store.find_all(Author, order_by=[Author.family_name, Author.first_name])
        return render_template("author_list.html", title="Author List", author_list=authors)

    def detail(self, doc_id):
        results = self._author_with_books(doc_id)
        if results["author"] is None:
            raise DocumentNotFound("Author", doc_id)
        return render_template("author_detail.html", title="Author Detail", **results)

    def create_form(self):
        return render_template("author_form.html", title="Create Author", form=AuthorForm())

    def create(self):
        form = AuthorForm()
        values, errors = run_validation(form)
        if errors:
            return render_template("author_form.html", title="Create Author", form=form, errors=errors)

        author = self.store.insert(Author(**values))
        logger.info("author created: %s (%s)", author.name, author.id)
        return redirect(author.url)

    def delete_form(self, doc_id):
        results = self._author_with_books(doc_id)
        if results["author"] is None:
            return redirect(url_for("catalog.author_list"))
        return render_template("author_delete.html", title="Delete Author", **results)

    def delete(self, doc_id):
        """
        Delete the author unless books still reference it; in that case show the confirmation again.
        """
        results = self._author_with_books(doc_id)
        if results["author"] is None:
            return redirect(url_for("catalog.author_list"))
        if results["author_books"]:
            logger.info("author %s has %d book(s), not deleted", doc_id, len(results["author_books"]))
            return render_template("author_delete.html", title="Delete Author", **results)

        self.store.delete(Author, doc_id)
        logger.info("author deleted: %s", doc_id)
        return redirect(url_for("catalog.author_list"))

    def update_form(self, doc_id):
        author = self.store.find_by_id(Author, doc_id)
        if author is None:
            raise DocumentNotFound("Author", doc_id)
        return render_template(
            "author_form.html", title="Update Author", form=AuthorForm(obj=author), author=author,
        )

    def update(self, doc_id):
        form = AuthorForm()
        values, errors = run_validation(form)
        if errors:
            return render_template("author_form.html", title="Update Author", form=form, errors=errors)

        author = self.store.replace(Author, doc_id, values)
        if author is None:
            raise DocumentNotFound("Author", doc_id)
        logger.info("author updated: %s", doc_id)
        return redirect(author.url)
