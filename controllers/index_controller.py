from functools import partial

from flask import render_template

from data_models import Author, Book, BookInstance, BookStatus, Genre


class IndexController:
    """Catalog home page with record counts."""

    def __init__(self, store):
        self.store = store

    def index(self):
        count = self.store.count
        data = self.store.gather(
            book_count=partial(count, Book),
            book_instance_count=partial(count, BookInstance),
            book_instance_available_count=partial(count, BookInstance, status=BookStatus.AVAILABLE),
            author_count=partial(count, Author),
            genre_count=partial(count, Genre),
        )
        return render_template("index.html", title="Local Library Home", data=data)
