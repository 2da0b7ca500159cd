from .author_controller import AuthorController
from .book_controller import BookController
from .bookinstance_controller import BookInstanceController
from .genre_controller import GenreController
from .index_controller import IndexController

__all__ = [
    "AuthorController",
    "BookController",
    "BookInstanceController",
    "GenreController",
    "IndexController",
]
