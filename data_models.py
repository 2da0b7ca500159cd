import enum
import uuid
from datetime import date

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()

CATALOG_PREFIX = "/catalog"
NO_BIRTHDATE = "no associated birthdate or death date"


class ModelValidationError(ValueError):
    """Raised when a record is constructed or updated with invalid field values."""


def new_id() -> str:
    """Opaque identity assigned to every document at creation."""
    return uuid.uuid4().hex


def _require_text(field: str, value, max_length: int) -> str:
    if value is None or not str(value).strip():
        raise ModelValidationError(f"{field} is required")
    if len(value) > max_length:
        raise ModelValidationError(f"{field} must be at most {max_length} characters")
    return value


def years_between(start: date, end: date) -> int:
    """Whole years from start to end, counting a year only once its anniversary is reached."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.String(32), db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.String(32), db.ForeignKey("genres.id"), primary_key=True),
)


class Author(db.Model):
    """
    Author with optional life dates. Books reference authors, not the other way round.
    """
    __tablename__ = 'authors'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    @validates("first_name", "family_name")
    def _validate_names(self, key, value):
        return _require_text(key, value, 100)

    @property
    def name(self) -> str:
        """'family, first', or an empty string if either part is missing."""
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        birth = str(self.date_of_birth.year) if self.date_of_birth else ""
        death = str(self.date_of_death.year) if self.date_of_death else ""
        return f"{birth} - {death}"

    def age(self, today: date | None = None):
        """
        Age in whole years, at death or today.

        Returns:
            int, or the NO_BIRTHDATE placeholder string when the birth date is unknown.
        """
        if not self.date_of_birth:
            return NO_BIRTHDATE
        end = self.date_of_death or today or date.today()
        return years_between(self.date_of_birth, end)

    @property
    def formatted_age(self):
        return self.age()

    @property
    def birth_formatted(self) -> str | None:
        return self.date_of_birth.isoformat() if self.date_of_birth else None

    @property
    def death_formatted(self) -> str | None:
        return self.date_of_death.isoformat() if self.date_of_death else None

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/author/{self.id}"

    def __repr__(self):
        return f"Author(id = {self.id}, name = {self.name})"

    def __str__(self):
        return self.name


class Genre(db.Model):
    __tablename__ = 'genres'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(100), nullable=False)

    # Only used so that deleting a genre clears its association rows.
    books = db.relationship("Book", secondary=book_genres, back_populates="genres", lazy="select")

    @validates("name")
    def _validate_name(self, key, value):
        return _require_text(key, value, 100)

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/genre/{self.id}"

    def __repr__(self):
        return f"<Genre id={self.id} name='{self.name}'>"

    def __str__(self):
        return self.name


class Book(db.Model):
    """
    Book referencing one author and any number of genres.

    Both references are eager-loaded so that documents fetched on a worker
    thread can still be rendered after their session is closed.
    """
    __tablename__ = 'books'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False)
    summary = db.Column(db.Text, nullable=True)
    isbn = db.Column(db.String(40), nullable=False)

    author_id = db.Column(db.String(32), db.ForeignKey("authors.id"), nullable=False)

    author = db.relationship("Author", lazy="joined")
    genres = db.relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
        lazy="selectin",
        order_by="Genre.name",
    )

    @validates("title")
    def _validate_title(self, key, value):
        return _require_text(key, value, 200)

    @validates("isbn")
    def _validate_isbn(self, key, value):
        return _require_text(key, value, 40)

    @validates("author_id")
    def _validate_author_id(self, key, value):
        return _require_text(key, value, 32)

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/book/{self.id}"

    def __repr__(self):
        return f"<Book id={self.id} title='{self.title}'>"

    def __str__(self):
        return self.title


class BookStatus(enum.Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class BookInstance(db.Model):
    """
    A physical copy of a book.
    """
    __tablename__ = 'book_instances'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    book_id = db.Column(db.String(32), db.ForeignKey("books.id"), nullable=False)
    imprint = db.Column(db.String(200), nullable=False)
    status = db.Column(
        db.Enum(BookStatus, values_callable=lambda statuses: [s.value for s in statuses]),
        nullable=False,
        default=BookStatus.MAINTENANCE,
    )
    due_back = db.Column(db.Date, nullable=False, default=date.today)

    book = db.relationship("Book", lazy="joined")

    @validates("book_id")
    def _validate_book_id(self, key, value):
        return _require_text(key, value, 32)

    @validates("imprint")
    def _validate_imprint(self, key, value):
        return _require_text(key, value, 200)

    @validates("status")
    def _validate_status(self, key, value):
        if isinstance(value, BookStatus):
            return value
        try:
            return BookStatus(value)
        except ValueError:
            raise ModelValidationError(f"status must be one of {', '.join(BookStatus.values())}") from None

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/bookinstance/{self.id}"

    @property
    def due_back_formatted(self) -> str:
        if not self.due_back:
            return ""
        return f"{self.due_back:%b} {_ordinal(self.due_back.day)}, {self.due_back.year}"

    @property
    def due_back_iso(self) -> str:
        return self.due_back.isoformat() if self.due_back else ""

    def __repr__(self):
        return f"<BookInstance id={self.id} imprint='{self.imprint}'>"

    def __str__(self):
        return self.imprint
