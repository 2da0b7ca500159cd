"""
Form definitions and the sanitise/validate pipeline for catalog input.

Every submitted text field is trimmed and markup-escaped before its validators run;
the escaped value is what gets persisted and echoed back on errors.
"""

from typing import NamedTuple

from flask_wtf import FlaskForm
from markupsafe import escape
from wtforms import DateField, Field, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, Regexp

from data_models import BookStatus

ALPHANUMERIC = r"^[A-Za-z0-9]+$"


class FieldError(NamedTuple):
    field: str
    message: str


def strip_whitespace(value):
    return value.strip() if isinstance(value, str) else value


def escape_markup(value):
    return str(escape(value)) if isinstance(value, str) else value


class SanitizedInput:
    """
    Trims and escapes submitted text. Values pre-populated from a stored
    document are already escaped and pass through untouched.
    """

    def process_formdata(self, valuelist):
        super().process_formdata(valuelist)
        self.data = escape_markup(strip_whitespace(self.data))


class TextField(SanitizedInput, StringField):
    pass


class TextBlockField(SanitizedInput, TextAreaField):
    pass


class ISODateField(DateField):
    """
    A YYYY-MM-DD date field reporting its own message when the value does not parse.
    """

    def __init__(self, label=None, validators=None, message="Invalid date", **kwargs):
        super().__init__(label, validators, format="%Y-%m-%d", **kwargs)
        self.invalid_message = message

    def process_formdata(self, valuelist):
        try:
            super().process_formdata([value.strip() for value in valuelist])
        except ValueError:
            raise ValueError(self.invalid_message) from None


class IdListField(Field):
    """
    Collects every submitted value for a repeated key (e.g. checkboxes).
    """

    def process_formdata(self, valuelist):
        cleaned = (escape_markup(strip_whitespace(value)) for value in valuelist)
        self.data = [value for value in cleaned if value]

    def _value(self):
        return self.data or []


class AuthorForm(FlaskForm):
    first_name = TextField("First name", validators=[
        DataRequired("First name must be specified."),
        Length(max=100, message="First name must be at most 100 characters."),
        Regexp(ALPHANUMERIC, message="First name has non-alphanumeric characters."),
    ])
    family_name = TextField("Family name", validators=[
        DataRequired("Family name must be specified."),
        Length(max=100, message="Family name must be at most 100 characters."),
        Regexp(ALPHANUMERIC, message="Family name has non-alphanumeric characters."),
    ])
    date_of_birth = ISODateField("Date of birth", validators=[Optional()], message="Invalid date of birth")
    date_of_death = ISODateField("Date of death", validators=[Optional()], message="Invalid date of death")


class BookForm(FlaskForm):
    title = TextField("Title", validators=[
        DataRequired("Title must not be empty."),
        Length(max=200, message="Title must be at most 200 characters."),
    ])
    author = TextField("Author", validators=[DataRequired("Author must not be empty.")])
    summary = TextBlockField("Summary", validators=[Optional()])
    isbn = TextField("ISBN", validators=[
        DataRequired("ISBN must not be empty"),
        Length(max=40, message="ISBN must be at most 40 characters."),
    ])
    genre = IdListField("Genre", default=list)


class GenreForm(FlaskForm):
    name = TextField("Genre", validators=[
        DataRequired("Genre name required"),
        Length(max=100, message="Genre name must be at most 100 characters."),
    ])


class BookInstanceForm(FlaskForm):
    book = TextField("Book", validators=[DataRequired("Book must be specified")])
    imprint = TextField("Imprint", validators=[
        DataRequired("Imprint must be specified"),
        Length(max=200, message="Imprint must be at most 200 characters."),
    ])
    status = SelectField(
        "Status",
        choices=BookStatus.values(),
        default=BookStatus.MAINTENANCE.value,
    )
    due_back = ISODateField("Date when book available", validators=[Optional()], message="Invalid date")


def field_errors(form) -> list[FieldError]:
    """Errors in field declaration order, one entry per failed rule."""
    return [FieldError(field.name, message) for field in form for message in field.errors]


def sanitized_data(form) -> dict:
    return {name: value for name, value in form.data.items() if name != "csrf_token"}


def run_validation(form) -> tuple[dict, list[FieldError]]:
    """
    Run the form's validation chain.

    Returns:
        (sanitised values, errors). Errors is empty when the input is valid.
    """
    form.validate()
    return sanitized_data(form), field_errors(form)
