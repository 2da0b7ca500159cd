"""Tests for the book copy views."""
from __future__ import annotations

from datetime import date

from data_models import BookInstance, BookStatus


def test_create_form_lists_books(client, library):
    body = client.get("/catalog/bookinstance/create").get_data(as_text=True)
    assert f'value="{library["book"]}"' in body
    assert "Maintenance" in body


def test_create_defaults_due_back_to_today(client, library, fetch):
    resp = client.post("/catalog/bookinstance/create", data={
        "book": library["book"],
        "imprint": "Second edition",
        "status": "Loaned",
        "due_back": "",
    })
    assert resp.status_code == 302

    copy = fetch(BookInstance, resp.headers["Location"].rsplit("/", 1)[-1])
    assert copy.status is BookStatus.LOANED
    assert copy.due_back == date.today()
    assert copy.book_id == library["book"]


def test_create_with_unknown_status_rerenders_form(client, library, app, store):
    resp = client.post("/catalog/bookinstance/create", data={
        "book": library["book"],
        "imprint": "Second edition",
        "status": "Lost",
    })
    assert resp.status_code == 200
    assert 'data-field="status"' in resp.get_data(as_text=True)
    with app.app_context():
        assert store.count(BookInstance) == 1


def test_detail_names_the_book(client, library):
    resp = client.get(f"/catalog/bookinstance/{library['copy']}")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Copy: X" in body
    assert "First edition" in body


def test_detail_for_unknown_copy_is_not_found(client):
    resp = client.get("/catalog/bookinstance/missing")
    assert resp.status_code == 404
    assert "Book copy not found" in resp.get_data(as_text=True)


def test_list(client, library):
    body = client.get("/catalog/bookinstances").get_data(as_text=True)
    assert "X : First edition" in body


def test_delete_is_unconditional(client, library, fetch):
    assert client.get(f"/catalog/bookinstance/{library['copy']}/delete").status_code == 200

    resp = client.post(f"/catalog/bookinstance/{library['copy']}/delete")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/bookinstances")
    assert fetch(BookInstance, library["copy"]) is None


def test_delete_form_for_missing_copy_redirects(client):
    resp = client.get("/catalog/bookinstance/missing/delete")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/bookinstances")


def test_update(client, library, fetch):
    form = client.get(f"/catalog/bookinstance/{library['copy']}/update").get_data(as_text=True)
    assert 'value="First edition"' in form

    resp = client.post(f"/catalog/bookinstance/{library['copy']}/update", data={
        "book": library["book"],
        "imprint": "Reprint",
        "status": "Reserved",
        "due_back": "2026-12-24",
    })
    assert resp.status_code == 302
    copy = fetch(BookInstance, library["copy"])
    assert copy.imprint == "Reprint"
    assert copy.status is BookStatus.RESERVED
    assert copy.due_back == date(2026, 12, 24)


def test_update_of_missing_copy_is_not_found(client):
    assert client.get("/catalog/bookinstance/missing/update").status_code == 404
