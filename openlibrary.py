"""
Book summary lookup against Open Library, by ISBN.
"""

import requests

from app_logging import get_logger

logger = get_logger("catalog.openlibrary")

OPENLIBRARY_URL = "https://openlibrary.org"
TIMEOUT = 8

# Reuse one HTTP session for better performance and to set consistent headers.
SESSION = requests.Session()
SESSION.headers.update({
    "User-Agent": "LocalLibrary/1.0 (catalog)",
    "Accept": "application/json",
})


def normalize_isbn(isbn: str) -> str:
    """
    Normalize ISBN input by removing hyphens and spaces.
    """
    return (isbn or "").replace("-", "").replace(" ", "").strip()


def extract_summary(data: dict) -> str | None:
    """
    Extracts a book summary from an Open Library JSON object.

    The "description" field is either a plain string or a dictionary
    containing a "value" key.

    Returns:
        str or None: The extracted summary text, or None if no summary exists.
    """
    desc = data.get("description")

    if isinstance(desc, str):
        desc = desc.strip()
        return desc if desc else None

    if isinstance(desc, dict):
        val = (desc.get("value") or "").strip()
        return val if val else None

    return None


def _get_json(url: str) -> dict | None:
    try:
        r = SESSION.get(url, timeout=TIMEOUT)
        if r.status_code != 200:
            logger.info("open library returned %s for %s", r.status_code, url)
            return None
        return r.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("open library request failed for %s: %s", url, exc)
        return None


def fetch_summary_by_isbn(isbn: str) -> str | None:
    """
    Fetch a book summary from Open Library using ISBN.

    Strategy:
    1) Try edition endpoint: (/isbn/{isbn}.json)
    2) If missing, fallback to the linked Work: /works/{id}.json
    """
    isbn = normalize_isbn(isbn)
    if not isbn:
        return None

    edition = _get_json(f"{OPENLIBRARY_URL}/isbn/{isbn}.json")
    if not edition:
        return None

    summary = extract_summary(edition)
    if summary:
        return summary

    works = edition.get("works") or []
    if works and isinstance(works, list) and isinstance(works[0], dict) and "key" in works[0]:
        work = _get_json(f"{OPENLIBRARY_URL}{works[0]['key']}.json")
        if work:
            return extract_summary(work)

    return None
