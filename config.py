"""
Configuration for the LocalLibrary catalog.

Environment variables are parsed here and nowhere else; `build_config()`
turns them into the mapping loaded into `app.config`.
"""

import os

basedir = os.path.abspath(os.path.dirname(__file__))

DEFAULT_DATABASE_URI = f"sqlite:///{os.path.join(basedir, 'data', 'library.sqlite')}"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_STORE_WORKERS = 4
_TRUE = {"1", "true", "yes", "on"}


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def database_uri() -> str:
    return os.getenv("CATALOG_DATABASE_URI") or DEFAULT_DATABASE_URI


def log_level_name() -> str:
    return (os.getenv("CATALOG_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def build_config(overrides: dict | None = None) -> dict:
    """
    Collect the Flask config for one application instance.

    Args:
        overrides (dict): values applied last, e.g. from tests.

    Returns:
        dict: ready for `app.config.update()`.
    """
    config = {
        "SECRET_KEY": os.getenv("CATALOG_SECRET_KEY", "dev-secret-key"),   # dev only
        "SQLALCHEMY_DATABASE_URI": database_uri(),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "CATALOG_LOG_LEVEL": log_level_name(),
        "STORE_MAX_WORKERS": env_int("CATALOG_STORE_WORKERS", DEFAULT_STORE_WORKERS),
        "SUMMARY_LOOKUP_ENABLED": env_bool("CATALOG_SUMMARY_LOOKUP", True),
        "WTF_CSRF_ENABLED": env_bool("CATALOG_CSRF_ENABLED", True),
    }
    if overrides:
        config.update(overrides)
    return config
