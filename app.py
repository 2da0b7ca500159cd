"""
LocalLibrary - a server-rendered library catalog built with Flask and SQLAlchemy.

Features:
- Authors, books, genres and book copies with list / detail / create / update / delete views
- Form validation and sanitising (Flask-WTF) with errors shown inline
- Authors cannot be deleted while they have books, books while they have copies
- Genre names kept unique by redirecting to the existing genre
- Book summaries fetched from Open Library by ISBN when left empty
"""

import time

from flask import Flask, g, redirect, request, url_for
from flask_wtf import CSRFProtect
from markupsafe import Markup

from app_logging import get_logger, set_level
from config import build_config
from errors import register_error_handlers
from routes import build_catalog_blueprint
from store import CatalogStore, get_store

csrf = CSRFProtect()


def sanitized(value):
    """
    Mark a stored value as safe: text is escaped once, when the form is validated.
    """
    return Markup("" if value is None else value)


def home():
    return redirect(url_for("catalog.index"))


def register_request_logging(app, logger):

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info("%s %s %s %.1f ms", request.method, request.full_path.rstrip("?"), response.status_code, elapsed)
        return response


def create_app(config_overrides=None, store=None):
    """
    Build the application and open its store.

    Args:
        config_overrides (dict): applied on top of the environment-derived config.
        store (CatalogStore): injected store; a new one is created when omitted.

    The caller owns the store's lifetime: `get_store(app).close()` at shutdown.
    """
    app = Flask(__name__)
    app.config.update(build_config(config_overrides))
    logger = get_logger("catalog")
    set_level(app.config["CATALOG_LOG_LEVEL"])

    csrf.init_app(app)

    store = store or CatalogStore(max_workers=app.config["STORE_MAX_WORKERS"])
    store.open(app)

    app.register_blueprint(build_catalog_blueprint(store))
    app.add_url_rule("/", "home", home)
    app.add_template_filter(sanitized)
    register_error_handlers(app)
    register_request_logging(app, logger)
    return app


if __name__ == "__main__":
    app = create_app()
    try:
        app.run(debug=True)
    finally:
        get_store(app).close()
