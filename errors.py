"""
Error types and the application-level fallback handlers.
"""

from flask import jsonify, render_template
from werkzeug.exceptions import HTTPException, NotFound

from app_logging import get_logger

logger = get_logger("catalog.errors")

NOT_FOUND_MESSAGE = "We couldn't find what you were looking for 😞"


class DocumentNotFound(NotFound):
    """A catalog document with the requested identity does not exist."""

    def __init__(self, entity: str, doc_id=None):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.doc_id = doc_id


def register_error_handlers(app):

    @app.errorhandler(DocumentNotFound)
    def document_not_found(error):
        logger.info("%s (id=%s)", error.description, error.doc_id)
        return render_template("error.html", title=error.description, message=error.description), 404

    @app.errorhandler(404)
    def route_not_found(error):
        return jsonify({"message": NOT_FOUND_MESSAGE}), 404

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def unhandled_error(error):
        logger.exception("unhandled error: %s", error)
        body = {
            "message": "Something went wrong while handling the request.",
            "error": {"type": type(error).__name__, "detail": str(error)},
        }
        return jsonify(body), 500
