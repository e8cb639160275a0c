"""API error types and their JSON rendering."""

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .extensions import db
from .logger import get_logger

log = get_logger("errors")


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(ApiError):
    """Missing or malformed request data."""

    status_code = 400


class NotFound(ApiError):
    status_code = 404


class DomainRuleError(ApiError):
    """The request is well formed but breaks a category/transaction rule."""

    status_code = 400


def validation_message(exc: ValidationError) -> str:
    """Flatten a pydantic error into a single readable line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "invalid value")
        # pydantic prefixes custom ValueError messages
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid input"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        db.session.rollback()
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        db.session.rollback()
        log.exception("Unhandled error while serving request")
        return jsonify({"error": "Internal server error"}), 500
