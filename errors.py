"""Error taxonomy of the API and the handlers that render it as JSON."""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from extensions import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class: every API failure carries a status code and a message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid input"


class Conflict(ApiError):
    status_code = 400
    message = "Username or email already exists"


class InvalidCredentials(ApiError):
    status_code = 400
    message = "Invalid credentials"


class AlreadySubscribed(ApiError):
    status_code = 400
    message = "Festival already subscribed"


class Unauthorized(ApiError):
    status_code = 401
    message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    message = "Access denied. Administrator rights required."


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class ServerError(ApiError):
    status_code = 500


def error_response(message: str, status_code: int):
    return jsonify(error=message), status_code


def register_error_handlers(app) -> None:
    """Render every failure as ``{"error": message}`` with its status code."""

    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        if exc.status_code >= 500:
            db.session.rollback()
            logger.error("Server error: %s", exc.message)
        return error_response(exc.message, exc.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        db.session.rollback()
        logger.exception("Unhandled error")
        return error_response(ServerError.message, ServerError.status_code)
