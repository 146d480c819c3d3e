"""Error taxonomy shared by the service layer and the HTTP handlers.

Services raise these; ``register_error_handlers`` renders them as JSON with
the matching status code. Anything else that escapes a request is logged with
its traceback and answered with an opaque 500.
"""
import logging

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db

logger = logging.getLogger(__name__)


class BudgetAppError(Exception):
    status_code = 500
    title = "Internal server error"
    default_message = "An unexpected error occurred"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.title, "message": self.message}


class ValidationError(BudgetAppError):
    status_code = 400
    title = "Validation error"
    default_message = "Invalid request"

    def __init__(self, field, message=None):
        self.field = field
        super().__init__(message)

    def to_dict(self):
        payload = super().to_dict()
        if self.field:
            payload["field"] = self.field
        return payload


class AuthenticationError(BudgetAppError):
    status_code = 401
    title = "Unauthorized"
    default_message = "You must be logged in to access this resource"


class NotFoundError(BudgetAppError):
    status_code = 404
    title = "Not found"
    default_message = "Resource not found"


class AuthorizationError(NotFoundError):
    """Caller does not own the row. Rendered exactly like NotFoundError."""


class ConflictError(BudgetAppError):
    status_code = 409
    title = "Conflict"
    default_message = "The resource already exists"


class InternalError(BudgetAppError):
    status_code = 500
    title = "Internal server error"


def register_error_handlers(app):
    @app.errorhandler(BudgetAppError)
    def handle_app_error(exc):
        if isinstance(exc, AuthorizationError):
            logger.debug("Ownership check failed on %s %s", request.method, request.path)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.name, "message": exc.description}), exc.code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(exc):
        db.session.rollback()
        logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify(InternalError().to_dict()), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(InternalError().to_dict()), 500
