"""Error handlers for the application.

Every error leaves the service as a response envelope so callers only ever
parse one shape: ``{"errorCode": int, "errorMessage": str}``.
"""
from flask import jsonify
from werkzeug.exceptions import HTTPException

from rbac_gateway.core.errors import (
    INTERNAL_ERROR,
    MALFORMED_REQUEST,
    UNAUTHORIZED,
    UNKNOWN_OPERATION,
)


def envelope_error(status: int, code: int, message: str):
    """Create an error envelope response tuple for route handlers.

    Args:
        status: HTTP status code
        code: Gateway error code
        message: Human-readable error description

    Returns:
        Tuple of (JSON response, status code)
    """
    return jsonify({"errorCode": code, "errorMessage": message}), status


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        return envelope_error(400, MALFORMED_REQUEST, _description(error, "Bad request"))

    @app.errorhandler(401)
    def unauthorized(error):
        """Handle 401 Unauthorized errors."""
        return envelope_error(401, UNAUTHORIZED, "Authentication required")

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        return envelope_error(404, UNKNOWN_OPERATION, "Resource not found")

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 Method Not Allowed errors."""
        return envelope_error(405, UNKNOWN_OPERATION, _description(error, "Method not allowed"))

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error."""
        app.logger.error(f"Internal error: {error}", exc_info=True)
        return envelope_error(500, INTERNAL_ERROR, "An unexpected error occurred")

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Pass through HTTP errors
        if isinstance(error, HTTPException):
            return error

        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return envelope_error(500, INTERNAL_ERROR, "An unexpected error occurred")


def _description(error, default: str) -> str:
    description = getattr(error, "description", None)
    return str(description) if description else default
