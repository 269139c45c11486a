"""Error handlers for the application.

Everything outside the use case pipeline (routing errors, malformed bodies,
uncaught exceptions) still answers JSON in the same shape as dispatch().
"""
import logging

from werkzeug.exceptions import HTTPException

from backoffice.api.dispatch import OPAQUE_SERVER_ERROR, error_response

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        return error_response(400, getattr(error, "description", None) or "Bad request")

    @app.errorhandler(401)
    def unauthorized(error):
        """Handle 401 Unauthorized errors."""
        return error_response(401, "Authentication required")

    @app.errorhandler(403)
    def forbidden(error):
        """Handle 403 Forbidden errors."""
        return error_response(403, "Insufficient permissions")

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        return error_response(404, "Resource not found")

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response(405, "Method not allowed")

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error."""
        # ALWAYS log the full error (even in production) - logs are secure
        logger.error("Internal error: %s", error, exc_info=True)
        return error_response(500, OPAQUE_SERVER_ERROR)

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Pass through HTTP errors
        if isinstance(error, HTTPException):
            return error_response(error.code or 500, error.description or "Error")

        logger.error("Unhandled exception: %s", error, exc_info=True)
        return error_response(500, OPAQUE_SERVER_ERROR)
