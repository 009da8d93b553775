"""
Error Handler Middleware
Centralized translation of registry and HTTP errors into JSON responses
"""

import logging
import traceback
from flask import request
from werkzeug.exceptions import HTTPException

from provenance.api.middleware.response_middleware import response_middleware
from provenance.core.exceptions import AuthError, RegistryError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def init_app(app):
        """Initialize error handlers for Flask app"""

        # Authentication errors
        @app.errorhandler(AuthError)
        def handle_auth_error(error):
            logger.warning(f"Authentication error: {str(error)} - {request.path}")
            return response_middleware.create_error_response(str(error), 401, error_type='AuthError')

        # Rejected registry calls
        @app.errorhandler(RegistryError)
        def handle_registry_error(error):
            # Services log the rejection itself
            logger.info(f"{type(error).__name__}: {error.message} - {request.method} {request.path}")
            return response_middleware.create_error_response(
                error.message, error.status_code, error_type=type(error).__name__
            )

        # HTTP exceptions
        @app.errorhandler(HTTPException)
        def handle_http_exception(error):
            logger.info(f"HTTP {error.code}: {request.path}")
            return response_middleware.create_error_response(error.description, error.code, error_type=error.name)

        # Generic exception handler
        @app.errorhandler(Exception)
        def handle_unexpected_error(error):
            logger.error(f"Unexpected error: {str(error)}")
            logger.error(traceback.format_exc())

            if app.config.get('DEBUG'):
                return response_middleware.create_error_response(
                    str(error), 500, details={'traceback': traceback.format_exc()},
                    error_type=type(error).__name__
                )
            return response_middleware.create_error_response('An unexpected error occurred', 500)


error_handler = ErrorHandler()
