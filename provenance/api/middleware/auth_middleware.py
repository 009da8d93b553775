"""
Authentication Middleware
Resolves the caller identity from a bearer token; authorization happens in the services
"""

import logging
from functools import wraps
from flask import request, current_app, g

from provenance.core.exceptions import AuthError
from provenance.utils.identity import to_identity
from provenance.utils.token_utils import verify_token

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Middleware for authentication - token handling only"""

    @staticmethod
    def extract_token() -> str:
        """
        Extract JWT token from Authorization header

        Returns:
            Token string

        Raises:
            AuthError: If no token found
        """
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            raise AuthError("No authorization header")

        parts = auth_header.split(' ')
        if len(parts) != 2 or parts[0].lower() != 'bearer':
            raise AuthError("Invalid authorization header format")

        return parts[1]

    @staticmethod
    def current_identity() -> str:
        """Verify the request's token and return the caller's account address"""
        token = AuthMiddleware.extract_token()
        payload = verify_token(token, current_app.config.get('JWT_SECRET_KEY'))

        identity = to_identity(payload.get('sub'))
        if identity is None:
            raise AuthError("Token subject is not a valid account address")
        return identity

    @staticmethod
    def identity_required(f):
        """Decorator passing the authenticated caller address as the first view argument"""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            caller = AuthMiddleware.current_identity()
            g.caller = caller
            return f(caller, *args, **kwargs)

        return decorated_function


auth_middleware = AuthMiddleware()
