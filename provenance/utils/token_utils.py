import jwt
import logging
from datetime import datetime, timedelta, timezone

from provenance.core.exceptions import AuthError

JWT_ALGORITHM = "HS256"
TOKEN_EXPIRY_HOURS = 24

logger = logging.getLogger(__name__)


def generate_token(identity: str, secret: str, expiry_hours: int = TOKEN_EXPIRY_HOURS) -> str:
    """
    Generate a JWT whose subject is the caller's account address

    Args:
        identity: Account address the token authenticates
        secret: Signing secret (JWT_SECRET_KEY)
        expiry_hours: Token lifetime

    Returns:
        JWT token string
    """
    if not secret:
        raise AuthError("JWT_SECRET_KEY not configured")

    now = datetime.now(timezone.utc)
    payload = {
        'sub': identity,
        'iat': now,
        'exp': now + timedelta(hours=expiry_hours)
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> dict:
    """Verify and decode JWT token"""
    if not secret:
        raise AuthError("JWT_SECRET_KEY not configured")

    if token.startswith('Bearer '):
        token = token[7:]

    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise AuthError("Invalid token")
