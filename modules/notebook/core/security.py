"""
Security Utilities.

Verification of access tokens issued by the external auth provider.
Sign-up, sign-in and session refresh live with that provider; this
service only needs to turn a bearer token into an owner id.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from modules.notebook.core.config import get_app_config, get_settings
from modules.notebook.core.exceptions import AuthenticationError
from modules.notebook.core.logging import get_logger
from modules.notebook.core.utils import utc_now

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token in the auth provider's format.

    Used by local tooling and tests; production tokens come from the
    provider itself.

    Args:
        data: Payload data to encode (must include "sub")
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def owner_id_from_token(token: str | None) -> str | None:
    """
    Resolve the owner id carried by a bearer token.

    Returns None when the token is missing, invalid, expired or has no
    subject. Callers treat None as "not authenticated".
    """
    if not token:
        return None
    try:
        payload = decode_token(token)
    except AuthenticationError:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None
