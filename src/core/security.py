"""JWT access tokens.

Tokens carry the user id and role; the role is informational only, since
the access control layer always re-reads it from the database.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from jose import JWTError, jwt

from config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET_KEY
from core.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token, normally ``{"id", "role"}``.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    expire = datetime.now(pytz.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """Verify a JWT access token.

    Args:
        token: Encoded token from the Authorization header.

    Returns:
        Decoded token payload.

    Raises:
        UnauthenticatedError: If the token is malformed, expired, signed with
            another key or has no ``id`` claim.
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        raise UnauthenticatedError("Non autorisé - Token invalide") from e
    if not payload.get("id"):
        raise UnauthenticatedError("Non autorisé - Token invalide")
    return payload


def issue_token_for(user) -> str:
    """Mint a token for a ``schemas.user.User``."""
    return create_access_token({"id": user.user_id, "role": user.role})
