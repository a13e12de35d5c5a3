"""
JWT utilities for issuing and verifying access tokens.

Functions
---------
create_access_token(data: dict, expires_minutes: int | None = None) -> str
    Creates a signed JWT access token with an expiration (`exp`) claim.
verify_token(token: str) -> dict | None
    Verify a JWT's signature & expiration and return its claims if valid.

Environment contract (from `settings`)
--------------------------------------
SECRET_KEY : str
    HMAC signing key for JWTs.
ALGORITHM : str
    JWT signing algorithm (e.g., "HS256").
ACCESS_TOKEN_EXPIRE_MINUTES : int
    Token lifetime window in minutes (7 days by default).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt

from techmatch.database.config.config import settings

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed JWT access token.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (``sub``, ``email``, ``name``, ``role``).
    expires_minutes : int | None
        Lifetime override; defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``.

    Returns
    -------
    str
        Encoded JWT string.
    """
    lifetime = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    encoding = data.copy()
    # exp is a NumericDate (seconds since epoch)
    expires = int(datetime.now(timezone.utc).timestamp()) + int(lifetime) * 60
    encoding.update({"exp": expires})
    return jwt.encode(encoding, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """
    Verify a JWT and return its claims.

    Returns
    -------
    dict | None
        The decoded payload if the signature and expiration check out,
        otherwise None.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Rejected session token: %s", e)
        return None
