"""Bearer token minting and verification (JWT, HS256).

Tokens are single-shot: they expire after JWT_EXPIRATION_DAYS and there is
no refresh token. An expired session requires a new login.
"""

import logging
import os
import uuid
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from domain.model.errors import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))


def create_access_token(user_id: str) -> str:
    """Create JWT access token for user.

    Every call yields a distinct token (unique `jti`), even within the
    same second for the same user.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(days=JWT_EXPIRATION_DAYS),
        "iat": now,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Verify JWT token and return the user_id it was issued for.

    Raises:
        ExpiredTokenError: signature valid but `exp` has passed
        InvalidTokenError: bad signature, malformed token or missing subject
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.debug("JWT expired")
        raise ExpiredTokenError()
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        raise InvalidTokenError()

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError()
    return user_id
