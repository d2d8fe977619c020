"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying ``userId``, ``username``, ``iat`` and
``exp``.  The secret comes from ``config.resolve_jwt_secret()`` (env var:
``JWT_SECRET``).  There is no refresh and no server-side revocation: a token
stays valid until its ``exp``.
"""

from __future__ import annotations

import logging
import time

import jwt

from auth.models import Identity
from config.settings import config
from utils.errors import ExpiredTokenError, InvalidTokenError, MissingTokenError

logger = logging.getLogger(__name__)


def create_token(
    user_id: str,
    username: str,
    *,
    expires_in: int | None = None,
) -> str:
    """Create a signed token for ``user_id`` / ``username``."""
    now = int(time.time())
    lifetime = config.jwt_expiry_seconds if expires_in is None else expires_in
    payload = {
        "userId": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, config.resolve_jwt_secret(), algorithm=config.jwt_algorithm)


def verify_token(token: str | None) -> Identity:
    """
    Verify *token* and return the identity it carries.

    Raises ``MissingTokenError`` for an empty token, ``ExpiredTokenError``
    past ``exp`` and ``InvalidTokenError`` for anything else that fails.
    """
    if not token:
        raise MissingTokenError()
    try:
        payload = jwt.decode(
            token,
            config.resolve_jwt_secret(),
            algorithms=[config.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        logger.info("Rejected expired token")
        raise ExpiredTokenError() from exc
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected invalid token: %s", exc)
        raise InvalidTokenError() from exc

    user_id = payload.get("userId")
    username = payload.get("username")
    if not isinstance(user_id, str) or not isinstance(username, str):
        logger.warning("Rejected token with malformed claims")
        raise InvalidTokenError()
    return Identity(user_id=user_id, username=username)
