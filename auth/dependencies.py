"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_auth_service``, ``get_current_identity`` and
``get_current_user_id`` dependencies that are used across all protected
routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from auth.models import Identity
from auth.service import AuthService
from database.session import get_db_session
from utils.errors import MissingTokenError

# auto_error=False: a missing header must become MissingTokenError (401),
# not FastAPI's own 403.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_auth_service(
    session: AsyncSession = Depends(db_session),
) -> AuthService:
    return AuthService(session)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Identity:
    """
    Extract and verify the Bearer token, returning the identity embedded
    in it.  The user record is not re-checked.
    """
    if credentials is None:
        raise MissingTokenError()
    return verify_token(credentials.credentials)


async def get_current_user_id(
    identity: Identity = Depends(get_current_identity),
) -> str:
    return identity.user_id
