"""
Credential store — persisted user records.

Uniqueness of ``username`` and ``email`` is enforced by the table's unique
constraints; the pre-insert lookup only gives the common case a clean
error before hitting the database constraint.  After an ``IntegrityError``
the session must be rolled back, which ``get_db_session`` does when the
resulting ``ConflictError`` propagates.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import ConflictError
from utils.validators import is_email

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Look up by email when *identifier* looks like one, else by username."""
        column = User.email if is_email(identifier) else User.username
        result = await self._session.execute(select(User).where(column == identifier))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        try:
            uid = uuid.UUID(user_id) if isinstance(user_id, str) else user_id
        except ValueError:
            return None
        return await self._session.get(User, uid)

    async def exists(self, username: str, email: str) -> bool:
        """True when either *username* or *email* is already registered."""
        result = await self._session.execute(
            select(User.user_id).where(or_(User.email == email, User.username == username))
        )
        return result.first() is not None

    async def create(self, username: str, email: str, password_hash: str) -> User:
        if await self.exists(username, email):
            raise ConflictError("User already exists")

        user = User(
            user_id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            logger.info("Concurrent signup collision for %s / %s", username, email)
            raise ConflictError("User already exists") from exc
        return user

    async def save(self, user: User) -> User:
        """Flush pending changes on an existing *user*."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("Username already taken") from exc
        return user
