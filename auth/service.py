"""
Auth service — register, login, profile read and profile update.

The service owns the rules; ``auth.routes`` and ``api.routes`` only adapt
HTTP bodies to these calls.  Every failure is raised as one of the
``utils.errors`` types.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import create_token
from auth.models import User
from auth.password import hash_password_async, verify_password_async
from database.users import UserStore
from utils.errors import AuthError, ConflictError, NotFoundError, ValidationError
from utils.validators import (
    check_new_password,
    check_username,
    validate_login,
    validate_profile_patch,
    validate_signup,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "codeforces", "codechef", "leetcode")


def profile_view(user: User) -> Dict[str, str]:
    return {
        "name": user.name or "",
        "username": user.username,
        "codeforces": user.codeforces or "",
        "codechef": user.codechef or "",
        "leetcode": user.leetcode or "",
        "email": user.email,
    }


class AuthService:
    def __init__(self, session: AsyncSession) -> None:
        self.users = UserStore(session)

    async def register(self, username: Any, email: Any, password: Any) -> Tuple[User, str]:
        """Create a user and return it with a fresh token."""
        validate_signup(username, email, password)
        if await self.users.exists(username, email):
            raise ConflictError("User already exists")

        password_hash = await hash_password_async(password)
        user = await self.users.create(username, email, password_hash)

        token = create_token(str(user.user_id), user.username)
        logger.info("Registered user %s (%s)", user.username, user.user_id)
        return user, token

    async def login(self, identifier: Any, password: Any) -> Tuple[User, str]:
        """
        Authenticate by email or username.

        Unknown identifiers and wrong passwords raise the same
        ``AuthError`` so callers cannot tell which accounts exist.
        """
        validate_login(identifier, password)

        user = await self.users.find_by_identifier(identifier)
        if user is None or not await verify_password_async(password, user.password_hash):
            raise AuthError("Invalid credentials")

        token = create_token(str(user.user_id), user.username)
        logger.info("Login: %s (%s)", user.username, user.user_id)
        return user, token

    async def get_profile(self, user_id: str) -> Dict[str, str]:
        user = await self._require_user(user_id)
        return profile_view(user)

    async def update_profile(self, user_id: str, patch: Mapping[str, Any]) -> Dict[str, str]:
        """
        Apply a partial update.

        *patch* holds only the keys the client sent; ``None`` values are
        treated as absent.  A password change needs ``old_password`` to
        match the stored digest, otherwise nothing is written.
        """
        user = await self._require_user(user_id)
        patch = {key: value for key, value in patch.items() if value is not None}
        validate_profile_patch(patch)

        new_password = patch.get("password")
        if new_password:
            old_password = patch.get("old_password")
            if not old_password:
                raise ValidationError("Old password is required to change password.")
            if not await verify_password_async(old_password, user.password_hash):
                raise AuthError("Old password is incorrect.")
            check_new_password(new_password)

        new_username = patch.get("username")
        if new_username and new_username != user.username:
            user.username = check_username(new_username)

        for field in PROFILE_FIELDS:
            if field in patch:
                setattr(user, field, patch[field])

        if new_password:
            user.password_hash = await hash_password_async(new_password)

        await self.users.save(user)
        logger.info("Profile updated for %s", user.user_id)
        return profile_view(user)

    async def _require_user(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
