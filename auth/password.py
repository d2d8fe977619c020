"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a work
factor taken from ``config.bcrypt_rounds``.  bcrypt is deliberately slow,
so async callers go through ``hash_password_async`` /
``verify_password_async``, which run it via ``asyncio.to_thread()`` and
never block the event loop.
"""

from __future__ import annotations

import asyncio

import bcrypt

from config.settings import config


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
