"""This module re-exports the User model from the database package and defines
the identity carried by a verified token.
"""

from dataclasses import dataclass

from database.models import User  # noqa: F401

__all__ = ["Identity", "User"]


@dataclass(frozen=True)
class Identity:
    """Who a verified bearer token speaks for."""

    user_id: str
    username: str
