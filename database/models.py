"""
SQLAlchemy ORM models for users, goals and the problem log.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship

# Column sizes, shared with utils.validators so input is rejected before
# the database would refuse it.
USERNAME_MAX = 64
EMAIL_MAX = 255
NAME_MAX = 128
HANDLE_MAX = 255
GOAL_TITLE_MAX = 255
TARGET_DATE_MAX = 32
PROBLEM_TITLE_MAX = 255
PLATFORM_MAX = 64
LABEL_MAX = 32
INT32_MAX = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(USERNAME_MAX), unique=True, nullable=False)
    email = Column(String(EMAIL_MAX), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Profile fields are optional; "" is a legitimate stored value
    name = Column(String(NAME_MAX), nullable=True)
    codeforces = Column(String(HANDLE_MAX), nullable=True)
    codechef = Column(String(HANDLE_MAX), nullable=True)
    leetcode = Column(String(HANDLE_MAX), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan")

    def public_view(self) -> dict:
        """The only user shape that leaves the server after auth calls."""
        return {
            "username": self.username,
            "email": self.email,
            "id": str(self.user_id),
        }


class Goal(Base):
    __tablename__ = "goals"

    goal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    title = Column(String(GOAL_TITLE_MAX), nullable=False)
    target_count = Column(Integer, nullable=False)
    target_date = Column(String(TARGET_DATE_MAX), nullable=False)
    current_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user = relationship("User", back_populates="goals")

    __table_args__ = (
        Index("ix_goals_user", "user_id"),
    )


class Problem(Base):
    __tablename__ = "problems"

    problem_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(PROBLEM_TITLE_MAX), nullable=False)
    platform = Column(String(PLATFORM_MAX), nullable=False)
    difficulty = Column(String(LABEL_MAX))
    status = Column(String(LABEL_MAX))
    link = Column(Text)
    tags = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
