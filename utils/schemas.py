"""
Pydantic schemas for the HTTP API.

Request bodies are intentionally loose (``Any``) where the handlers run
their own validators, so clients get the field-specific messages from
``utils.validators`` instead of a generic schema error.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    username: Any = None
    email: Any = None
    password: Any = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_or_username: Any = Field(default=None, alias="emailOrUsername")
    password: Any = None


class PublicUser(BaseModel):
    username: str
    email: str
    id: str


class LoginResponse(BaseModel):
    token: str
    user: PublicUser


class SignupResponse(LoginResponse):
    message: str = "User registered successfully"


class MessageResponse(BaseModel):
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# Profile
# ═══════════════════════════════════════════════════════════════════════════════


class ProfileResponse(BaseModel):
    name: str = ""
    username: str
    codeforces: str = ""
    codechef: str = ""
    leetcode: str = ""
    email: str


class ProfileUpdateRequest(BaseModel):
    """
    Partial profile update.

    Only keys the client actually sent are applied (see
    ``model_dump(exclude_unset=True)``); an empty string clears a field.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    codeforces: Optional[str] = None
    codechef: Optional[str] = None
    leetcode: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Goals
# ═══════════════════════════════════════════════════════════════════════════════


class GoalRequest(BaseModel):
    title: Any = None
    target_count: Any = None
    target_date: Any = None


class GoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(validation_alias=AliasChoices("goal_id", "id"))
    user: uuid.UUID = Field(validation_alias=AliasChoices("user_id", "user"))
    title: str
    target_count: int
    target_date: str
    current_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GoalDeleted(BaseModel):
    message: str = "Goal deleted"
    id: str


# ═══════════════════════════════════════════════════════════════════════════════
# Problems
# ═══════════════════════════════════════════════════════════════════════════════


class ProblemRequest(BaseModel):
    title: Any = None
    platform: Any = None
    link: Any = None
    difficulty: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[str] = None
    notes: Optional[str] = None


class ProblemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(validation_alias=AliasChoices("problem_id", "id"))
    title: str
    platform: str
    difficulty: Optional[str] = None
    status: Optional[str] = None
    link: Optional[str] = None
    tags: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

