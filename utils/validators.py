"""
Request validators for auth, profile, goal and problem payloads.

Each ``validate_*`` function checks fields in a fixed order and raises
``ValidationError`` with the message of the first field that fails.
Upper bounds follow the column sizes in ``database.models``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from database.models import (
    EMAIL_MAX,
    GOAL_TITLE_MAX,
    HANDLE_MAX,
    INT32_MAX,
    LABEL_MAX,
    NAME_MAX,
    PLATFORM_MAX,
    PROBLEM_TITLE_MAX,
    TARGET_DATE_MAX,
    USERNAME_MAX,
)
from utils.errors import ValidationError

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
URL_RE = re.compile(r"^https?://")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit

USERNAME_MESSAGE = f"Username must be at least {MIN_USERNAME_LENGTH} characters."
EMAIL_MESSAGE = "A valid email is required."
PASSWORD_MESSAGE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."

PROFILE_LIMITS = {
    "name": ("Name", NAME_MAX),
    "codeforces": ("Codeforces handle", HANDLE_MAX),
    "codechef": ("CodeChef handle", HANDLE_MAX),
    "leetcode": ("LeetCode handle", HANDLE_MAX),
}


def is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_RE.match(value) is not None


def _is_text(value: Any) -> bool:
    """Non-empty string once surrounding whitespace is stripped."""
    return isinstance(value, str) and bool(value.strip())


def check_max_length(value: str, limit: int, label: str) -> str:
    if len(value) > limit:
        raise ValidationError(f"{label} must be at most {limit} characters.")
    return value


def check_username(username: Any) -> str:
    if not isinstance(username, str) or len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(USERNAME_MESSAGE)
    return check_max_length(username, USERNAME_MAX, "Username")


def check_password(password: Any) -> str:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(PASSWORD_MESSAGE)
    return password


def check_new_password(password: Any) -> str:
    """Rules for a password about to be hashed and stored."""
    check_password(password)
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
    return password


def validate_signup(username: Any, email: Any, password: Any) -> None:
    check_username(username)
    if not is_email(email):
        raise ValidationError(EMAIL_MESSAGE)
    check_max_length(email, EMAIL_MAX, "Email")
    check_new_password(password)


def validate_profile_patch(patch: Mapping[str, Any]) -> None:
    """Length limits for the free-text profile fields present in *patch*."""
    for field, (label, limit) in PROFILE_LIMITS.items():
        value = patch.get(field)
        if isinstance(value, str):
            check_max_length(value, limit, label)


def validate_login(identifier: Any, password: Any) -> None:
    # The length rule also applies here, so a short password never
    # reaches the credential store.
    if not isinstance(identifier, str) or not identifier:
        raise ValidationError("Email or username is required.")
    check_password(password)


# ── Goals ──────────────────────────────────────────────────────────────


def _is_positive_count(value: Any) -> bool:
    # bool is an int subclass; JSON true must not count as 1
    if isinstance(value, bool):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return isinstance(value, (int, float)) and value >= 1


def validate_goal(payload: Mapping[str, Any], *, partial: bool = False) -> Dict[str, Any]:
    """
    Validate a goal body and return the cleaned fields.

    With ``partial=True`` only the keys present in *payload* are checked,
    as for an update.
    """
    cleaned: Dict[str, Any] = {}

    if not partial or "title" in payload:
        title = payload.get("title")
        if not _is_text(title):
            raise ValidationError("Goal title is required.")
        cleaned["title"] = check_max_length(title.strip(), GOAL_TITLE_MAX, "Goal title")

    if not partial or "target_count" in payload:
        target_count = payload.get("target_count")
        if not _is_positive_count(target_count):
            raise ValidationError("Target count must be a positive number.")
        if target_count > INT32_MAX:
            raise ValidationError(f"Target count must be at most {INT32_MAX}.")
        cleaned["target_count"] = int(target_count)

    if not partial or "target_date" in payload:
        target_date = payload.get("target_date")
        if not _is_text(target_date):
            raise ValidationError("Target date is required.")
        cleaned["target_date"] = check_max_length(target_date, TARGET_DATE_MAX, "Target date")

    return cleaned


# ── Problems ───────────────────────────────────────────────────────────


def validate_problem(payload: Mapping[str, Any]) -> None:
    title = payload.get("title")
    if not _is_text(title):
        raise ValidationError("Problem title is required.")
    check_max_length(title.strip(), PROBLEM_TITLE_MAX, "Problem title")

    platform = payload.get("platform")
    if not _is_text(platform):
        raise ValidationError("Platform is required.")
    check_max_length(platform.strip(), PLATFORM_MAX, "Platform")

    link = payload.get("link")
    if link and (not isinstance(link, str) or not URL_RE.match(link)):
        raise ValidationError("If provided, link must be a valid URL.")

    for field, label in (("difficulty", "Difficulty"), ("status", "Status")):
        value = payload.get(field)
        if isinstance(value, str):
            check_max_length(value, LABEL_MAX, label)
