"""
Application error types.

Services and stores raise these; ``api.middleware`` turns them into
``{"message": ...}`` JSON responses with the matching status code.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """Username or email already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists"


class AuthError(AppError):
    """Bad credentials, or an unproven password change."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class MissingTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "No token provided"


class InvalidTokenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    """
    Token past its ``exp`` claim.

    Reported to clients exactly like any other invalid token; the separate
    class only exists so the server can log the reason.
    """


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
