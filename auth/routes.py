"""
Auth API routes — signup, login, logout.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user and log them straight in."""
    user, token = await service.register(req.username, req.email, req.password)
    return {
        "message": "User registered successfully",
        "token": token,
        "user": user.public_view(),
    }


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email or username + password."""
    user, token = await service.login(req.email_or_username, req.password)
    return {"token": token, "user": user.public_view()}


@router.post("/logout", response_model=MessageResponse)
async def logout() -> Dict[str, str]:
    """Tokens are stateless; the client discards its copy."""
    return {"message": "Logged out"}
