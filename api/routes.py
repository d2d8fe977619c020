"""
REST API routes — profile, goals and the problem log.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_auth_service, get_current_user_id
from auth.service import AuthService
from database.helpers import (
    create_goal,
    create_problem,
    delete_goal,
    increment_goal,
    list_goals,
    list_problems,
    update_goal,
)
from utils.errors import NotFoundError
from utils.schemas import (
    GoalDeleted,
    GoalOut,
    GoalRequest,
    MessageResponse,
    ProblemOut,
    ProblemRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from utils.validators import validate_goal, validate_problem

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Profile ────────────────────────────────────────────────────────────


@router.get("/profile", response_model=ProfileResponse, tags=["profile"])
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    return await service.get_profile(user_id)


@router.put("/profile", response_model=MessageResponse, tags=["profile"])
async def update_profile(
    req: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    """Partially update the caller's profile; absent fields are left alone."""
    await service.update_profile(user_id, req.model_dump(exclude_unset=True))
    return {"message": "Profile updated successfully"}


# ── Goals ──────────────────────────────────────────────────────────────


@router.get("/goals", response_model=List[GoalOut], tags=["goals"])
async def get_goals(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> List[Any]:
    return await list_goals(session, user_id)


@router.post(
    "/goals",
    response_model=GoalOut,
    status_code=status.HTTP_201_CREATED,
    tags=["goals"],
)
async def add_goal(
    req: GoalRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Any:
    fields = validate_goal(req.model_dump())
    return await create_goal(session, user_id, **fields)


@router.put("/goals/{goal_id}/increment", response_model=GoalOut, tags=["goals"])
async def bump_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Any:
    goal = await increment_goal(session, user_id, goal_id)
    if goal is None:
        raise NotFoundError("Goal not found")
    return goal


@router.put("/goals/{goal_id}", response_model=GoalOut, tags=["goals"])
async def edit_goal(
    goal_id: str,
    req: GoalRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Any:
    fields = validate_goal(req.model_dump(exclude_unset=True), partial=True)
    goal = await update_goal(session, user_id, goal_id, fields)
    if goal is None:
        raise NotFoundError("Goal not found")
    return goal


@router.delete("/goals/{goal_id}", response_model=GoalDeleted, tags=["goals"])
async def remove_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, str]:
    if not await delete_goal(session, user_id, goal_id):
        raise NotFoundError("Goal not found")
    return {"message": "Goal deleted", "id": goal_id}


# ── Problems ───────────────────────────────────────────────────────────


@router.get("/problems", response_model=List[ProblemOut], tags=["problems"])
async def get_problems(
    session: AsyncSession = Depends(db_session),
) -> List[Any]:
    return await list_problems(session)


@router.post(
    "/problems",
    response_model=ProblemOut,
    status_code=status.HTTP_201_CREATED,
    tags=["problems"],
)
async def add_problem(
    req: ProblemRequest,
    session: AsyncSession = Depends(db_session),
) -> Any:
    payload = req.model_dump()
    validate_problem(payload)
    payload["title"] = payload["title"].strip()
    payload["platform"] = payload["platform"].strip()
    payload["link"] = payload["link"] or None
    return await create_problem(session, payload)
