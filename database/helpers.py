"""
Database helper functions for goals and the problem log.

Goal helpers always filter on the owner's ``user_id``, so a goal owned by
someone else behaves exactly like one that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Goal, Problem

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse *value*; malformed ids yield ``None`` so lookups simply miss."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        return None


# ── Goals ───────────────────────────────────────────────────────────


async def list_goals(session: AsyncSession, user_id: str) -> List[Goal]:
    uid = _to_uuid(user_id)
    result = await session.execute(
        select(Goal).where(Goal.user_id == uid).order_by(Goal.created_at.asc())
    )
    return list(result.scalars().all())


async def get_goal(session: AsyncSession, user_id: str, goal_id: str) -> Optional[Goal]:
    gid = _to_uuid(goal_id)
    uid = _to_uuid(user_id)
    if gid is None or uid is None:
        return None
    result = await session.execute(
        select(Goal).where(Goal.goal_id == gid, Goal.user_id == uid)
    )
    return result.scalar_one_or_none()


async def create_goal(
    session: AsyncSession,
    user_id: str,
    title: str,
    target_count: int,
    target_date: str,
) -> Goal:
    goal = Goal(
        goal_id=uuid.uuid4(),
        user_id=_to_uuid(user_id),
        title=title,
        target_count=target_count,
        target_date=target_date,
        current_count=0,
    )
    session.add(goal)
    await session.flush()
    await session.refresh(goal)
    logger.info("Goal %s created for user %s", goal.goal_id, user_id)
    return goal


async def increment_goal(session: AsyncSession, user_id: str, goal_id: str) -> Optional[Goal]:
    """Add one to ``current_count``; the addition happens in SQL."""
    goal = await get_goal(session, user_id, goal_id)
    if goal is None:
        return None
    goal.current_count = Goal.current_count + 1
    await session.flush()
    await session.refresh(goal)
    return goal


async def update_goal(
    session: AsyncSession,
    user_id: str,
    goal_id: str,
    fields: Dict[str, Any],
) -> Optional[Goal]:
    goal = await get_goal(session, user_id, goal_id)
    if goal is None:
        return None
    for key, value in fields.items():
        setattr(goal, key, value)
    await session.flush()
    await session.refresh(goal)
    return goal


async def delete_goal(session: AsyncSession, user_id: str, goal_id: str) -> bool:
    goal = await get_goal(session, user_id, goal_id)
    if goal is None:
        return False
    await session.delete(goal)
    await session.flush()
    logger.info("Goal %s deleted by user %s", goal_id, user_id)
    return True


# ── Problems ────────────────────────────────────────────────────────


async def list_problems(session: AsyncSession) -> List[Problem]:
    result = await session.execute(select(Problem).order_by(Problem.created_at.asc()))
    return list(result.scalars().all())


async def create_problem(session: AsyncSession, fields: Dict[str, Any]) -> Problem:
    problem = Problem(problem_id=uuid.uuid4(), **fields)
    session.add(problem)
    await session.flush()
    await session.refresh(problem)
    return problem
