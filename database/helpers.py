"""
Database helper functions — user lookups and ownership-scoped task queries.

Every task query filters on ``Task.user_id`` so a caller can never read or
change another user's rows.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, User
from utils.errors import Conflict, NotFound
from utils.validators import validate_filter, validate_task_fields

logger = logging.getLogger(__name__)

# Ids outside a signed 64-bit INTEGER can never name a stored row.
_MAX_ID = 2**63 - 1


def _storable_id(task_id: int) -> bool:
    return 0 < task_id <= _MAX_ID


# ── Users ──────────────────────────────────────────────────────────────


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, username: str, password_hash: str) -> User:
    """Insert a user; a duplicate username raises ``Conflict``."""
    if await get_user_by_username(session, username) is not None:
        raise Conflict("Username already taken")

    user = User(username=username, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same name.
        await session.rollback()
        raise Conflict("Username already taken") from exc
    return user


# ── Tasks ──────────────────────────────────────────────────────────────


async def list_tasks(
    session: AsyncSession,
    user_id: int,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> List[Task]:
    """Return the user's tasks matching the optional equality filters."""
    constraints = validate_filter(status, priority)
    stmt = select(Task).where(Task.user_id == user_id)
    if "status" in constraints:
        stmt = stmt.where(Task.status == constraints["status"])
    if "priority" in constraints:
        stmt = stmt.where(Task.priority == constraints["priority"])
    result = await session.execute(stmt.order_by(Task.id))
    return list(result.scalars().all())


async def get_owned_task(session: AsyncSession, user_id: int, task_id: int) -> Optional[Task]:
    if not _storable_id(task_id):
        return None
    result = await session.execute(
        select(Task).where(Task.id == task_id, Task.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_task(session: AsyncSession, user_id: int, fields: Dict[str, Any]) -> Task:
    values = validate_task_fields(fields, creating=True)
    task = Task(user_id=user_id, **values)
    session.add(task)
    await session.flush()
    await session.refresh(task)
    logger.info("User %s created task %s", user_id, task.id)
    return task


async def update_task(
    session: AsyncSession,
    user_id: int,
    task_id: int,
    fields: Dict[str, Any],
) -> Task:
    """
    Merge ``fields`` into an owned task.

    A task owned by someone else is reported exactly like a missing one.
    """
    task = await get_owned_task(session, user_id, task_id)
    if task is None:
        raise NotFound("Task not found")

    values = validate_task_fields(fields, creating=False)
    for key, value in values.items():
        setattr(task, key, value)
    await session.flush()
    await session.refresh(task)
    logger.info("User %s updated task %s (%s)", user_id, task_id, ", ".join(values) or "no fields")
    return task


async def delete_task(session: AsyncSession, user_id: int, task_id: int) -> bool:
    """Delete an owned task; returns whether a row was removed."""
    if not _storable_id(task_id):
        return False
    result = await session.execute(
        delete(Task).where(Task.id == task_id, Task.user_id == user_id)
    )
    removed = (result.rowcount or 0) > 0
    if removed:
        logger.info("User %s deleted task %s", user_id, task_id)
    return removed
