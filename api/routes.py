"""
Task REST routes.  Every handler is scoped to the authenticated user.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from database import helpers
from database.models import Task
from utils.schemas import DeleteResponse, TaskFields, TaskOut

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
async def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    session: AsyncSession = Depends(db_session),
    user_id: int = Depends(get_current_user_id),
) -> List[Task]:
    """List the caller's tasks, optionally filtered by status and priority."""
    return await helpers.list_tasks(session, user_id, status=status, priority=priority)


@router.post("", response_model=TaskOut)
async def create_task(
    body: TaskFields,
    session: AsyncSession = Depends(db_session),
    user_id: int = Depends(get_current_user_id),
) -> Task:
    return await helpers.create_task(session, user_id, body.supplied())


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: int,
    body: TaskFields,
    session: AsyncSession = Depends(db_session),
    user_id: int = Depends(get_current_user_id),
) -> Task:
    """Merge the supplied fields into one of the caller's tasks."""
    return await helpers.update_task(session, user_id, task_id, body.supplied())


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: int,
    session: AsyncSession = Depends(db_session),
    user_id: int = Depends(get_current_user_id),
) -> DeleteResponse:
    removed = await helpers.delete_task(session, user_id, task_id)
    return DeleteResponse(success=removed)
