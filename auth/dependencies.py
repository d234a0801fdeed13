"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_auth_service`` and ``get_current_user_id``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from database.session import get_db_session


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


async def get_current_user_id(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    auth: AuthService = Depends(get_auth_service),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id.
    """
    return auth.authenticate(authorization)
