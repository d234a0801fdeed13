"""
Auth API routes — register, login.

Mounted at the application root: ``/register`` and ``/login``.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_auth_service
from auth.service import AuthService
from utils.schemas import Credentials, LoginResponse, RegisterResponse

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
async def register(
    req: Credentials,
    session: AsyncSession = Depends(db_session),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    user_id = await auth.register(session, req.username, req.password)
    return {"message": "User created", "userId": user_id}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: Credentials,
    session: AsyncSession = Depends(db_session),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with username + password."""
    token, username = await auth.login(session, req.username, req.password)
    return {"token": token, "username": username}
