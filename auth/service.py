"""
Auth service — registration, login and bearer-token authentication.

Built once per application from ``Settings`` and kept on ``app.state.auth``.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenSigner
from auth.password import hash_password, verify_password
from config.settings import Settings
from database.helpers import create_user, get_user_by_username
from utils.errors import Forbidden, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def _require_credentials(username: Optional[str], password: Optional[str]) -> Tuple[str, str]:
    if not isinstance(username, str) or not username.strip():
        raise ValidationError("Username is required")
    if not isinstance(password, str) or not password:
        raise ValidationError("Password is required")
    return username.strip(), password


class AuthService:
    def __init__(self, settings: Settings, signer: Optional[TokenSigner] = None):
        self.settings = settings
        self.signer = signer or TokenSigner.from_settings(settings)

    async def register(
        self, session: AsyncSession, username: Optional[str], password: Optional[str]
    ) -> int:
        """Store a new user with a salted hash; returns the new user id."""
        username, password = _require_credentials(username, password)
        user = await create_user(
            session,
            username,
            hash_password(password, rounds=self.settings.bcrypt_rounds),
        )
        logger.info("Registered user %s (%s)", username, user.id)
        return user.id

    async def login(
        self, session: AsyncSession, username: Optional[str], password: Optional[str]
    ) -> Tuple[str, str]:
        """Check credentials and return ``(token, username)``."""
        if not username or not password:
            raise Unauthorized("Invalid credentials")

        user = await get_user_by_username(session, username.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %r", username)
            raise Unauthorized("Invalid credentials")

        logger.info("Login: %s (%s)", user.username, user.id)
        return self.signer.create_token(user.id), user.username

    def authenticate(self, authorization: Optional[str]) -> int:
        """
        Resolve an ``Authorization`` header to a user id.

        No header at all is ``Forbidden``; anything else that is not a valid
        ``Bearer <token>`` is ``Unauthorized``.
        """
        if authorization is None:
            raise Forbidden("No token provided")
        if not authorization.startswith(_BEARER_PREFIX):
            raise Unauthorized("Missing Bearer token")
        token = authorization[len(_BEARER_PREFIX):].strip()
        if not token:
            raise Unauthorized("Missing Bearer token")
        return self.signer.verify_token(token)
