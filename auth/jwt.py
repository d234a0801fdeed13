"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.  The
payload is ``{"id": <user id>, "exp": <unix seconds>}``.  Secret and expiry
come from the ``Settings`` the signer is built with.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Callable, Dict

from config.settings import Settings
from utils.errors import Unauthorized


class TokenSigner:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(settings.jwt_secret, settings.jwt_expiry_seconds)

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def create_token(self, user_id: int) -> str:
        """Create a signed token containing ``id`` and expiry."""
        payload = {
            "id": user_id,
            "exp": int(self._clock()) + self._expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify ``token`` and return its payload.

        Raises ``Unauthorized`` on malformed, tampered or expired tokens.
        """
        try:
            encoded, sig = token.split(".", 1)
            raw = urlsafe_b64decode(encoded.encode())
        except ValueError as exc:
            raise Unauthorized("Invalid token: bad format") from exc

        expected = self._sign(raw).encode()
        if not hmac.compare_digest(sig.encode("utf-8", "surrogateescape"), expected):
            raise Unauthorized("Invalid token: bad signature")

        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise Unauthorized("Invalid token: bad payload") from exc

        if not isinstance(payload, dict) or "id" not in payload:
            raise Unauthorized("Invalid token: bad payload")
        if payload.get("exp", 0) < self._clock():
            raise Unauthorized("Token expired")
        return payload

    def verify_token(self, token: str) -> int:
        """Verify token and return the embedded user id."""
        return int(self.decode(token)["id"])
