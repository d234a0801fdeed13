"""
Durable client-side storage for the session token.

A small JSON document on disk; the token lives under a fixed key so it
survives restarts of the client.
"""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class TokenStorage:
    def __init__(self, path: str | pathlib.Path):
        self.path = pathlib.Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable token file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self) -> Optional[str]:
        token = self._read().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        data = self._read()
        data[TOKEN_KEY] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if data.pop(TOKEN_KEY, None) is not None:
            self._write(data)
