"""
Application settings loaded from environment variables.

A single ``Settings`` instance is built at process start (see ``main.py``)
and handed to ``create_app``; nothing in the application reads settings
from module-level state.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = "change-me-jwt-secret-key"       # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 7200                      # 2 hours
    bcrypt_rounds: int = 12

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./tasks.db"
    database_echo: bool = False

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    # ── Client ───────────────────────────────────────────────────────────
    api_url: str = "http://localhost:5000"
    token_file: str = "~/.task_tracker/session.json"
    request_timeout: Optional[float] = 10.0

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


@lru_cache
def load_settings() -> Settings:
    """Build the process-wide settings once; callers pass the result on."""
    return Settings()
