"""
Shared fixtures: an application bound to a throwaway SQLite file and an
in-process HTTP client talking to it.
"""

from typing import Dict

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from database.schema import init_schema
from main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        token_file=str(tmp_path / "session.json"),
    )


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    await init_schema(application.state.db.engine)
    yield application
    await application.state.db.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


async def _register_and_login(
    client: httpx.AsyncClient, username: str, password: str = "pw1"
) -> Dict[str, str]:
    """Create an account and return the Authorization header for it."""
    resp = await client.post("/register", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    resp = await client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest_asyncio.fixture
async def alice(client) -> Dict[str, str]:
    return await _register_and_login(client, "alice")


@pytest_asyncio.fixture
async def bob(client) -> Dict[str, str]:
    return await _register_and_login(client, "bob", "pw2")


