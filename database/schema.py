"""
Explicit, versioned schema initialisation.

``init_schema`` is run once before the application serves traffic.  Each
entry in ``_MIGRATIONS`` brings the database from ``version - 1`` to
``version``; the highest applied version is recorded in ``schema_version``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from sqlalchemy import func, select
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from database.models import Base, SchemaVersion, Task, User

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _v1_create_users_and_tasks(conn: Connection) -> None:
    Base.metadata.create_all(conn, tables=[User.__table__, Task.__table__])


_MIGRATIONS: Dict[int, Callable[[Connection], None]] = {
    1: _v1_create_users_and_tasks,
}


async def current_version(engine: AsyncEngine) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(
            lambda sync_conn: SchemaVersion.__table__.create(sync_conn, checkfirst=True)
        )
        result = await conn.execute(select(func.max(SchemaVersion.version)))
        return result.scalar() or 0


async def init_schema(engine: AsyncEngine, target: int = SCHEMA_VERSION) -> int:
    """
    Apply every pending schema step up to ``target``.

    Returns the version the database is at afterwards.  Calling it on an
    up-to-date database is a no-op.
    """
    version = await current_version(engine)
    if version > target:
        raise RuntimeError(
            f"Database schema version {version} is newer than this build ({target})"
        )

    for step in range(version + 1, target + 1):
        migrate = _MIGRATIONS[step]
        async with engine.begin() as conn:
            await conn.run_sync(migrate)
            await conn.execute(SchemaVersion.__table__.insert().values(version=step))
        logger.info("Applied schema version %d", step)

    if version == target:
        logger.debug("Schema already at version %d", target)
    return target
