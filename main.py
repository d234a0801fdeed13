"""
Task tracker — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as tasks_router
from auth.routes import router as auth_router
from auth.service import AuthService
from config.settings import Settings, load_settings
from database.schema import init_schema
from database.session import Database

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("httpcore", "httpx", "aiosqlite", "sqlalchemy.engine"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        version = await init_schema(database.engine)
        logger.info("Database schema at version %d", version)
        logger.info("Application ready to accept requests.")
        yield
        await database.dispose()

    app = FastAPI(
        title="Task Tracker",
        version="1.0.0",
        description="Personal task tracking with per-user ownership.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database
    app.state.auth = AuthService(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(tasks_router)

    return app


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
