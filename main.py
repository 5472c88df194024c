"""
User registration & login service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from auth.routes import router as auth_router
from config.settings import Settings
from core.context import AppContext
from database.helpers import init_schema

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("asyncio", "aiosqlite", "sqlalchemy.engine"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="User Registration & Login",
        version="1.0.0",
        description="Register users and issue signed login tokens.",
    )
    app.state.ctx = AppContext.from_settings(settings)

    register_middleware(app, settings)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)

    @app.on_event("startup")
    async def on_startup():
        if settings.uses_default_secret():
            logger.warning("JWT_SECRET is not set; tokens are signed with the default secret")
        await init_schema(app.state.ctx.engine)
        logger.info("Server running on port %d", settings.port)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.ctx.close()

    return app


settings = Settings()
configure_logging(settings)
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
