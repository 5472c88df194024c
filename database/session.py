"""
Async SQLAlchemy engine and session factory.
"""

from __future__ import annotations

import ssl
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings


def _insecure_ssl_context() -> ssl.SSLContext:
    """TLS is required, but the server certificate is not verified."""
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def build_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.sqlalchemy_url())
    kwargs: Dict[str, Any] = {"echo": False}

    if url.get_backend_name() != "sqlite":
        kwargs.update(pool_size=10, max_overflow=20, pool_recycle=3600)
    if settings.db_ssl:
        kwargs["connect_args"] = {"ssl": _insecure_ssl_context()}

    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    session_factory = request.app.state.ctx.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
