"""
Application context

Holds the settings and the database handles for one application instance.
Built by ``create_app`` and reached from handlers via ``request.app.state.ctx``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config.settings import Settings
from database.session import build_engine, build_session_factory


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
        )

    async def close(self) -> None:
        await self.engine.dispose()


def get_app_context(request: Request) -> AppContext:
    return request.app.state.ctx
