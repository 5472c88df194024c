"""
Database helper functions — create and look up user records.

"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from auth.errors import DuplicateEmail
from database.models import Base, User

logger = logging.getLogger(__name__)


async def create_user(
    session: AsyncSession,
    name: str,
    email: str,
    password_hash: str,
) -> User:
    """Insert a user row and commit. Raises ``DuplicateEmail`` on a taken email."""
    user = User(name=name, email=email, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateEmail(str(exc.orig)) from exc
    await session.refresh(user)
    return user


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def init_schema(engine: AsyncEngine) -> bool:
    """Create missing tables. Returns ``False`` (and logs) when the database is unreachable."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Failed to connect to the database: %s", exc)
        return False
    logger.info("Database connected and tables synchronized")
    return True
