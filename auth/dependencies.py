"""
FastAPI dependencies for authentication.

Provides ``db_session`` for the auth routes and ``require_token``, a
bearer-token gate for routes that need an authenticated caller.
``require_token`` is not attached to any route in this service.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import InvalidToken, MissingToken
from auth.jwt import verify_token
from core.context import AppContext, get_app_context
from database.session import get_db_session

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    ctx: AppContext = Depends(get_app_context),
) -> Dict[str, Any]:
    """
    Verify the ``Authorization: Bearer <token>`` header and return its claims.

    The claims (``id``, ``email``) are also stored on ``request.state.user``.
    Raises ``MissingToken`` (401) or ``InvalidToken`` (403).
    """
    if credentials is None or not credentials.credentials:
        logger.warning("No bearer token on %s %s", request.method, request.url.path)
        raise MissingToken("Token not provided!")

    try:
        claims = verify_token(credentials.credentials, ctx.settings.jwt_secret)
    except InvalidToken as exc:
        logger.warning("%s on %s %s", exc, request.method, request.url.path)
        raise InvalidToken("Invalid token!") from exc

    request.state.user = claims
    return claims
