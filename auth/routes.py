"""
Auth API routes — register, login.

Routes: POST /usuarios, POST /login
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from auth.errors import AuthError, InvalidCredentials, NotFound, ValidationError
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from core.context import AppContext, get_app_context
from database.helpers import create_user, find_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def require_fields(self) -> None:
        if not self.name or not self.email or not self.password:
            raise ValidationError("All fields are required")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    def require_fields(self) -> None:
        if not self.email or not self.password:
            raise ValidationError("Email and password are required")


class RegisterResponse(BaseModel):
    message: str
    user: Dict[str, Any]


class LoginResponse(BaseModel):
    message: str
    token: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post(
    "/usuarios",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    ctx: AppContext = Depends(get_app_context),
) -> Dict[str, Any]:
    """Register a new user."""
    logger.debug("Register request: %s", req.model_dump(exclude={"password"}))
    try:
        req.require_fields()
        password_hash = await run_in_threadpool(
            hash_password, req.password, ctx.settings.bcrypt_rounds
        )
        user = await create_user(session, req.name, req.email, password_hash)
    except AuthError as exc:
        logger.warning("Registration rejected: %s", exc)
        raise
    except Exception as exc:
        logger.exception("User creation failed")
        raise AuthError(str(exc)) from exc

    logger.info("Registered user %s (%s)", user.email, user.id)
    # the stored hash is part of the response body; existing clients read it
    return {"message": "User created successfully!", "user": user.to_dict()}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    ctx: AppContext = Depends(get_app_context),
) -> Dict[str, Any]:
    """Login with email + password."""
    logger.debug("Login request: %s", req.model_dump(exclude={"password"}))
    try:
        req.require_fields()
        user = await find_user_by_email(session, req.email)
        if user is None:
            raise NotFound("User not found")

        if not await run_in_threadpool(verify_password, req.password, user.password_hash):
            raise InvalidCredentials("Invalid password")

        token = create_token(
            user.id,
            user.email,
            ctx.settings.jwt_secret,
            expiry_seconds=ctx.settings.jwt_expiry_seconds,
        )
    except AuthError as exc:
        logger.warning("Login rejected for %s: %s", req.email, exc)
        raise
    except Exception as exc:
        logger.exception("Login failed")
        raise AuthError(str(exc)) from exc

    logger.info("Login: %s (%s)", user.email, user.id)
    return {"message": "Login successful!", "token": token}
