"""
FastAPI dependencies for authentication.

Provides ``db_session``, the per-request ``AuthService`` and the
``get_current_user`` gate used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import InvalidToken, TokenSigner
from auth.service import AuthService
from core.errors import Unauthorized
from database.models import User
from database.session import get_db_session
from database.stores import SqlUserStore, UserStore

logger = logging.getLogger(__name__)

NO_TOKEN_MSG = "Not authorized, no token"
TOKEN_FAILED_MSG = "Not authorized, token failed"


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return SqlUserStore(session)


def get_auth_service(
    request: Request,
    users: UserStore = Depends(get_user_store),
    signer: TokenSigner = Depends(get_token_signer),
) -> AuthService:
    return AuthService(
        users,
        signer,
        bcrypt_rounds=request.app.state.settings.bcrypt_rounds,
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from ``Bearer <token>``, or ``None`` if absent."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    users: UserStore = Depends(get_user_store),
    signer: TokenSigner = Depends(get_token_signer),
) -> User:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``User``. Never writes to the store.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthorized(NO_TOKEN_MSG)

    try:
        user_id = signer.verify_token(token)
    except InvalidToken as exc:
        logger.info("Rejected token: %s", exc)
        raise Unauthorized(TOKEN_FAILED_MSG) from exc

    user = await users.find_by_id(user_id)
    if user is None:
        logger.info("Rejected token for missing user %s", user_id)
        raise Unauthorized(TOKEN_FAILED_MSG)
    return user
