"""
Registration and login.

``AuthService`` is built per request around a ``UserStore``; hashing and
token issuance are explicit steps here rather than store hooks.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from auth.jwt import TokenSigner
from auth.password import hash_password, verify_password
from core.errors import DuplicateUser, InvalidCredentials
from database.models import User
from database.stores import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        users: UserStore,
        signer: TokenSigner,
        bcrypt_rounds: int = 10,
    ) -> None:
        self._users = users
        self._signer = signer
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, username: str, password: str) -> Dict[str, Any]:
        """Create a user and return ``{id, username, token}``."""
        if await self._users.find_by_username(username) is not None:
            raise DuplicateUser()

        # bcrypt runs in a worker thread
        password_hash = await asyncio.to_thread(
            hash_password, password, self._bcrypt_rounds
        )
        user = await self._users.insert(username, password_hash)

        response = await self._issue_token(user)
        logger.info("Registered user %s (%s)", user.username, user.id)
        return response

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        """Verify credentials and return ``{id, username, token}``."""
        user = await self._users.find_by_username(username)
        if user is None or not await asyncio.to_thread(
            verify_password, password, user.password_hash
        ):
            logger.info("Rejected login for %r", username)
            raise InvalidCredentials()

        response = await self._issue_token(user)
        logger.info("Login: %s (%s)", user.username, user.id)
        return response

    async def _issue_token(self, user: User) -> Dict[str, Any]:
        token = self._signer.create_token(user.id)
        await self._users.update_token(user.id, token)
        return {
            "id": user.id,
            "username": user.username,
            "token": token,
        }
