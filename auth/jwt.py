"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256. The secret
and lifetime come from ``Settings`` (env vars ``JWT_SECRET`` and
``JWT_EXPIRY_SECONDS``) and are held by a ``TokenSigner`` built per app.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional


class InvalidToken(Exception):
    """Token is malformed, tampered with, or expired."""


class TokenSigner:
    def __init__(self, secret: str, expiry_seconds: int) -> None:
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def create_token(self, user_id: int, now: Optional[float] = None) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        issued_at = int(now if now is not None else time.time())
        payload = {
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify_token(self, token: str, now: Optional[float] = None) -> int:
        """
        Verify token and return ``user_id``.

        Raises ``InvalidToken`` on bad format, bad signature or expiry.
        """
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise InvalidToken("bad format")
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError) as exc:
            raise InvalidToken("bad encoding") from exc
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidToken("bad signature")

        payload = json.loads(raw)
        current = now if now is not None else time.time()
        if payload.get("exp", 0) < current:
            raise InvalidToken("token expired")
        user_id = payload.get("user_id")
        if not isinstance(user_id, int):
            raise InvalidToken("missing subject")
        return user_id
