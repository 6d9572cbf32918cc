"""Signed relay join credentials (HS256 JWT scoped to one conversation)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt


class JoinDeniedError(Exception):
    """Raised when a join token is missing, invalid, expired or for another conversation."""


class JoinTokenSigner:
    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def issue(self, conversation_id: str, participant_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": participant_id,
            "cid": conversation_id,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


class HS256JoinTokenVerifier:
    """Verify join tokens signed with the shared relay secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str, conversation_id: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub", "cid"]},
            )
        except jwt.PyJWTError as exc:
            raise JoinDeniedError(str(exc)) from exc
        if payload["cid"] != conversation_id:
            raise JoinDeniedError("Token is scoped to another conversation")
        return str(payload["sub"])
