from __future__ import annotations

from typing import Protocol


class JoinTokenVerifier(Protocol):
    def verify(self, token: str, conversation_id: str) -> str:
        """Return the participant id the token was issued to, or raise."""
        ...
