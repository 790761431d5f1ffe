"""
Session store for dashboard users.

Tokens are opaque random strings mapped to the principal they were
issued for. Expiry is checked when a token is used; purge_expired()
drops everything stale in one go. There is no background thread.
"""

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ledger_sync.days import utcnow


@dataclass(frozen=True)
class _Session:
    principal: str
    created_at: datetime


class SessionStore:

    def __init__(
        self,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        if ttl <= timedelta(0):
            raise ValueError("Session TTL must be positive")
        self.ttl = ttl
        self.clock = clock
        self._sessions: dict[str, _Session] = {}
        self._lock = threading.Lock()

    def create(self, principal: str) -> str:
        """Issue a new token for principal."""
        token = secrets.token_hex(32)
        with self._lock:
            self._sessions[token] = _Session(principal, self.clock())
        return token

    def validate(self, token: Optional[str]) -> Optional[str]:
        """Return the token's principal, or None if unknown or expired."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if self._expired(session):
                del self._sessions[token]
                return None
            return session.principal

    def revoke(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        """Remove expired sessions. Returns how many were removed."""
        with self._lock:
            stale = [t for t, s in self._sessions.items() if self._expired(s)]
            for token in stale:
                del self._sessions[token]
        return len(stale)

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _expired(self, session: _Session) -> bool:
        return self.clock() - session.created_at > self.ttl
