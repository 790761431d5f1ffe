"""
Shared FastAPI dependencies: storage and authentication.

Two kinds of credentials exist:
- the sync process sends the shared SYNC_API_KEY as a Bearer token
- dashboard users send a session token in X-Session-Token

Both checks run before the endpoint body, so an unauthorised
request never reaches the ingestion pipeline.
"""

import secrets
from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from ledger_sync.config import Settings, get_settings
from ledger_sync.errors import AuthorizationError
from ledger_sync.models.base import get_db
from ledger_sync.services.session_store import SessionStore
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.sqlalchemy_store import SqlAlchemyLedgerStore

SYNC_PRINCIPAL = "sync"


def get_store(db: Session = Depends(get_db)) -> LedgerStore:
    return SqlAlchemyLedgerStore(db)


@lru_cache()
def get_session_store() -> SessionStore:
    return SessionStore(timedelta(hours=get_settings().SESSION_TTL_HOURS))


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None


def _is_api_key(token: str | None, settings: Settings) -> bool:
    # An unset key must never match an empty token
    if not token or not settings.SYNC_API_KEY:
        return False
    return secrets.compare_digest(token, settings.SYNC_API_KEY)


def require_api_key(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Allow only the sync process."""
    if not _is_api_key(_bearer_token(authorization), settings):
        raise AuthorizationError("Unauthorized")
    return SYNC_PRINCIPAL


def require_client(
    authorization: str | None = Header(default=None),
    x_session_token: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
    sessions: SessionStore = Depends(get_session_store),
) -> str:
    """Allow the sync process or a logged-in dashboard user."""
    if _is_api_key(_bearer_token(authorization), settings):
        return SYNC_PRINCIPAL

    principal = sessions.validate(x_session_token)
    if principal is None:
        raise AuthorizationError("Unauthorized")
    return principal
