"""
Session endpoints.

Session tokens are minted by the holder of the sync API key (the
login front end) and revoked by their owner.
"""

from fastapi import APIRouter, Depends, Header, Response

from ledger_sync.api.dependencies import get_session_store, require_api_key
from ledger_sync.schemas.sync import SessionCreate, SessionResponse
from ledger_sync.services.session_store import SessionStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    dependencies=[Depends(require_api_key)],
)
def create_session(
    request: SessionCreate,
    sessions: SessionStore = Depends(get_session_store),
):
    """Issue a session token for a dashboard user."""
    sessions.purge_expired()
    token = sessions.create(request.principal)
    return SessionResponse(
        token=token,
        expires_in_seconds=int(sessions.ttl.total_seconds()),
    )


@router.delete("/sessions", status_code=204)
def revoke_session(
    x_session_token: str | None = Header(default=None),
    sessions: SessionStore = Depends(get_session_store),
):
    """Log out. Unknown tokens are ignored."""
    if x_session_token:
        sessions.revoke(x_session_token)
    return Response(status_code=204)
