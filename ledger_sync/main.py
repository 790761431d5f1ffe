"""
Ledger Sync FastAPI application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledger_sync.config import get_settings
from ledger_sync.errors import (
    AuthorizationError,
    IngestionError,
    SnapshotValidationError,
)
from ledger_sync.logging_config import configure_logging
from ledger_sync.api.auth import router as auth_router
from ledger_sync.api.health import router as health_router
from ledger_sync.api.listings import router as listings_router
from ledger_sync.api.sync import router as sync_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Rebuilds payments and daily sales from spreadsheet snapshots",
)


# --- Error envelopes ---

@app.exception_handler(AuthorizationError)
def handle_authorization_error(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


@app.exception_handler(SnapshotValidationError)
def handle_validation_error(request: Request, exc: SnapshotValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": str(exc),
            "fields": [
                {"path": e.path, "reason": e.reason} for e in exc.errors
            ],
        },
    )


@app.exception_handler(IngestionError)
def handle_ingestion_error(request: Request, exc: IngestionError):
    return JSONResponse(status_code=500, content={"error": str(exc)})


# Register routers
app.include_router(health_router)
app.include_router(sync_router)
app.include_router(auth_router)
app.include_router(listings_router)
