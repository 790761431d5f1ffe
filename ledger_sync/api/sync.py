"""
Sync API endpoints.

These are called by the upstream spreadsheet sync process: one
snapshot per file, a cleanup once the run knows which files still
exist, and status reports along the way.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ledger_sync.api.dependencies import (
    get_store,
    require_api_key,
    require_client,
)
from ledger_sync.config import Settings, get_settings
from ledger_sync.schemas.snapshot import IngestionResponse
from ledger_sync.schemas.sync import (
    CleanupRequest,
    CleanupResponse,
    SyncStatusEvent,
    SyncStatusResponse,
)
from ledger_sync.services.customer_service import CustomerService
from ledger_sync.services.ingestion_service import IngestionService
from ledger_sync.services.sync_status_service import SyncStatusService
from ledger_sync.storage.base import LedgerStore

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "/receive",
    response_model=IngestionResponse,
    dependencies=[Depends(require_api_key)],
)
def receive_snapshot(
    payload: Any = Body(...),
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Apply one file's snapshot.

    Validation failures come back as 422, store failures as 500;
    see the exception handlers in main.py. Either way the
    customer's previously committed data is left as it was.
    """
    service = IngestionService(store, settings)
    result = service.ingest(payload)
    return IngestionResponse(
        customer_id=result.customer_id,
        consolidated_row_count=result.consolidated_row_count,
        sale_row_count=result.sale_row_count,
        duration_seconds=result.duration_seconds,
    )


@router.post(
    "/cleanup",
    response_model=CleanupResponse,
    dependencies=[Depends(require_api_key)],
)
def cleanup_customers(
    payload: Any = Body(...),
    store: LedgerStore = Depends(get_store),
):
    """Delete customers whose file is not in activeFileIds."""
    try:
        request = CleanupRequest.model_validate(payload)
    except ValidationError:
        return JSONResponse(
            status_code=400,
            content={"error": "activeFileIds must be a list of file ids"},
        )

    service = CustomerService(store)
    with store.transaction():
        removed = service.remove_inactive(request.active_file_ids)

    return CleanupResponse(
        customers_removed=removed,
        active_files=len(request.active_file_ids),
    )


@router.post("/webhook", dependencies=[Depends(require_client)])
def report_sync_status(
    event: SyncStatusEvent,
    store: LedgerStore = Depends(get_store),
):
    """Record a progress or completion report from the sync run."""
    service = SyncStatusService(store)
    with store.transaction():
        service.report(event)
    return {"success": True}


@router.get("/webhook", dependencies=[Depends(require_client)])
def get_sync_status(store: LedgerStore = Depends(get_store)):
    """Latest reported state of the sync run."""
    status = SyncStatusService(store).current()
    if status is None:
        return {"success": True, "status": "no_data"}
    return {
        "success": True,
        "status": SyncStatusResponse.model_validate(status).model_dump(
            mode="json"
        ),
    }
