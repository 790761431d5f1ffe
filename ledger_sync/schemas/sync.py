"""
Pydantic schemas for the sync maintenance, status and listing
endpoints.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ledger_sync.models.enums import SyncState
from ledger_sync.schemas.common import CamelModel
from ledger_sync.schemas.snapshot import Timestamp


# --- Request Schemas ---

class CleanupRequest(CamelModel):
    """Files that still exist upstream; customers of any other file go."""
    active_file_ids: list[str] = Field(alias="activeFileIds")


class SyncStatusEvent(CamelModel):
    """Progress report posted by the upstream sync run."""
    state: SyncState
    timestamp: Timestamp
    files_updated: int = Field(default=0, ge=0, alias="filesUpdated")
    files_skipped: int = Field(default=0, ge=0, alias="filesSkipped")
    total_files: int = Field(default=0, ge=0, alias="totalFiles")
    current_file: int = Field(default=0, ge=0, alias="currentFile")
    percent: int = Field(default=0, ge=0, le=100)
    duration_seconds: int = Field(default=0, ge=0, alias="durationSeconds")
    error_count: int = Field(default=0, ge=0, alias="errorCount")
    success: bool = False
    error: str | None = None


class SessionCreate(BaseModel):
    principal: str = Field(min_length=1, max_length=100)


# --- Response Schemas ---

class CleanupResponse(CamelModel):
    success: bool = True
    customers_removed: int = Field(alias="customersRemoved")
    active_files: int = Field(alias="activeFiles")


class SyncStatusResponse(BaseModel):
    state: SyncState
    reported_at: datetime
    files_updated: int
    files_skipped: int
    total_files: int
    percent: int
    duration_seconds: int
    error_count: int
    success: bool
    message: str

    model_config = {"from_attributes": True}


class SessionResponse(CamelModel):
    token: str
    expires_in_seconds: int = Field(alias="expiresInSeconds")


class CustomerResponse(BaseModel):
    id: int
    file_id: str
    name: str
    outstanding_balance: Decimal
    last_modified_at: datetime

    model_config = {"from_attributes": True}


class PaymentResponse(BaseModel):
    customer_id: int
    customer_name: str | None = None
    payment_date: datetime
    amount: Decimal
    payment_type_tag: str | None
    import_timestamp: datetime
    sequence_in_day: int

    model_config = {"from_attributes": True}


class SaleResponse(BaseModel):
    customer_id: int
    customer_name: str | None = None
    sale_date: datetime
    total_amount: Decimal
    import_timestamp: datetime
    sequence_in_day: int

    model_config = {"from_attributes": True}
