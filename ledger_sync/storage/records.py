"""
Plain records passed between the services and a LedgerStore.

Stores translate their own representation (ORM rows, dicts) to and
from these, so services never depend on a particular backend.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ledger_sync.models.enums import SyncState


@dataclass
class CustomerRecord:
    id: int
    file_id: str
    name: str
    outstanding_balance: Decimal
    last_modified_at: datetime


@dataclass
class ConsolidatedRow:
    customer_id: int
    payment_date: datetime | None
    disbursement: Decimal
    balance_snapshot: Decimal
    payment_type_tag: str | None = None
    source_sheet: str | None = None
    source_row: int | None = None


@dataclass
class PaymentRecord:
    customer_id: int
    payment_date: datetime
    amount: Decimal
    payment_type_tag: str | None
    import_timestamp: datetime
    sequence_in_day: int


@dataclass
class SaleRecord:
    customer_id: int
    sale_date: datetime
    total_amount: Decimal
    import_timestamp: datetime
    sequence_in_day: int


@dataclass
class ImportControlRecord:
    file_name: str
    file_id: str | None = None
    last_modified_at: datetime | None = None
    last_sync_at: datetime | None = None
    row_count: int = 0
    success: bool = False
    error_message: str | None = None


@dataclass
class SyncStatusRecord:
    state: SyncState
    reported_at: datetime
    message: str
    files_updated: int = 0
    files_skipped: int = 0
    total_files: int = 0
    percent: int = 0
    duration_seconds: int = 0
    error_count: int = 0
    success: bool = False
