"""Business logic services."""

from ledger_sync.services.customer_service import CustomerService
from ledger_sync.services.consolidated_record_service import (
    ConsolidatedRecordService,
)
from ledger_sync.services.payment_regenerator import PaymentRegenerator
from ledger_sync.services.sale_regenerator import SaleRegenerator
from ledger_sync.services.import_control_service import ImportControlService
from ledger_sync.services.ingestion_service import (
    IngestionService,
    IngestionResult,
)
from ledger_sync.services.session_store import SessionStore
from ledger_sync.services.sync_status_service import SyncStatusService

__all__ = [
    "CustomerService",
    "ConsolidatedRecordService",
    "PaymentRegenerator",
    "SaleRegenerator",
    "ImportControlService",
    "IngestionService",
    "IngestionResult",
    "SessionStore",
    "SyncStatusService",
]
