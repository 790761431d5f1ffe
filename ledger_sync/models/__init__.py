"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from ledger_sync.models.base import Base
from ledger_sync.models.enums import SyncState
from ledger_sync.models.customer import Customer
from ledger_sync.models.consolidated_record import ConsolidatedRecord
from ledger_sync.models.payment import Payment
from ledger_sync.models.sale import Sale
from ledger_sync.models.import_control import ImportControlEntry
from ledger_sync.models.sync_status import SyncStatus, SYNC_STATUS_ID

__all__ = [
    "Base",
    "SyncState",
    "Customer",
    "ConsolidatedRecord",
    "Payment",
    "Sale",
    "ImportControlEntry",
    "SyncStatus",
    "SYNC_STATUS_ID",
]
