"""
Ingestion service: applies one spreadsheet snapshot.

Each call:
1. Validates the payload (nothing is touched if this fails)
2. Upserts the customer for the file
3. Replaces the customer's consolidated records
4. Regenerates payments from the stored records
5. Regenerates daily sales from the sale lines
6. Records the successful sync in the import control ledger

Steps 2-6 run in one unit of work. If any of them fails, all of
them are rolled back, a failure is recorded for the file on a
best-effort basis, and IngestionError is raised.

There is no per-customer lock. Two ingestions for the same file
racing each other rely on the database's transaction isolation;
the read-then-delete-then-insert of sale timestamps is the part
exposed to that race.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from ledger_sync.config import Settings, get_settings
from ledger_sync.days import to_naive_utc, utcnow
from ledger_sync.errors import (
    IngestionError,
    LedgerWriteError,
    SnapshotValidationError,
)
from ledger_sync.schemas.snapshot import NAME_MAX_LENGTH
from ledger_sync.services.consolidated_record_service import (
    ConsolidatedRecordService,
)
from ledger_sync.services.customer_service import CustomerService
from ledger_sync.services.import_control_service import ImportControlService
from ledger_sync.services.payment_regenerator import PaymentRegenerator
from ledger_sync.services.sale_regenerator import SaleRegenerator
from ledger_sync.services.snapshot_validator import validate_snapshot
from ledger_sync.storage.base import LedgerStore

LOGGER = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    customer_id: int
    consolidated_row_count: int
    sale_row_count: int
    payment_count: int
    sale_count: int
    duration_seconds: int


def _readable_file_name(payload: Any) -> str | None:
    """
    The fileName of a rejected payload, if it would have passed
    validation on its own.
    """
    if not isinstance(payload, dict):
        return None
    file_name = payload.get("fileName")
    if isinstance(file_name, str) and 0 < len(file_name) <= NAME_MAX_LENGTH:
        return file_name
    return None


class IngestionService:

    def __init__(
        self,
        store: LedgerStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        settings = settings or get_settings()
        self.store = store
        self.clock = clock
        self.timeout_seconds = settings.INGEST_TRANSACTION_TIMEOUT_SECONDS
        self.customers = CustomerService(store)
        self.records = ConsolidatedRecordService(store)
        self.payments = PaymentRegenerator(store, settings.PAYMENTS_CUTOFF_DATE)
        self.sales = SaleRegenerator(store, settings.SALES_CUTOFF_DATE)
        self.import_control = ImportControlService(
            store, settings.IMPORT_FILE_SUFFIX
        )

    def ingest(self, payload: Any) -> IngestionResult:
        """
        Apply a snapshot payload.

        Raises SnapshotValidationError for a bad payload and
        IngestionError when the store fails part-way.
        """
        started = time.monotonic()

        try:
            snapshot = validate_snapshot(payload)
        except SnapshotValidationError as e:
            file_name = _readable_file_name(payload)
            LOGGER.warning("Rejected snapshot for %s: %s", file_name, e)
            if file_name is not None:
                self._record_failure(file_name, str(e))
            raise

        LOGGER.info(
            "Receiving snapshot for %s (%d rows, %d sale lines)",
            snapshot.file_name,
            len(snapshot.consolidated_rows),
            len(snapshot.sale_rows),
        )

        # One timestamp for the whole ingestion
        now = to_naive_utc(self.clock())

        try:
            with self.store.transaction(timeout_seconds=self.timeout_seconds):
                customer_id = self.customers.upsert(snapshot)
                stored = self.records.replace(
                    customer_id, snapshot.consolidated_rows
                )
                payments = self.payments.regenerate(customer_id, now)
                sales = self.sales.regenerate(
                    customer_id, snapshot.sale_rows, now
                )
                self.import_control.record_success(snapshot, now, stored)
        except Exception as e:
            LOGGER.exception("Sync of %s failed", snapshot.file_name)
            message = str(e) or e.__class__.__name__
            self._record_failure(snapshot.file_name, message)
            raise IngestionError(message, file_name=snapshot.file_name) from e

        duration = round(time.monotonic() - started)
        LOGGER.info(
            "%s synced in %ss: %d payments, %d sales",
            snapshot.file_name, duration, len(payments), len(sales),
        )

        return IngestionResult(
            customer_id=customer_id,
            consolidated_row_count=len(snapshot.consolidated_rows),
            sale_row_count=len(snapshot.sale_rows),
            payment_count=len(payments),
            sale_count=len(sales),
            duration_seconds=duration,
        )

    def _record_failure(self, file_name: str, message: str) -> None:
        try:
            self.import_control.record_failure(file_name, message)
        except LedgerWriteError as e:
            LOGGER.warning("%s", e, exc_info=e.__cause__)
