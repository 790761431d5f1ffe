"""Abstract storage interface for ledger data."""

import time
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from ledger_sync.days import CalendarDay
from ledger_sync.errors import TransactionTimeoutError
from ledger_sync.storage.records import (
    CustomerRecord,
    ConsolidatedRow,
    PaymentRecord,
    SaleRecord,
    ImportControlRecord,
    SyncStatusRecord,
)


def check_elapsed(started: float, timeout_seconds: Optional[float]) -> None:
    """Raise TransactionTimeoutError if more than timeout_seconds passed since started."""
    if not timeout_seconds:
        return
    elapsed = time.monotonic() - started
    if elapsed > timeout_seconds:
        raise TransactionTimeoutError(elapsed, timeout_seconds)


class LedgerStore(ABC):
    """
    Everything the ingestion pipeline needs from persistence.

    Writes only become durable when the surrounding transaction()
    block exits normally. If the block raises, or runs longer than
    its timeout, every write made inside it is discarded.
    """

    @abstractmethod
    def transaction(
        self, timeout_seconds: Optional[float] = None
    ) -> AbstractContextManager[None]:
        """
        Unit of work: commit on normal exit, roll back on exception.

        With timeout_seconds set, a block that took longer is rolled
        back and TransactionTimeoutError is raised instead of committing.
        """

    # Customer operations
    @abstractmethod
    def find_customer(self, file_id: str) -> Optional[CustomerRecord]:
        """Get customer by external file id."""

    @abstractmethod
    def create_customer(
        self,
        file_id: str,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> int:
        """Create a customer. Returns customer ID."""

    @abstractmethod
    def update_customer(
        self,
        customer_id: int,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> None:
        """Overwrite a customer's name, balance and modification time."""

    @abstractmethod
    def list_customers(self) -> list[CustomerRecord]:
        """List customers ordered by name."""

    @abstractmethod
    def delete_customers_except(self, file_ids: Iterable[str]) -> int:
        """
        Delete customers whose file id is not in file_ids, together
        with their raw and derived rows. Returns number deleted.
        """

    # Consolidated record operations
    @abstractmethod
    def delete_consolidated_records(self, customer_id: int) -> None:
        pass

    @abstractmethod
    def insert_consolidated_records(self, rows: list[ConsolidatedRow]) -> None:
        pass

    @abstractmethod
    def list_consolidated_records(
        self, customer_id: int
    ) -> list[ConsolidatedRow]:
        """Rows for a customer in the order they were inserted."""

    @abstractmethod
    def payment_candidates(
        self, customer_id: int, cutoff: datetime
    ) -> list[ConsolidatedRow]:
        """
        Rows with a payment date on or after cutoff and a positive
        disbursement, newest payment date first. Rows sharing a
        payment date keep their insertion order.
        """

    # Payment operations
    @abstractmethod
    def delete_payments(self, customer_id: int) -> None:
        pass

    @abstractmethod
    def insert_payments(self, payments: list[PaymentRecord]) -> None:
        pass

    @abstractmethod
    def list_payments(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[PaymentRecord]:
        """Newest payment date first, then newest import first."""

    # Sale operations
    @abstractmethod
    def sale_import_timestamps(
        self, customer_id: int
    ) -> dict[CalendarDay, datetime]:
        """Import timestamp of every existing sale day for a customer."""

    @abstractmethod
    def delete_sales(self, customer_id: int) -> None:
        pass

    @abstractmethod
    def insert_sales(self, sales: list[SaleRecord]) -> None:
        pass

    @abstractmethod
    def list_sales(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[SaleRecord]:
        """Newest sale date first, then newest import first."""

    # Import control operations
    @abstractmethod
    def get_import_control(
        self, file_name: str
    ) -> Optional[ImportControlRecord]:
        pass

    @abstractmethod
    def save_import_control(self, record: ImportControlRecord) -> None:
        """Insert or replace the entry keyed by record.file_name."""

    # Sync status operations
    @abstractmethod
    def get_sync_status(self) -> Optional[SyncStatusRecord]:
        pass

    @abstractmethod
    def save_sync_status(self, record: SyncStatusRecord) -> None:
        pass
