"""In-memory implementation of LedgerStore, for tests and demos."""

import copy
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from ledger_sync.days import CalendarDay
from ledger_sync.storage.base import LedgerStore, check_elapsed
from ledger_sync.storage.records import (
    CustomerRecord,
    ConsolidatedRow,
    PaymentRecord,
    SaleRecord,
    ImportControlRecord,
    SyncStatusRecord,
)


@dataclass
class _Tables:
    next_customer_id: int = 1
    customers: dict[int, CustomerRecord] = field(default_factory=dict)
    consolidated: list[ConsolidatedRow] = field(default_factory=list)
    payments: list[PaymentRecord] = field(default_factory=list)
    sales: list[SaleRecord] = field(default_factory=list)
    import_control: dict[str, ImportControlRecord] = field(default_factory=dict)
    sync_status: Optional[SyncStatusRecord] = None


class InMemoryLedgerStore(LedgerStore):
    """
    LedgerStore that keeps everything in Python lists and dicts.

    A transaction takes a deep copy of all tables on entry and
    puts it back if the block raises or overruns its timeout.
    Transactions are serialised with a lock; nesting on the same
    thread joins the outer one.

    Records are copied on the way in and out, so callers can never
    mutate stored state behind the store's back.
    """

    def __init__(self):
        self._tables = _Tables()
        self._lock = threading.RLock()
        self._depth = 0

    @contextmanager
    def transaction(self, timeout_seconds: Optional[float] = None):
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            started = time.monotonic()
            saved = copy.deepcopy(self._tables)
            self._depth = 1
            try:
                yield
                check_elapsed(started, timeout_seconds)
            except Exception:
                self._tables = saved
                raise
            finally:
                self._depth = 0

    # Customer operations
    def find_customer(self, file_id: str) -> Optional[CustomerRecord]:
        for customer in self._tables.customers.values():
            if customer.file_id == file_id:
                return replace(customer)
        return None

    def create_customer(
        self,
        file_id: str,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> int:
        if self.find_customer(file_id) is not None:
            raise ValueError(f"Customer with file id '{file_id}' already exists")
        customer_id = self._tables.next_customer_id
        self._tables.next_customer_id += 1
        self._tables.customers[customer_id] = CustomerRecord(
            id=customer_id,
            file_id=file_id,
            name=name,
            outstanding_balance=outstanding_balance,
            last_modified_at=last_modified_at,
        )
        return customer_id

    def update_customer(
        self,
        customer_id: int,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> None:
        customer = self._tables.customers.get(customer_id)
        if customer is None:
            raise ValueError(f"Customer {customer_id} not found")
        customer.name = name
        customer.outstanding_balance = outstanding_balance
        customer.last_modified_at = last_modified_at

    def list_customers(self) -> list[CustomerRecord]:
        customers = sorted(
            self._tables.customers.values(), key=lambda c: (c.name, c.id)
        )
        return [replace(c) for c in customers]

    def delete_customers_except(self, file_ids: Iterable[str]) -> int:
        keep = set(file_ids)
        doomed = {
            c.id for c in self._tables.customers.values()
            if c.file_id not in keep
        }
        if not doomed:
            return 0

        t = self._tables
        t.consolidated = [r for r in t.consolidated if r.customer_id not in doomed]
        t.payments = [p for p in t.payments if p.customer_id not in doomed]
        t.sales = [s for s in t.sales if s.customer_id not in doomed]
        for customer_id in doomed:
            del t.customers[customer_id]
        return len(doomed)

    # Consolidated record operations
    def delete_consolidated_records(self, customer_id: int) -> None:
        self._tables.consolidated = [
            r for r in self._tables.consolidated
            if r.customer_id != customer_id
        ]

    def insert_consolidated_records(self, rows: list[ConsolidatedRow]) -> None:
        self._tables.consolidated.extend(replace(r) for r in rows)

    def list_consolidated_records(
        self, customer_id: int
    ) -> list[ConsolidatedRow]:
        return [
            replace(r) for r in self._tables.consolidated
            if r.customer_id == customer_id
        ]

    def payment_candidates(
        self, customer_id: int, cutoff: datetime
    ) -> list[ConsolidatedRow]:
        rows = [
            r for r in self.list_consolidated_records(customer_id)
            if r.payment_date is not None
            and r.disbursement > 0
            and r.payment_date >= cutoff
        ]
        # sorted() is stable with reverse=True, so ties keep insertion order
        return sorted(rows, key=lambda r: r.payment_date, reverse=True)

    # Payment operations
    def delete_payments(self, customer_id: int) -> None:
        self._tables.payments = [
            p for p in self._tables.payments if p.customer_id != customer_id
        ]

    def insert_payments(self, payments: list[PaymentRecord]) -> None:
        self._tables.payments.extend(replace(p) for p in payments)

    def list_payments(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[PaymentRecord]:
        rows = [
            replace(p) for p in self._tables.payments
            if (customer_id is None or p.customer_id == customer_id)
            and (since is None or p.payment_date >= since)
        ]
        return sorted(
            rows,
            key=lambda p: (p.payment_date, p.import_timestamp),
            reverse=True,
        )

    # Sale operations
    def sale_import_timestamps(
        self, customer_id: int
    ) -> dict[CalendarDay, datetime]:
        return {
            CalendarDay.of(s.sale_date): s.import_timestamp
            for s in self._tables.sales
            if s.customer_id == customer_id
        }

    def delete_sales(self, customer_id: int) -> None:
        self._tables.sales = [
            s for s in self._tables.sales if s.customer_id != customer_id
        ]

    def insert_sales(self, sales: list[SaleRecord]) -> None:
        self._tables.sales.extend(replace(s) for s in sales)

    def list_sales(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[SaleRecord]:
        rows = [
            replace(s) for s in self._tables.sales
            if (customer_id is None or s.customer_id == customer_id)
            and (since is None or s.sale_date >= since)
        ]
        return sorted(
            rows,
            key=lambda s: (s.sale_date, s.import_timestamp),
            reverse=True,
        )

    # Import control operations
    def get_import_control(
        self, file_name: str
    ) -> Optional[ImportControlRecord]:
        record = self._tables.import_control.get(file_name)
        return replace(record) if record else None

    def save_import_control(self, record: ImportControlRecord) -> None:
        self._tables.import_control[record.file_name] = replace(record)

    # Sync status operations
    def get_sync_status(self) -> Optional[SyncStatusRecord]:
        status = self._tables.sync_status
        return replace(status) if status else None

    def save_sync_status(self, record: SyncStatusRecord) -> None:
        self._tables.sync_status = replace(record)
