"""SQLAlchemy implementation of LedgerStore."""

import time
from contextlib import contextmanager
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import select, delete, insert, text
from sqlalchemy.orm import Session

from ledger_sync.days import CalendarDay
from ledger_sync.models import (
    Customer,
    ConsolidatedRecord,
    Payment,
    Sale,
    ImportControlEntry,
    SyncStatus,
    SYNC_STATUS_ID,
)
from ledger_sync.storage.base import LedgerStore, check_elapsed
from ledger_sync.storage.records import (
    CustomerRecord,
    ConsolidatedRow,
    PaymentRecord,
    SaleRecord,
    ImportControlRecord,
    SyncStatusRecord,
)


def _customer_to_record(row: Customer) -> CustomerRecord:
    return CustomerRecord(
        id=row.id,
        file_id=row.file_id,
        name=row.name,
        outstanding_balance=row.outstanding_balance,
        last_modified_at=row.last_modified_at,
    )


def _consolidated_to_record(row: ConsolidatedRecord) -> ConsolidatedRow:
    return ConsolidatedRow(
        customer_id=row.customer_id,
        payment_date=row.payment_date,
        disbursement=row.disbursement,
        balance_snapshot=row.balance_snapshot,
        payment_type_tag=row.payment_type_tag,
        source_sheet=row.source_sheet,
        source_row=row.source_row,
    )


def _payment_to_record(row: Payment) -> PaymentRecord:
    return PaymentRecord(
        customer_id=row.customer_id,
        payment_date=row.payment_date,
        amount=row.amount,
        payment_type_tag=row.payment_type_tag,
        import_timestamp=row.import_timestamp,
        sequence_in_day=row.sequence_in_day,
    )


def _sale_to_record(row: Sale) -> SaleRecord:
    return SaleRecord(
        customer_id=row.customer_id,
        sale_date=row.sale_date,
        total_amount=row.total_amount,
        import_timestamp=row.import_timestamp,
        sequence_in_day=row.sequence_in_day,
    )


class SqlAlchemyLedgerStore(LedgerStore):
    """
    LedgerStore backed by a SQLAlchemy session.

    The store never commits on its own outside transaction(); the
    session passed in is owned by the caller (usually the request).
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, timeout_seconds: Optional[float] = None):
        started = time.monotonic()
        if timeout_seconds and self.db.get_bind().dialect.name == "postgresql":
            # Scoped to the transaction that is about to start
            limit_ms = int(timeout_seconds * 1000)
            self.db.execute(text(f"SET LOCAL statement_timeout = {limit_ms}"))
            self.db.execute(
                text(f"SET LOCAL idle_in_transaction_session_timeout = {limit_ms}")
            )
        try:
            yield
            check_elapsed(started, timeout_seconds)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # Customer operations
    def find_customer(self, file_id: str) -> Optional[CustomerRecord]:
        row = self.db.execute(
            select(Customer).where(Customer.file_id == file_id)
        ).scalar_one_or_none()
        return _customer_to_record(row) if row else None

    def create_customer(
        self,
        file_id: str,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> int:
        customer = Customer(
            file_id=file_id,
            name=name,
            outstanding_balance=outstanding_balance,
            last_modified_at=last_modified_at,
        )
        self.db.add(customer)
        self.db.flush()
        return customer.id

    def update_customer(
        self,
        customer_id: int,
        name: str,
        outstanding_balance: Decimal,
        last_modified_at: datetime,
    ) -> None:
        customer = self.db.get(Customer, customer_id)
        if customer is None:
            raise ValueError(f"Customer {customer_id} not found")
        customer.name = name
        customer.outstanding_balance = outstanding_balance
        customer.last_modified_at = last_modified_at
        self.db.flush()

    def list_customers(self) -> list[CustomerRecord]:
        rows = self.db.execute(
            select(Customer).order_by(Customer.name, Customer.id)
        ).scalars().all()
        return [_customer_to_record(r) for r in rows]

    def delete_customers_except(self, file_ids: Iterable[str]) -> int:
        keep = list(file_ids)
        doomed = list(self.db.execute(
            select(Customer.id).where(Customer.file_id.not_in(keep))
        ).scalars())
        if not doomed:
            return 0

        # SQLite does not enforce ON DELETE CASCADE unless asked to,
        # so children are removed explicitly.
        for model in (ConsolidatedRecord, Payment, Sale):
            self.db.execute(
                delete(model).where(model.customer_id.in_(doomed))
            )
        self.db.execute(delete(Customer).where(Customer.id.in_(doomed)))
        self.db.flush()
        return len(doomed)

    # Consolidated record operations
    def delete_consolidated_records(self, customer_id: int) -> None:
        self.db.execute(
            delete(ConsolidatedRecord).where(
                ConsolidatedRecord.customer_id == customer_id
            )
        )

    def insert_consolidated_records(self, rows: list[ConsolidatedRow]) -> None:
        if rows:
            self.db.execute(
                insert(ConsolidatedRecord), [asdict(r) for r in rows]
            )

    def list_consolidated_records(
        self, customer_id: int
    ) -> list[ConsolidatedRow]:
        rows = self.db.execute(
            select(ConsolidatedRecord)
            .where(ConsolidatedRecord.customer_id == customer_id)
            .order_by(ConsolidatedRecord.id)
        ).scalars().all()
        return [_consolidated_to_record(r) for r in rows]

    def payment_candidates(
        self, customer_id: int, cutoff: datetime
    ) -> list[ConsolidatedRow]:
        rows = self.db.execute(
            select(ConsolidatedRecord)
            .where(
                ConsolidatedRecord.customer_id == customer_id,
                ConsolidatedRecord.payment_date.is_not(None),
                ConsolidatedRecord.disbursement > 0,
                ConsolidatedRecord.payment_date >= cutoff,
            )
            .order_by(
                ConsolidatedRecord.payment_date.desc(),
                ConsolidatedRecord.id,
            )
        ).scalars().all()
        return [_consolidated_to_record(r) for r in rows]

    # Payment operations
    def delete_payments(self, customer_id: int) -> None:
        self.db.execute(delete(Payment).where(Payment.customer_id == customer_id))

    def insert_payments(self, payments: list[PaymentRecord]) -> None:
        if payments:
            self.db.execute(insert(Payment), [asdict(p) for p in payments])

    def list_payments(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[PaymentRecord]:
        query = select(Payment)
        if customer_id is not None:
            query = query.where(Payment.customer_id == customer_id)
        if since is not None:
            query = query.where(Payment.payment_date >= since)
        rows = self.db.execute(
            query.order_by(
                Payment.payment_date.desc(),
                Payment.import_timestamp.desc(),
                Payment.id,
            )
        ).scalars().all()
        return [_payment_to_record(r) for r in rows]

    # Sale operations
    def sale_import_timestamps(
        self, customer_id: int
    ) -> dict[CalendarDay, datetime]:
        rows = self.db.execute(
            select(Sale.sale_date, Sale.import_timestamp)
            .where(Sale.customer_id == customer_id)
        ).all()
        return {
            CalendarDay.of(sale_date): imported_at
            for sale_date, imported_at in rows
        }

    def delete_sales(self, customer_id: int) -> None:
        self.db.execute(delete(Sale).where(Sale.customer_id == customer_id))

    def insert_sales(self, sales: list[SaleRecord]) -> None:
        if sales:
            self.db.execute(insert(Sale), [asdict(s) for s in sales])

    def list_sales(
        self,
        customer_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[SaleRecord]:
        query = select(Sale)
        if customer_id is not None:
            query = query.where(Sale.customer_id == customer_id)
        if since is not None:
            query = query.where(Sale.sale_date >= since)
        rows = self.db.execute(
            query.order_by(
                Sale.sale_date.desc(),
                Sale.import_timestamp.desc(),
                Sale.id,
            )
        ).scalars().all()
        return [_sale_to_record(r) for r in rows]

    # Import control operations
    def get_import_control(
        self, file_name: str
    ) -> Optional[ImportControlRecord]:
        row = self.db.execute(
            select(ImportControlEntry).where(
                ImportControlEntry.file_name == file_name
            )
        ).scalar_one_or_none()
        if row is None:
            return None
        return ImportControlRecord(
            file_name=row.file_name,
            file_id=row.file_id,
            last_modified_at=row.last_modified_at,
            last_sync_at=row.last_sync_at,
            row_count=row.row_count,
            success=row.success,
            error_message=row.error_message,
        )

    def save_import_control(self, record: ImportControlRecord) -> None:
        row = self.db.execute(
            select(ImportControlEntry).where(
                ImportControlEntry.file_name == record.file_name
            )
        ).scalar_one_or_none()
        if row is None:
            row = ImportControlEntry(file_name=record.file_name)
            self.db.add(row)
        row.file_id = record.file_id
        row.last_modified_at = record.last_modified_at
        row.last_sync_at = record.last_sync_at
        row.row_count = record.row_count
        row.success = record.success
        row.error_message = record.error_message
        self.db.flush()

    # Sync status operations
    def get_sync_status(self) -> Optional[SyncStatusRecord]:
        row = self.db.get(SyncStatus, SYNC_STATUS_ID)
        if row is None:
            return None
        return SyncStatusRecord(
            state=row.state,
            reported_at=row.reported_at,
            message=row.message,
            files_updated=row.files_updated,
            files_skipped=row.files_skipped,
            total_files=row.total_files,
            percent=row.percent,
            duration_seconds=row.duration_seconds,
            error_count=row.error_count,
            success=row.success,
        )

    def save_sync_status(self, record: SyncStatusRecord) -> None:
        row = self.db.get(SyncStatus, SYNC_STATUS_ID)
        if row is None:
            row = SyncStatus(id=SYNC_STATUS_ID)
            self.db.add(row)
        for field, value in asdict(record).items():
            setattr(row, field, value)
        self.db.flush()
