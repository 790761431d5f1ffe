"""
Sale regenerator.

Rebuilds a customer's daily sales from the snapshot's sale lines.
All lines of one UTC day collapse into a single sale holding their
sum.

A day that already had a sale keeps its original import timestamp;
only days seen for the first time get the current one. The lookup
happens before the old sales are deleted.
"""

from datetime import datetime
from decimal import Decimal

from ledger_sync.days import CalendarDay
from ledger_sync.schemas.snapshot import SaleRowIn
from ledger_sync.services.sequencing import number_within_day
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import SaleRecord


class SaleRegenerator:

    def __init__(self, store: LedgerStore, cutoff: datetime):
        self.store = store
        self.cutoff = cutoff

    def aggregate(self, sale_rows: list[SaleRowIn]) -> dict[CalendarDay, Decimal]:
        """Sum the sale lines on or after the cutoff, per day."""
        totals: dict[CalendarDay, Decimal] = {}
        for row in sale_rows:
            if row.sale_date < self.cutoff:
                continue
            day = CalendarDay.of(row.sale_date)
            totals[day] = totals.get(day, Decimal("0")) + row.total_amount
        return totals

    def regenerate(
        self,
        customer_id: int,
        sale_rows: list[SaleRowIn],
        import_timestamp: datetime,
    ) -> list[SaleRecord]:
        """Replace the customer's sales. Returns what was inserted."""
        totals = self.aggregate(sale_rows)

        previous = self.store.sale_import_timestamps(customer_id)
        self.store.delete_sales(customer_id)

        if not totals:
            return []

        # Newest day first
        daily = sorted(totals.items(), reverse=True)

        sales = [
            SaleRecord(
                customer_id=customer_id,
                sale_date=day.start(),
                total_amount=total,
                import_timestamp=previous.get(day, import_timestamp),
                sequence_in_day=sequence,
            )
            for (day, total), sequence in number_within_day(
                daily, lambda pair: pair[0]
            )
        ]

        self.store.insert_sales(sales)
        return sales
