"""Consolidated record service: raw ledger rows, replaced wholesale."""

from ledger_sync.schemas.snapshot import ConsolidatedRowIn
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import ConsolidatedRow


class ConsolidatedRecordService:

    def __init__(self, store: LedgerStore):
        self.store = store

    def replace(
        self, customer_id: int, rows: list[ConsolidatedRowIn]
    ) -> int:
        """
        Make the customer's stored rows exactly equal to rows.

        The delete always runs, even for an empty snapshot, so stale
        rows never survive. Returns the number of rows stored.
        """
        self.store.delete_consolidated_records(customer_id)
        if not rows:
            return 0

        self.store.insert_consolidated_records([
            ConsolidatedRow(
                customer_id=customer_id,
                payment_date=row.payment_date,
                disbursement=row.disbursement,
                balance_snapshot=row.balance_snapshot,
                payment_type_tag=row.payment_type_tag or None,
                source_sheet=row.source_sheet or None,
                source_row=row.source_row,
            )
            for row in rows
        ])
        return len(rows)
