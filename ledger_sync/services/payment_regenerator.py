"""
Payment regenerator.

Rebuilds a customer's payments from the consolidated records that
were just stored:
1. Deletes every existing payment of the customer
2. Selects rows with a payment date on/after the cutoff and a
   positive disbursement, newest first
3. Groups them by UTC day and numbers each day in reverse
4. Bulk-inserts the result

Runs inside the ingestion's unit of work; any error aborts it.
"""

import logging
from datetime import datetime

from ledger_sync.days import CalendarDay
from ledger_sync.services.sequencing import number_within_day
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import PaymentRecord

LOGGER = logging.getLogger(__name__)


class PaymentRegenerator:

    def __init__(self, store: LedgerStore, cutoff: datetime):
        self.store = store
        self.cutoff = cutoff

    def regenerate(
        self, customer_id: int, import_timestamp: datetime
    ) -> list[PaymentRecord]:
        """
        Replace the customer's payments. Returns what was inserted.

        Reads the stored consolidated records, not the incoming
        payload, so it only ever sees the current snapshot.
        """
        self.store.delete_payments(customer_id)

        candidates = self.store.payment_candidates(customer_id, self.cutoff)
        if not candidates:
            LOGGER.debug("Customer %s has no qualifying payments", customer_id)
            return []

        payments = [
            PaymentRecord(
                customer_id=customer_id,
                payment_date=row.payment_date,
                amount=row.disbursement,
                payment_type_tag=row.payment_type_tag,
                import_timestamp=import_timestamp,
                sequence_in_day=sequence,
            )
            for row, sequence in number_within_day(
                candidates, lambda r: CalendarDay.of(r.payment_date)
            )
        ]

        self.store.insert_payments(payments)
        return payments
