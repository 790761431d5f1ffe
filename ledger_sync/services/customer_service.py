"""
Customer service: one customer per spreadsheet file.

Customers are looked up by the file's external id, never by name:
a file can be renamed upstream and the rename must simply carry
over to the existing customer.
"""

import logging
from decimal import Decimal
from typing import Iterable

from ledger_sync.schemas.snapshot import LedgerSnapshot
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import CustomerRecord

LOGGER = logging.getLogger(__name__)


class CustomerService:

    def __init__(self, store: LedgerStore):
        self.store = store

    def upsert(self, snapshot: LedgerSnapshot) -> int:
        """
        Create or update the customer for a snapshot's file.

        Returns the customer's internal id. Name, balance and last
        modification time are always overwritten with the snapshot's
        values. A null balance is stored as zero.
        """
        balance = snapshot.outstanding_balance
        if balance is None:
            balance = Decimal("0")

        existing = self.store.find_customer(snapshot.file_id)
        if existing is None:
            customer_id = self.store.create_customer(
                file_id=snapshot.file_id,
                name=snapshot.file_name,
                outstanding_balance=balance,
                last_modified_at=snapshot.modified_at,
            )
            LOGGER.info(
                "Created customer %s for file %s",
                customer_id, snapshot.file_id,
            )
            return customer_id

        self.store.update_customer(
            existing.id,
            name=snapshot.file_name,
            outstanding_balance=balance,
            last_modified_at=snapshot.modified_at,
        )
        return existing.id

    def remove_inactive(self, active_file_ids: Iterable[str]) -> int:
        """
        Delete customers whose file is no longer in the active set.

        Their consolidated records, payments and sales go with them.
        The caller controls the unit of work.
        """
        removed = self.store.delete_customers_except(active_file_ids)
        if removed:
            LOGGER.info("Removed %d customers with inactive files", removed)
        return removed

    def list_customers(self) -> list[CustomerRecord]:
        return self.store.list_customers()
