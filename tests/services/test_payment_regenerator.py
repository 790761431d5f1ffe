"""Tests for the PaymentRegenerator, working on stored records directly."""

from datetime import datetime
from decimal import Decimal

from ledger_sync.services.payment_regenerator import PaymentRegenerator
from ledger_sync.storage.records import ConsolidatedRow

CUTOFF = datetime(2025, 10, 1)
IMPORTED_AT = datetime(2025, 10, 20, 12, 0)


def add_customer(store, file_id="file-001"):
    return store.create_customer(
        file_id=file_id,
        name="Acme Hardware",
        outstanding_balance=Decimal("0"),
        last_modified_at=datetime(2025, 10, 18),
    )


def row(customer_id, payment_date, disbursement, tag=None):
    return ConsolidatedRow(
        customer_id=customer_id,
        payment_date=payment_date,
        disbursement=Decimal(str(disbursement)),
        balance_snapshot=Decimal("0"),
        payment_type_tag=tag,
    )


class TestRegenerate:

    def test_builds_payments_newest_first(self, store):
        customer_id = add_customer(store)
        store.insert_consolidated_records([
            row(customer_id, datetime(2025, 10, 2, 9), 10, "cash"),
            row(customer_id, datetime(2025, 10, 8, 9), 20, "transfer"),
        ])

        payments = PaymentRegenerator(store, CUTOFF).regenerate(
            customer_id, IMPORTED_AT
        )

        assert [p.amount for p in payments] == [Decimal("20"), Decimal("10")]
        assert payments[0].payment_type_tag == "transfer"
        assert all(p.import_timestamp == IMPORTED_AT for p in payments)
        assert all(p.sequence_in_day == 1 for p in payments)

    def test_same_day_ties_keep_insertion_order(self, store):
        customer_id = add_customer(store)
        same_moment = datetime(2025, 10, 10)
        store.insert_consolidated_records([
            row(customer_id, same_moment, 100),
            row(customer_id, same_moment, 200),
            row(customer_id, same_moment, 300),
        ])

        payments = PaymentRegenerator(store, CUTOFF).regenerate(
            customer_id, IMPORTED_AT
        )

        assert [(p.amount, p.sequence_in_day) for p in payments] == [
            (Decimal("100"), 3),
            (Decimal("200"), 2),
            (Decimal("300"), 1),
        ]

    def test_later_time_on_same_day_comes_first(self, store):
        customer_id = add_customer(store)
        store.insert_consolidated_records([
            row(customer_id, datetime(2025, 10, 10, 8), 1),
            row(customer_id, datetime(2025, 10, 10, 17), 2),
        ])

        payments = PaymentRegenerator(store, CUTOFF).regenerate(
            customer_id, IMPORTED_AT
        )

        assert [(p.amount, p.sequence_in_day) for p in payments] == [
            (Decimal("2"), 2),
            (Decimal("1"), 1),
        ]

    def test_replaces_previous_payments(self, store):
        customer_id = add_customer(store)
        store.insert_consolidated_records([
            row(customer_id, datetime(2025, 10, 3), 5),
        ])
        regenerator = PaymentRegenerator(store, CUTOFF)
        regenerator.regenerate(customer_id, IMPORTED_AT)

        store.delete_consolidated_records(customer_id)
        store.insert_consolidated_records([
            row(customer_id, datetime(2025, 10, 4), 7),
        ])
        regenerator.regenerate(customer_id, IMPORTED_AT)

        payments = store.list_payments(customer_id=customer_id)
        assert [p.amount for p in payments] == [Decimal("7")]

    def test_no_candidates_clears_payments(self, store):
        customer_id = add_customer(store)
        store.insert_consolidated_records([
            row(customer_id, datetime(2025, 10, 3), 5),
        ])
        regenerator = PaymentRegenerator(store, CUTOFF)
        regenerator.regenerate(customer_id, IMPORTED_AT)

        store.delete_consolidated_records(customer_id)
        store.insert_consolidated_records([
            row(customer_id, None, 5),
            row(customer_id, datetime(2025, 9, 1), 5),
        ])

        assert regenerator.regenerate(customer_id, IMPORTED_AT) == []
        assert store.list_payments(customer_id=customer_id) == []

    def test_other_customers_untouched(self, store):
        first = add_customer(store, "file-001")
        second = add_customer(store, "file-002")
        store.insert_consolidated_records([
            row(first, datetime(2025, 10, 3), 5),
            row(second, datetime(2025, 10, 3), 6),
        ])
        regenerator = PaymentRegenerator(store, CUTOFF)
        regenerator.regenerate(first, IMPORTED_AT)
        regenerator.regenerate(second, IMPORTED_AT)

        store.delete_consolidated_records(first)
        regenerator.regenerate(first, IMPORTED_AT)

        assert store.list_payments(customer_id=first) == []
        assert len(store.list_payments(customer_id=second)) == 1
