"""Tests for the SaleRegenerator."""

from datetime import datetime
from decimal import Decimal

from ledger_sync.days import CalendarDay
from ledger_sync.schemas.snapshot import SaleRowIn
from ledger_sync.services.sale_regenerator import SaleRegenerator

CUTOFF = datetime(2025, 10, 1)


def sale_lines(*pairs):
    return [
        SaleRowIn.model_validate({"saleDate": day, "totalAmount": amount})
        for day, amount in pairs
    ]


def add_customer(store):
    return store.create_customer(
        file_id="file-001",
        name="Acme Hardware",
        outstanding_balance=Decimal("0"),
        last_modified_at=datetime(2025, 10, 18),
    )


class TestAggregate:

    def test_sums_per_day(self, store):
        totals = SaleRegenerator(store, CUTOFF).aggregate(sale_lines(
            ("2025-10-05", 50),
            ("2025-10-05T18:00:00Z", 70),
            ("2025-10-06", 1),
        ))

        assert totals == {
            CalendarDay.parse("2025-10-05"): Decimal("120"),
            CalendarDay.parse("2025-10-06"): Decimal("1"),
        }

    def test_day_decided_in_utc(self, store):
        totals = SaleRegenerator(store, CUTOFF).aggregate(sale_lines(
            ("2025-10-05T22:00:00-05:00", 10),
        ))

        assert list(totals) == [CalendarDay.parse("2025-10-06")]

    def test_skips_lines_before_cutoff(self, store):
        totals = SaleRegenerator(store, CUTOFF).aggregate(sale_lines(
            ("2025-09-30T23:59:59Z", 10),
        ))

        assert totals == {}


class TestRegenerate:

    def test_one_sale_per_day_newest_first(self, store):
        customer_id = add_customer(store)
        imported_at = datetime(2025, 10, 20, 12)

        sales = SaleRegenerator(store, CUTOFF).regenerate(
            customer_id,
            sale_lines(("2025-10-02", 5), ("2025-10-09", 9), ("2025-10-02", 5)),
            imported_at,
        )

        assert [(s.sale_date, s.total_amount) for s in sales] == [
            (datetime(2025, 10, 9), Decimal("9")),
            (datetime(2025, 10, 2), Decimal("10")),
        ]
        assert all(s.sequence_in_day == 1 for s in sales)
        assert all(s.import_timestamp == imported_at for s in sales)

    def test_existing_days_keep_their_timestamp(self, store):
        customer_id = add_customer(store)
        regenerator = SaleRegenerator(store, CUTOFF)
        first = datetime(2025, 10, 10, 8)
        second = datetime(2025, 10, 11, 8)

        regenerator.regenerate(
            customer_id, sale_lines(("2025-10-05", 5)), first
        )
        regenerator.regenerate(
            customer_id,
            sale_lines(("2025-10-05", 6), ("2025-10-06", 7)),
            second,
        )

        stamps = {
            CalendarDay.of(s.sale_date): s.import_timestamp
            for s in store.list_sales(customer_id=customer_id)
        }
        assert stamps == {
            CalendarDay.parse("2025-10-05"): first,
            CalendarDay.parse("2025-10-06"): second,
        }

    def test_empty_lines_clear_sales(self, store):
        customer_id = add_customer(store)
        regenerator = SaleRegenerator(store, CUTOFF)
        regenerator.regenerate(
            customer_id, sale_lines(("2025-10-05", 5)), datetime(2025, 10, 10)
        )

        assert regenerator.regenerate(customer_id, [], datetime(2025, 10, 11)) == []
        assert store.list_sales(customer_id=customer_id) == []
