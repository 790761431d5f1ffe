"""Tests for snapshot validation."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledger_sync.errors import SnapshotValidationError
from ledger_sync.services.snapshot_validator import validate_snapshot


def paths_of(exc_info):
    return {error.path for error in exc_info.value.errors}


class TestValidSnapshot:

    def test_fields_are_normalised(self, make_payload):
        snapshot = validate_snapshot(make_payload())

        assert snapshot.file_id == "file-001"
        assert snapshot.file_name == "Acme Hardware"
        assert snapshot.modified_at == datetime(2025, 10, 18, 9, 30)
        assert snapshot.outstanding_balance == Decimal("1500")
        assert len(snapshot.consolidated_rows) == 2
        assert len(snapshot.sale_rows) == 2

    def test_date_only_means_midnight_utc(self, make_payload):
        snapshot = validate_snapshot(make_payload())

        assert snapshot.sale_rows[0].sale_date == datetime(2025, 10, 5)

    def test_offsets_converted_to_utc(self, make_payload):
        snapshot = validate_snapshot(
            make_payload(modifiedAt="2025-10-18T09:30:00-03:00")
        )

        assert snapshot.modified_at == datetime(2025, 10, 18, 12, 30)
        assert snapshot.modified_at.tzinfo is None

    def test_optional_row_fields_may_be_missing(self, make_payload):
        snapshot = validate_snapshot(make_payload())
        row = snapshot.consolidated_rows[1]

        assert row.payment_type_tag is None
        assert row.source_sheet is None
        assert row.source_row is None

    def test_null_payment_date_allowed(self, make_payload):
        snapshot = validate_snapshot(make_payload(consolidatedRows=[
            {"paymentDate": None, "disbursement": 0, "balanceSnapshot": 10},
        ]))

        assert snapshot.consolidated_rows[0].payment_date is None

    def test_null_balance_allowed(self, make_payload):
        snapshot = validate_snapshot(make_payload(outstandingBalance=None))

        assert snapshot.outstanding_balance is None

    def test_empty_row_lists_allowed(self, make_payload):
        snapshot = validate_snapshot(
            make_payload(consolidatedRows=[], saleRows=[])
        )

        assert snapshot.consolidated_rows == []
        assert snapshot.sale_rows == []

    def test_fractional_amount(self, make_payload):
        snapshot = validate_snapshot(make_payload(saleRows=[
            {"saleDate": "2025-10-05", "totalAmount": 12.5},
        ]))

        assert snapshot.sale_rows[0].total_amount == Decimal("12.5")


class TestInvalidSnapshot:

    @pytest.mark.parametrize("payload", [None, [], "snapshot", 42])
    def test_non_object_rejected(self, payload):
        with pytest.raises(SnapshotValidationError):
            validate_snapshot(payload)

    @pytest.mark.parametrize("key", [
        "fileId",
        "fileName",
        "modifiedAt",
        "outstandingBalance",
        "consolidatedRows",
        "saleRows",
    ])
    def test_missing_key_rejected(self, make_payload, key):
        payload = make_payload()
        del payload[key]

        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(payload)

        assert key in paths_of(exc_info)

    def test_empty_file_id_rejected(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(fileId=""))

        assert "fileId" in paths_of(exc_info)

    def test_bad_timestamp_rejected(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(modifiedAt="last tuesday"))

        assert "modifiedAt" in paths_of(exc_info)

    def test_rows_must_be_a_list(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(saleRows={"saleDate": "2025-10-05"}))

        assert "saleRows" in paths_of(exc_info)

    def test_error_path_points_at_row(self, make_payload):
        payload = make_payload()
        payload["consolidatedRows"][1]["disbursement"] = "abc"

        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(payload)

        assert "consolidatedRows.1.disbursement" in paths_of(exc_info)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_amount_rejected(self, make_payload, amount):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(saleRows=[
                {"saleDate": "2025-10-05", "totalAmount": amount},
            ]))

        assert "saleRows.0.totalAmount" in paths_of(exc_info)

    @pytest.mark.parametrize("amount", ["100", "12.5", True, False])
    def test_amount_must_be_a_json_number(self, make_payload, amount):
        payload = make_payload()
        payload["consolidatedRows"][0]["disbursement"] = amount

        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(payload)

        assert "consolidatedRows.0.disbursement" in paths_of(exc_info)

    def test_balance_must_be_a_json_number(self, make_payload):
        with pytest.raises(SnapshotValidationError):
            validate_snapshot(make_payload(outstandingBalance="1500"))

    @pytest.mark.parametrize("value", [1700000000, 1700000000.5, True])
    def test_timestamp_must_be_a_string(self, make_payload, value):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(modifiedAt=value))

        assert "modifiedAt" in paths_of(exc_info)

    def test_numeric_sale_date_rejected(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(saleRows=[
                {"saleDate": 20251005, "totalAmount": 5},
            ]))

        assert "saleRows.0.saleDate" in paths_of(exc_info)

    @pytest.mark.parametrize("value", [
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-05:00",
    ])
    def test_date_outside_utc_range_rejected(self, make_payload, value):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(modifiedAt=value))

        assert "modifiedAt" in paths_of(exc_info)
        assert any(
            "date out of range" in e.reason for e in exc_info.value.errors
        )

    def test_sale_date_required(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(saleRows=[
                {"saleDate": None, "totalAmount": 5},
            ]))

        assert "saleRows.0.saleDate" in paths_of(exc_info)

    def test_every_problem_reported(self, make_payload):
        with pytest.raises(SnapshotValidationError) as exc_info:
            validate_snapshot(make_payload(fileId="", modifiedAt="soon"))

        assert {"fileId", "modifiedAt"} <= paths_of(exc_info)
        assert "Invalid snapshot" in str(exc_info.value)

    def test_is_a_value_error(self, make_payload):
        with pytest.raises(ValueError):
            validate_snapshot(make_payload(fileName=None))
