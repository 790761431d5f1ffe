"""
Pydantic schemas for incoming ledger snapshots.

A snapshot is the full current content of one spreadsheet file:
its raw ledger rows and its sale lines. The sync process sends
camelCase keys; the Python side uses snake_case attributes.

Dates arrive as ISO-8601 strings, either full timestamps (with or
without an offset) or plain YYYY-MM-DD days. Both end up as naive
UTC datetimes. Amounts end up as Decimal and must be finite.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator, Field

from ledger_sync.days import to_naive_utc
from ledger_sync.schemas.common import CamelModel

# Also the width of the name columns
NAME_MAX_LENGTH = 255


def _timestamp_text(value):
    if not isinstance(value, str):
        raise ValueError("expected an ISO-8601 date string")
    value = value.strip()
    # "2025-10-05" means midnight UTC of that day
    if len(value) == 10:
        return value + "T00:00:00Z"
    return value


def _as_utc(value: datetime) -> datetime:
    try:
        return to_naive_utc(value)
    except OverflowError:
        raise ValueError("date out of range")


def _require_number(value):
    # JSON numbers only; bool is a subclass of int
    if isinstance(value, (str, bool)):
        raise ValueError("expected a number")
    return value


Timestamp = Annotated[
    datetime,
    BeforeValidator(_timestamp_text),
    AfterValidator(_as_utc),
]

Amount = Annotated[
    Decimal,
    Field(allow_inf_nan=False),
    BeforeValidator(_require_number),
]


class ConsolidatedRowIn(CamelModel):
    """One raw ledger row from the spreadsheet."""
    payment_date: Timestamp | None = Field(alias="paymentDate")
    disbursement: Amount
    balance_snapshot: Amount = Field(alias="balanceSnapshot")
    payment_type_tag: str | None = Field(default=None, alias="paymentTypeTag")
    source_sheet: str | None = Field(default=None, alias="sourceSheet")
    source_row: int | None = Field(default=None, alias="sourceRow")


class SaleRowIn(CamelModel):
    """One sale line. Several lines may fall on the same day."""
    sale_date: Timestamp = Field(alias="saleDate")
    total_amount: Amount = Field(alias="totalAmount")


class LedgerSnapshot(CamelModel):
    """The validated form of a snapshot payload."""
    file_id: str = Field(
        min_length=1, max_length=NAME_MAX_LENGTH, alias="fileId"
    )
    file_name: str = Field(
        min_length=1, max_length=NAME_MAX_LENGTH, alias="fileName"
    )
    modified_at: Timestamp = Field(alias="modifiedAt")
    # Required key, but the value may be null
    outstanding_balance: Amount | None = Field(alias="outstandingBalance")
    consolidated_rows: list[ConsolidatedRowIn] = Field(
        alias="consolidatedRows"
    )
    sale_rows: list[SaleRowIn] = Field(alias="saleRows")


class IngestionResponse(CamelModel):
    """Envelope returned after a snapshot was applied."""
    success: bool = True
    customer_id: int = Field(alias="customerId")
    consolidated_row_count: int = Field(
        alias="consolidatedRowCount"
    )
    sale_row_count: int = Field(alias="saleRowCount")
    duration_seconds: int = Field(alias="durationSeconds")
