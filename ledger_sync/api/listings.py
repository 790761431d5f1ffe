"""
Read-only listings of customers, payments and sales.

These back the debtor, payment and sales views. They return rows,
not totals.
"""

from dataclasses import asdict
from datetime import date, datetime

from fastapi import APIRouter, Depends

from ledger_sync.api.dependencies import get_store, require_client
from ledger_sync.config import Settings, get_settings
from ledger_sync.schemas.sync import (
    CustomerResponse,
    PaymentResponse,
    SaleResponse,
)
from ledger_sync.storage.base import LedgerStore

router = APIRouter(tags=["Listings"], dependencies=[Depends(require_client)])


def _since(value: date | None, default: datetime) -> datetime:
    if value is None:
        return default
    return datetime(value.year, value.month, value.day)


def _customer_names(store: LedgerStore) -> dict[int, str]:
    return {c.id: c.name for c in store.list_customers()}


@router.get("/customers", response_model=list[CustomerResponse])
def list_customers(store: LedgerStore = Depends(get_store)):
    """All customers by name, with their outstanding balance."""
    return store.list_customers()


@router.get("/payments", response_model=list[PaymentResponse])
def list_payments(
    since: date | None = None,
    customer_id: int | None = None,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Payments from `since` (default: the payments cutoff), newest first."""
    names = _customer_names(store)
    payments = store.list_payments(
        customer_id=customer_id,
        since=_since(since, settings.PAYMENTS_CUTOFF_DATE),
    )
    return [
        PaymentResponse(**asdict(p), customer_name=names.get(p.customer_id))
        for p in payments
    ]


@router.get("/sales", response_model=list[SaleResponse])
def list_sales(
    since: date | None = None,
    customer_id: int | None = None,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Daily sales from `since` (default: the sales cutoff), newest first."""
    names = _customer_names(store)
    sales = store.list_sales(
        customer_id=customer_id,
        since=_since(since, settings.SALES_CUTOFF_DATE),
    )
    return [
        SaleResponse(**asdict(s), customer_name=names.get(s.customer_id))
        for s in sales
    ]
