"""Storage layer for ledger data."""

from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.memory_store import InMemoryLedgerStore
from ledger_sync.storage.sqlalchemy_store import SqlAlchemyLedgerStore

__all__ = ["LedgerStore", "InMemoryLedgerStore", "SqlAlchemyLedgerStore"]
