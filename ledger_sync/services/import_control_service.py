"""
Import control service: per-file sync bookkeeping.

Success is recorded inside the ingestion's unit of work, so it only
becomes visible if the ingestion commits. Failure is recorded
afterwards, in a unit of work of its own. A failed failure write
raises LedgerWriteError, which the ingestion logs and swallows so
one error never turns into two.
"""

from datetime import datetime

from ledger_sync.errors import LedgerWriteError
from ledger_sync.schemas.snapshot import LedgerSnapshot
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import ImportControlRecord

# Longer messages are cut to fit the column
MAX_ERROR_LENGTH = 1000


class ImportControlService:

    def __init__(self, store: LedgerStore, file_suffix: str = ".xlsx"):
        self.store = store
        self.file_suffix = file_suffix

    def entry_name(self, file_name: str) -> str:
        return f"{file_name}{self.file_suffix}"

    def record_success(
        self, snapshot: LedgerSnapshot, synced_at: datetime, row_count: int
    ) -> ImportControlRecord:
        record = ImportControlRecord(
            file_name=self.entry_name(snapshot.file_name),
            file_id=snapshot.file_id,
            last_modified_at=snapshot.modified_at,
            last_sync_at=synced_at,
            row_count=row_count,
            success=True,
            error_message=None,
        )
        self.store.save_import_control(record)
        return record

    def record_failure(self, file_name: str, message: str) -> None:
        """
        Mark the file's last sync as failed.

        Other attributes of an existing entry are left alone. Raises
        LedgerWriteError if the write itself failed.
        """
        try:
            with self.store.transaction():
                name = self.entry_name(file_name)
                record = self.store.get_import_control(name)
                if record is None:
                    record = ImportControlRecord(file_name=name)
                record.success = False
                record.error_message = message[:MAX_ERROR_LENGTH]
                self.store.save_import_control(record)
        except Exception as e:
            raise LedgerWriteError(
                f"Could not record failed sync for {file_name}: {e}"
            ) from e

    def get(self, file_name: str) -> ImportControlRecord | None:
        return self.store.get_import_control(self.entry_name(file_name))
