"""Sync status service: progress of the upstream batch sync."""

import logging

from ledger_sync.models.enums import SyncState
from ledger_sync.schemas.sync import SyncStatusEvent
from ledger_sync.storage.base import LedgerStore
from ledger_sync.storage.records import SyncStatusRecord

LOGGER = logging.getLogger(__name__)


def describe(event: SyncStatusEvent) -> str:
    """Human readable summary shown on the dashboard."""
    if event.state == SyncState.COMPLETED:
        if event.success:
            return f"Sync completed: {event.files_updated} files updated"
        return f"Sync failed: {event.error or 'unknown'}"
    return (
        f"Processing: {event.current_file}/{event.total_files} "
        f"({event.percent}%)"
    )


class SyncStatusService:

    def __init__(self, store: LedgerStore):
        self.store = store

    def report(self, event: SyncStatusEvent) -> SyncStatusRecord:
        """
        Store the latest state of the sync run.

        A progress event resets the counters it does not carry.
        The caller controls the unit of work.
        """
        if event.state == SyncState.COMPLETED:
            record = SyncStatusRecord(
                state=event.state,
                reported_at=event.timestamp,
                message=describe(event),
                files_updated=event.files_updated,
                files_skipped=event.files_skipped,
                total_files=event.total_files,
                duration_seconds=event.duration_seconds,
                error_count=event.error_count,
                success=event.success,
                percent=event.percent,
            )
        else:
            record = SyncStatusRecord(
                state=event.state,
                reported_at=event.timestamp,
                message=describe(event),
                files_updated=event.files_updated,
                total_files=event.total_files,
                percent=event.percent,
                success=False,
            )

        self.store.save_sync_status(record)
        LOGGER.info("Sync status: %s", record.message)
        return record

    def current(self) -> SyncStatusRecord | None:
        return self.store.get_sync_status()
