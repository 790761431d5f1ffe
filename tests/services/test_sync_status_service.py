"""Tests for the SyncStatusService."""

from datetime import datetime

from ledger_sync.models.enums import SyncState
from ledger_sync.schemas.sync import SyncStatusEvent
from ledger_sync.services.sync_status_service import SyncStatusService, describe


def event(**fields):
    data = {"state": "in_progress", "timestamp": "2025-10-20T12:00:00Z"}
    data.update(fields)
    return SyncStatusEvent.model_validate(data)


class TestDescribe:

    def test_progress(self):
        assert describe(event(currentFile=3, totalFiles=12, percent=25)) == (
            "Processing: 3/12 (25%)"
        )

    def test_completed(self):
        assert describe(event(state="completed", success=True, filesUpdated=4)) == (
            "Sync completed: 4 files updated"
        )

    def test_failed(self):
        assert describe(event(state="completed", error="quota exceeded")) == (
            "Sync failed: quota exceeded"
        )

    def test_failed_without_reason(self):
        assert describe(event(state="completed")) == "Sync failed: unknown"


class TestReport:

    def test_nothing_reported_yet(self, store):
        assert SyncStatusService(store).current() is None

    def test_latest_report_wins(self, store):
        service = SyncStatusService(store)
        service.report(event(currentFile=1, totalFiles=2, percent=50))
        service.report(event(
            state="completed",
            timestamp="2025-10-20T12:05:00Z",
            success=True,
            filesUpdated=2,
            filesSkipped=1,
            totalFiles=3,
            durationSeconds=300,
        ))

        status = service.current()
        assert status.state == SyncState.COMPLETED
        assert status.reported_at == datetime(2025, 10, 20, 12, 5)
        assert status.success is True
        assert status.files_skipped == 1
        assert status.duration_seconds == 300
        assert status.message == "Sync completed: 2 files updated"

    def test_progress_resets_completion_counters(self, store):
        service = SyncStatusService(store)
        service.report(event(
            state="completed", success=True, errorCount=2, durationSeconds=60,
        ))

        service.report(event(currentFile=1, totalFiles=5, percent=20))

        status = service.current()
        assert status.state == SyncState.IN_PROGRESS
        assert status.success is False
        assert status.error_count == 0
        assert status.duration_seconds == 0
        assert status.percent == 20
