"""
Sync status model.

A single row describing the most recent batch run of the upstream
spreadsheet sync, as reported through the webhook.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Integer, Boolean, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from ledger_sync.models.base import Base
from ledger_sync.models.enums import SyncState


SYNC_STATUS_ID = "spreadsheet-sync"


class SyncStatus(Base):
    __tablename__ = "sync_status"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    state: Mapped[SyncState] = mapped_column(
        SAEnum(SyncState, name="sync_state_enum", create_constraint=True),
        nullable=False,
    )
    reported_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    files_updated: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    files_skipped: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    total_files: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    percent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    error_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    success: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    message: Mapped[str] = mapped_column(String(500), nullable=False)

    def __repr__(self) -> str:
        return f"<SyncStatus {self.state.value} {self.reported_at}>"
