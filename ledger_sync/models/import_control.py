"""
Import control model.

Records, per source file, when it was last modified, when it was
last synced, how many rows it had and whether the sync worked.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ledger_sync.models.base import Base


class ImportControlEntry(Base):
    __tablename__ = "import_control_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    # File name plus the import suffix
    file_name: Mapped[str] = mapped_column(
        String(300), unique=True, nullable=False, index=True
    )
    # Nullable because a failure can be recorded for a file that
    # never synced successfully.
    file_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_modified_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    last_sync_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    row_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    success: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    error_message: Mapped[str | None] = mapped_column(
        String(1000), nullable=True
    )

    def __repr__(self) -> str:
        state = "ok" if self.success else "failed"
        return f"<ImportControlEntry {self.file_name} ({state})>"
