"""
Consolidated record model.

A raw ledger row exactly as the spreadsheet reported it. The set
of rows for a customer is always the latest snapshot; rows are
never merged with earlier imports.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_sync.models.base import Base


class ConsolidatedRecord(Base):
    __tablename__ = "consolidated_records"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payment_date: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    disbursement: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    balance_snapshot: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    payment_type_tag: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    source_sheet: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    source_row: Mapped[int | None] = mapped_column(Integer, nullable=True)

    customer: Mapped["Customer"] = relationship(
        back_populates="consolidated_records"
    )

    def __repr__(self) -> str:
        return (
            f"<ConsolidatedRecord {self.payment_date} "
            f"{self.disbursement}>"
        )
