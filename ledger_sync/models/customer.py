"""
Customer model.

One customer per external spreadsheet file. The file id is the
identity; the name follows whatever the file is currently called.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_sync.days import utcnow
from ledger_sync.models.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)
    file_id: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Signed: a negative balance means the customer is in credit
    outstanding_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    last_modified_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    consolidated_records: Mapped[list["ConsolidatedRecord"]] = relationship(
        back_populates="customer", passive_deletes=True
    )
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="customer", passive_deletes=True
    )
    sales: Mapped[list["Sale"]] = relationship(
        back_populates="customer", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Customer {self.name} ({self.file_id})>"
