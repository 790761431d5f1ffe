"""
Payment model.

Derived from consolidated records on every ingestion. Nothing
else creates, edits or deletes payments.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_sync.models.base import Base


class Payment(Base):
    """
    A customer payment on a given day.

    sequence_in_day numbers the payments of one customer on one
    UTC day from 1 to N.
    """

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payment_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    payment_type_tag: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    import_timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False
    )
    sequence_in_day: Mapped[int] = mapped_column(Integer, nullable=False)

    customer: Mapped["Customer"] = relationship(back_populates="payments")

    def __repr__(self) -> str:
        return (
            f"<Payment {self.payment_date:%Y-%m-%d} #{self.sequence_in_day} "
            f"{self.amount}>"
        )
