"""
Sale model.

One row per customer per UTC day, holding the sum of that day's
sale lines.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_sync.models.base import Base


class Sale(Base):
    """
    Daily sales total for a customer.

    import_timestamp is the moment the day was first imported.
    Re-importing the same day keeps the original value so the
    dashboard's "recently updated" marker does not move on every
    sync.
    """

    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sale_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    import_timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False
    )
    sequence_in_day: Mapped[int] = mapped_column(Integer, nullable=False)

    customer: Mapped["Customer"] = relationship(back_populates="sales")

    def __repr__(self) -> str:
        return f"<Sale {self.sale_date:%Y-%m-%d} {self.total_amount}>"
