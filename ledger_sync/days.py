"""
Calendar day handling.

Payments and sales are grouped and numbered per calendar day.
The day a timestamp belongs to is always decided in UTC, never
in the server's local timezone, so the same snapshot groups the
same way wherever it is processed.

Naive datetimes are treated as already being UTC. That is also
how every datetime is stored in the database.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone


def to_naive_utc(value: datetime) -> datetime:
    """Convert any datetime to the naive-UTC form used for storage."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True, order=True)
class CalendarDay:
    """A date-only key, derived from a timestamp using UTC day boundaries."""

    value: date

    @classmethod
    def of(cls, moment: datetime) -> "CalendarDay":
        return cls(to_naive_utc(moment).date())

    @classmethod
    def parse(cls, text: str) -> "CalendarDay":
        return cls(date.fromisoformat(text))

    def start(self) -> datetime:
        """Midnight UTC of this day, as a naive datetime."""
        return datetime(self.value.year, self.value.month, self.value.day)

    def isoformat(self) -> str:
        return self.value.isoformat()

    def __str__(self) -> str:
        return self.isoformat()
