"""
Per-day grouping and numbering shared by the payment and sale
regenerators.

Within one (customer, day) group of N items, the item processed
first gets N and the item processed last gets 1. Downstream day
listings rely on this exact numbering.
"""

from typing import Callable, Iterable, TypeVar

from ledger_sync.days import CalendarDay

T = TypeVar("T")


def group_by_day(
    items: Iterable[T], day_of: Callable[[T], CalendarDay]
) -> dict[CalendarDay, list[T]]:
    """Group items by day, keeping first-seen day order and item order."""
    groups: dict[CalendarDay, list[T]] = {}
    for item in items:
        groups.setdefault(day_of(item), []).append(item)
    return groups


def number_within_day(
    items: Iterable[T], day_of: Callable[[T], CalendarDay]
) -> list[tuple[T, int]]:
    """
    Pair every item with its sequence-in-day number.

    The result is ordered day by day, each day's items in their
    original order.
    """
    numbered: list[tuple[T, int]] = []
    for members in group_by_day(items, day_of).values():
        total = len(members)
        for position, item in enumerate(members):
            numbered.append((item, total - position))
    return numbered
