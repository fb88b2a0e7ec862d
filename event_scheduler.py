"""Resolve extra income entries into the calendar months they pay out in."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List

from dateutil.relativedelta import relativedelta


@dataclass
class Event:
    date: date
    name: str
    amount: Decimal
    frequency: str


def fires_in(entry, year: int, month: int) -> bool:
    """Return True if ``entry`` pays out in ``year``/``month``.

    One-time and monthly entries without a year never fire; validation in
    ``models.ExtraIncome.from_dict`` rejects them before they get here.
    """

    if entry.frequency == "yearly":
        return entry.month == month
    if entry.year is None:
        return False
    if entry.frequency == "one-time":
        return entry.month == month and entry.year == year
    if entry.frequency == "monthly":
        return (year, month) >= (entry.year, entry.month)
    return False


def extra_income_for_month(entries: Iterable, when: date) -> Decimal:
    """Total extra income paid out in the calendar month of ``when``."""

    return sum(
        (e.amount for e in entries if fires_in(e, when.year, when.month)),
        Decimal("0"),
    )


def upcoming_events(entries: Iterable, start: date, months: int = 12) -> List[Event]:
    """List extra income payouts over ``months`` months from ``start``."""

    entries = list(entries)
    events: List[Event] = []
    current = start.replace(day=1)
    for _ in range(months):
        for e in entries:
            if fires_in(e, current.year, current.month):
                events.append(
                    Event(date=current, name=e.name, amount=e.amount, frequency=e.frequency)
                )
        current += relativedelta(months=1)
    return events
