"""Cash flow helpers that decide how much money may go to extra payments.

Regular income is deemed to fund minimum payments first.  Whatever regular
cash is left, and whatever extra income remains after covering a regular
shortfall, is run through its own allocation policy:

``full``
    commit everything that is available.
``percent``
    commit ``value`` percent of what is available.
``fixed``
    commit ``value``, capped at what is available.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional

ZERO = Decimal("0")


def regular_free_cash(budget) -> Decimal:
    """Monthly income left after deductions and fixed expenses (may be negative)."""

    income = budget.salary + budget.other_income
    return income - budget.fixed_expenses - budget.deductions


def _full(available: Decimal, value: Optional[Decimal]) -> Decimal:
    return available


def _percent(available: Decimal, value: Optional[Decimal]) -> Decimal:
    pct = Decimal("100") if value is None else value
    return available * pct / Decimal("100")


def _fixed(available: Decimal, value: Optional[Decimal]) -> Decimal:
    return available if value is None else value


ALLOCATION_POLICIES: Dict[str, Callable[[Decimal, Optional[Decimal]], Decimal]] = {
    "full": _full,
    "percent": _percent,
    "fixed": _fixed,
}


def apply_allocation(kind: str, value: Optional[Decimal], available: Decimal) -> Decimal:
    """Return the share of ``available`` committed by the ``kind`` policy.

    The result is always between zero and ``available``.
    """

    if available <= 0:
        return ZERO
    try:
        policy = ALLOCATION_POLICIES[kind]
    except KeyError:
        raise ValueError(f"Unknown allocation type: {kind}")
    return min(max(policy(available, value), ZERO), available)


@dataclass(frozen=True)
class CashAllocation:
    """Breakdown of one month's cash after minimum payments."""

    net_regular: Decimal
    bonus_available: Decimal
    allocatable_from_regular: Decimal
    allocatable_from_bonus: Decimal
    cash_after_minimums: Decimal
    allocatable: Decimal


def split_allocatable(
    regular_cash: Decimal,
    total_bonus: Decimal,
    total_minimums: Decimal,
    config,
) -> CashAllocation:
    """Work out how much cash may be spent on extra payments this month."""

    net_regular = regular_cash - total_minimums
    allocatable_from_regular = ZERO
    if net_regular > 0:
        allocatable_from_regular = apply_allocation(
            config.allocation_type, config.allocation_value, net_regular
        )

    # A regular shortfall is covered from extra income first
    bonus_available = total_bonus + min(net_regular, ZERO)
    allocatable_from_bonus = ZERO
    if bonus_available > 0:
        allocatable_from_bonus = apply_allocation(
            config.extra_income_allocation_type,
            config.extra_income_allocation_value,
            bonus_available,
        )

    cash_after_minimums = max(regular_cash + total_bonus - total_minimums, ZERO)
    allocatable = min(allocatable_from_regular + allocatable_from_bonus, cash_after_minimums)
    return CashAllocation(
        net_regular=net_regular,
        bonus_available=bonus_available,
        allocatable_from_regular=allocatable_from_regular,
        allocatable_from_bonus=allocatable_from_bonus,
        cash_after_minimums=cash_after_minimums,
        allocatable=allocatable,
    )
