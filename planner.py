"""Generate a monthly debt payoff plan.

The simulation starts on the first day of the current month and runs one
month at a time.  Each month interest is added to every open debt, the
minimum payments are made, and the cash left over is split between regular
and extra income (see ``cash_flow.split_allocatable``).  The allocatable part
is then paid to the debts in the order given by the plan's strategy:
smallest balance first for the snowball, highest rate first for the
avalanche.  The loop stops once every debt is paid off or after
``max_months`` months.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from cash_flow import regular_free_cash, split_allocatable
from event_scheduler import extra_income_for_month
from interest import monthly_interest
from minimum_payments import minimum_payment
from models import PlanConfig

logger = logging.getLogger(__name__)

MAX_MONTHS = 120
ZERO = Decimal("0")


@dataclass(frozen=True)
class DebtProjection:
    """One debt's activity during a projected month."""

    id: int | str
    name: str
    start_balance: Decimal
    interest: Decimal
    min_payment: Decimal
    actual_payment: Decimal
    end_balance: Decimal


@dataclass(frozen=True)
class MonthProjection:
    """Balances and payments for one projected month."""

    month_index: int
    date: date
    debts: Tuple[DebtProjection, ...]
    total_payment: Decimal
    total_interest: Decimal
    extra_income: Decimal
    remaining_cash: Decimal
    accumulated_cash: Decimal

    @property
    def total_balance(self) -> Decimal:
        return sum((d.end_balance for d in self.debts), ZERO)


class _Arena:
    """Private working copies of the debts for one simulation run."""

    def __init__(self, debts: Iterable):
        self.debts = {}
        seen = set()
        for d in debts:
            if d.id in seen:
                raise ValueError(f"Duplicate debt id: {d.id}")
            seen.add(d.id)
            if d.status == "closed":
                continue
            self.debts[d.id] = copy.deepcopy(d)

    def open_debts(self) -> List:
        return [d for d in self.debts.values() if d.balance > 0]

    def all_paid(self) -> bool:
        return not self.open_debts()


def generate_plan(
    debts: Iterable,
    budget,
    config: Optional[PlanConfig] = None,
    start: Optional[date] = None,
    max_months: int = MAX_MONTHS,
) -> List[MonthProjection]:
    """Return the month-by-month payoff projection.

    Parameters
    ----------
    debts:
        ``models.Debt`` records.  They are copied and never modified.
    budget:
        ``models.Budget`` describing the recurring monthly cash flow.
    config:
        ``models.PlanConfig``; snowball with full allocation when omitted.
    start:
        Date of the first projected month.  Defaults to the first day of the
        current month.
    max_months:
        Horizon cap.  A plan that hits it without paying everything off is
        returned as is.

    Returns
    -------
    List[MonthProjection]
        One record per month, empty when there is nothing to pay off.
    """

    config = config or PlanConfig()
    arena = _Arena(debts)
    current = (start or date.today()).replace(day=1)
    regular_cash = regular_free_cash(budget)
    accumulated_cash = ZERO
    projection: List[MonthProjection] = []

    month = 0
    while not arena.all_paid() and month < max_months:
        total_bonus = extra_income_for_month(budget.extra_income, current)

        # Interest first, then minimums on the post-interest balance
        rows: Dict[int | str, dict] = {}
        total_minimums = ZERO
        for debt in arena.debts.values():
            start_balance = debt.balance
            interest = ZERO
            payment = ZERO
            if debt.balance > 0:
                interest = monthly_interest(debt, current)
                debt.balance += interest
                payment = min(minimum_payment(debt), debt.balance)
                debt.balance -= payment
                total_minimums += payment
            rows[debt.id] = {
                "start_balance": start_balance,
                "interest": interest,
                "min_payment": payment,
                "actual_payment": payment,
            }

        cash = split_allocatable(regular_cash, total_bonus, total_minimums, config)
        allocatable = cash.allocatable
        extra_paid = ZERO
        if allocatable > 0:
            for debt in config.strategy.order(arena.open_debts()):
                if allocatable <= 0:
                    break
                amount = min(debt.balance, allocatable)
                debt.balance -= amount
                allocatable -= amount
                extra_paid += amount
                rows[debt.id]["actual_payment"] += amount

        remaining_cash = cash.cash_after_minimums - extra_paid
        accumulated_cash += remaining_cash
        debt_rows = tuple(
            DebtProjection(
                id=debt.id,
                name=debt.name,
                end_balance=debt.balance,
                **rows[debt.id],
            )
            for debt in arena.debts.values()
        )
        projection.append(
            MonthProjection(
                month_index=month,
                date=current,
                debts=debt_rows,
                total_payment=sum((r.actual_payment for r in debt_rows), ZERO),
                total_interest=sum((r.interest for r in debt_rows), ZERO),
                extra_income=total_bonus,
                remaining_cash=remaining_cash,
                accumulated_cash=accumulated_cash,
            )
        )
        logger.debug(
            "month %d (%s): minimums=%s extra=%s remaining=%s",
            month,
            current.isoformat(),
            total_minimums,
            extra_paid,
            remaining_cash,
        )

        month += 1
        current += relativedelta(months=1)

    if projection and not arena.all_paid():
        logger.info("Debts not paid off within %d months", max_months)
    return projection
