"""Summaries derived from a generated payoff plan."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from models import PlanConfig, Strategy
from planner import MonthProjection, generate_plan

ZERO = Decimal("0")


def total_interest(plan: List[MonthProjection]) -> Decimal:
    return sum((m.total_interest for m in plan), ZERO)


def total_paid(plan: List[MonthProjection]) -> Decimal:
    return sum((m.total_payment for m in plan), ZERO)


def is_paid_off(plan: List[MonthProjection]) -> bool:
    """True if the last projected month leaves nothing owed."""

    return not plan or plan[-1].total_balance == 0


def payoff_date(plan: List[MonthProjection]) -> Optional[date]:
    """Month in which the last debt is cleared, or None if it never is."""

    if not plan or not is_paid_off(plan):
        return None
    return plan[-1].date


def debt_payoff_months(plan: List[MonthProjection]) -> Dict[int | str, int]:
    """Map each debt id to the first month index that ends with it at zero."""

    months: Dict[int | str, int] = {}
    for m in plan:
        for d in m.debts:
            if d.end_balance == 0 and d.id not in months:
                months[d.id] = m.month_index
    return months


def plan_rows(plan: List[MonthProjection]) -> List[dict]:
    """Flatten the plan into one row per month."""

    return [
        {
            "month": m.date.strftime("%b %Y"),
            "total_payment": m.total_payment,
            "principal": m.total_payment - m.total_interest,
            "interest": m.total_interest,
            "remaining_debt": m.total_balance,
            "remaining_cash": m.remaining_cash,
        }
        for m in plan
    ]


@dataclass
class PlanSummary:
    strategy: Strategy
    months: int
    total_interest: Decimal
    total_paid: Decimal
    payoff_date: Optional[date]


def summarize(plan: List[MonthProjection], strategy: Strategy) -> PlanSummary:
    return PlanSummary(
        strategy=strategy,
        months=len(plan),
        total_interest=total_interest(plan),
        total_paid=total_paid(plan),
        payoff_date=payoff_date(plan),
    )


def compare_strategies(
    debts, budget, config: Optional[PlanConfig] = None, start: Optional[date] = None
) -> Dict[Strategy, PlanSummary]:
    """Run the same budget through every strategy."""

    config = config or PlanConfig()
    results = {}
    for strategy in Strategy:
        plan = generate_plan(debts, budget, replace(config, strategy=strategy), start=start)
        results[strategy] = summarize(plan, strategy)
    return results


@dataclass
class Savings:
    interest_saved: Decimal
    months_saved: int
    baseline_interest: Decimal
    plan_interest: Decimal


def savings_vs_minimums(
    debts, budget, config: Optional[PlanConfig] = None, start: Optional[date] = None
) -> Savings:
    """Compare a plan with paying only the minimums on the same budget.

    A baseline capped at the horizon understates its interest, so the
    savings are a lower bound in that case.
    """

    plan = generate_plan(debts, budget, config, start=start)
    baseline = generate_plan(debts, budget, PlanConfig.minimums_only(), start=start)
    plan_interest = total_interest(plan)
    baseline_interest = total_interest(baseline)
    return Savings(
        interest_saved=max(ZERO, baseline_interest - plan_interest),
        months_saved=max(0, len(baseline) - len(plan)),
        baseline_interest=baseline_interest,
        plan_interest=plan_interest,
    )
