"""Minimum payment calculation formulas for debts.

Each formula takes a ``debt`` object and returns its minimum payment as a
``Decimal``.  Formulas are registered in ``FORMULAS`` under the name stored in
``debt.min_payment_type``.  An installment amount in ``debt.fixed_payment``
takes precedence over any formula.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict


def percent_of_balance(debt) -> Decimal:
    """Percentage of the current balance, never below zero."""

    return max(debt.balance * debt.min_payment_value / Decimal("100"), Decimal("0"))


def fixed_amount(debt) -> Decimal:
    return debt.min_payment_value


FORMULAS: Dict[str, Callable[[object], Decimal]] = {
    "percent": percent_of_balance,
    "fixed": fixed_amount,
}


def minimum_payment(debt) -> Decimal:
    """Return the payment ``debt`` requires this month.

    The result is not capped at the balance; the caller does that once
    interest has been added.
    """

    if debt.status == "closed":
        return Decimal("0")
    if debt.fixed_payment:
        return debt.fixed_payment
    try:
        formula = FORMULAS[debt.min_payment_type]
    except KeyError:
        raise ValueError(f"Unknown minimum payment type: {debt.min_payment_type}")
    return formula(debt)
