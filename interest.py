"""Interest calculation for debts.

Interest is simple monthly interest on the balance carried into the month,
at the nominal annual rate or, while a promotion is running, at the promo
rate.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal

MONTHS_PER_YEAR = Decimal("12")
HUNDRED = Decimal("100")


def effective_rate(debt, as_of: date) -> Decimal:
    """Return the annual percentage rate that applies on ``as_of``."""

    if (
        debt.promo_rate is not None
        and debt.promo_end_date is not None
        and as_of <= debt.promo_end_date
    ):
        return debt.promo_rate
    return debt.interest_rate


def monthly_interest(debt, as_of: date) -> Decimal:
    """Return one month's interest on the current balance of ``debt``."""

    if debt.status == "closed":
        return Decimal("0")
    return debt.balance * effective_rate(debt, as_of) / HUNDRED / MONTHS_PER_YEAR


def estimate_payoff_months(debt, monthly_payment: Decimal) -> float | int:
    """Estimate how many equal payments clear ``debt`` at its nominal rate.

    Uses the annuity formula ``n = -log(1 - r*P/A) / log(1 + r)`` rounded up.
    Returns ``math.inf`` when the payment does not even cover the interest.
    """

    payment = Decimal(str(monthly_payment))
    if payment <= 0 or debt.balance <= 0:
        return 0
    rate = debt.interest_rate / HUNDRED / MONTHS_PER_YEAR
    if rate == 0:
        return math.ceil(debt.balance / payment)
    if payment <= debt.balance * rate:
        return math.inf
    n = -math.log(1 - float(rate * debt.balance / payment)) / math.log(1 + float(rate))
    return math.ceil(n)
