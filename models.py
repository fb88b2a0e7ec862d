"""Input records for the payoff planner.

Debts, the monthly budget and the plan settings are plain dataclasses.  The
``from_dict`` constructors accept the JSON documents stored by ``fin.py`` and
reject malformed values with ``ValueError`` so the planner itself only ever
sees sanitized input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple


MIN_PAYMENT_TYPES = ("percent", "fixed")
ALLOCATION_TYPES = ("full", "percent", "fixed")
FREQUENCIES = ("one-time", "monthly", "yearly")
STATUSES = ("active", "closed")
EXPENSE_FIELDS = ("housing", "food", "transport", "other")


class Strategy(Enum):
    """Order in which extra cash is sent to open debts."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"

    def sort_key(self, debt: "Debt") -> Tuple[Decimal, Decimal]:
        if self is Strategy.AVALANCHE:
            # Highest rate first, smaller balance breaks ties
            return (-debt.interest_rate, debt.balance)
        # Smallest balance first, higher rate breaks ties
        return (debt.balance, -debt.interest_rate)

    def order(self, debts):
        return sorted(debts, key=self.sort_key)


# ---------------------------------------------------------------------------
# Parsing helpers


def _parse_date(value: date | str | None) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def _money(data: dict, key: str, default=0) -> Decimal:
    value = data.get(key)
    amount = Decimal(str(default if value is None else value))
    if amount < 0:
        raise ValueError(f"{key} must not be negative: {amount}")
    return amount


def _optional_money(data: dict, key: str) -> Optional[Decimal]:
    if data.get(key) is None:
        return None
    return _money(data, key)


def _choice(data: dict, key: str, choices: Tuple[str, ...], default: str) -> str:
    value = data.get(key) or default
    if value not in choices:
        raise ValueError(f"Unknown {key}: {value}")
    return value


def _check_allocation(kind: str, value: Optional[Decimal], label: str) -> None:
    if kind == "percent" and value is not None and value > 100:
        raise ValueError(f"{label} percent must be between 0 and 100: {value}")


# ---------------------------------------------------------------------------
# Records


@dataclass
class Debt:
    """One owed balance."""

    id: int | str
    name: str
    balance: Decimal
    interest_rate: Decimal
    min_payment_type: str = "percent"
    min_payment_value: Decimal = Decimal("0")
    fixed_payment: Optional[Decimal] = None
    promo_rate: Optional[Decimal] = None
    promo_end_date: Optional[date] = None
    status: str = "active"
    category: str = "other"
    due_day: Optional[int] = None
    notes: str = ""

    @property
    def is_closed(self) -> bool:
        return self.status == "closed"

    @classmethod
    def from_dict(cls, data: dict, default_id: int | str | None = None) -> "Debt":
        """Build a debt from a stored document, validating every field."""

        due_day = data.get("due_day")
        if due_day is not None:
            due_day = int(due_day)
            if not 1 <= due_day <= 31:
                raise ValueError(f"due_day must be between 1 and 31: {due_day}")
        min_payment_type = _choice(data, "min_payment_type", MIN_PAYMENT_TYPES, "percent")
        min_payment_value = _money(data, "min_payment_value")
        if min_payment_type == "percent" and min_payment_value > 100:
            raise ValueError(
                f"min_payment_value percent must be between 0 and 100: {min_payment_value}"
            )
        return cls(
            id=default_id if data.get("id") is None else data["id"],
            name=data.get("name", "Debt"),
            balance=_money(data, "balance"),
            interest_rate=_money(data, "interest_rate"),
            min_payment_type=min_payment_type,
            min_payment_value=min_payment_value,
            fixed_payment=_optional_money(data, "fixed_payment"),
            promo_rate=_optional_money(data, "promo_rate"),
            promo_end_date=_parse_date(data.get("promo_end_date")),
            status=_choice(data, "status", STATUSES, "active"),
            category=data.get("category") or "other",
            due_day=due_day,
            notes=data.get("notes", ""),
        )


@dataclass
class ExtraIncome:
    """Irregular income such as a bonus.

    ``month`` and ``year`` name the month a one-time entry pays out, or the
    first month of a monthly entry.  Yearly entries ignore ``year``.
    """

    month: int
    amount: Decimal
    frequency: str = "one-time"
    year: Optional[int] = None
    name: str = "Extra income"

    @classmethod
    def from_dict(cls, data: dict) -> "ExtraIncome":
        month = int(data["month"])
        if not 1 <= month <= 12:
            raise ValueError(f"month must be between 1 and 12: {month}")
        frequency = _choice(data, "frequency", FREQUENCIES, "one-time")
        year = data.get("year")
        year = int(year) if year not in (None, "") else None
        if year is None and frequency != "yearly":
            raise ValueError(f"{frequency} extra income requires a year")
        return cls(
            month=month,
            amount=_money(data, "amount"),
            frequency=frequency,
            year=year,
            name=data.get("name", "Extra income"),
        )


@dataclass
class Budget:
    """Recurring monthly cash flow."""

    salary: Decimal = Decimal("0")
    other_income: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    social_insurance: Decimal = Decimal("0")
    retirement_fund: Decimal = Decimal("0")
    expenses: dict = field(default_factory=dict)
    custom_expenses: List[Tuple[str, Decimal]] = field(default_factory=list)
    extra_income: List[ExtraIncome] = field(default_factory=list)

    @property
    def fixed_expenses(self) -> Decimal:
        total = sum((self.expenses.get(k, Decimal("0")) for k in EXPENSE_FIELDS), Decimal("0"))
        return total + sum((amount for _, amount in self.custom_expenses), Decimal("0"))

    @property
    def deductions(self) -> Decimal:
        return self.tax + self.social_insurance + self.retirement_fund

    @classmethod
    def from_dict(cls, data: dict) -> "Budget":
        expenses = data.get("expenses") or {}
        return cls(
            salary=_money(data, "salary"),
            other_income=_money(data, "other_income"),
            tax=_money(data, "tax"),
            social_insurance=_money(data, "social_insurance"),
            retirement_fund=_money(data, "retirement_fund"),
            expenses={k: _money(expenses, k) for k in EXPENSE_FIELDS},
            custom_expenses=[
                (c.get("name", "Expense"), _money(c, "amount"))
                for c in expenses.get("custom", [])
            ],
            extra_income=[ExtraIncome.from_dict(e) for e in data.get("extra_income", [])],
        )


@dataclass
class PlanConfig:
    """Strategy plus how much free cash is committed to extra payments."""

    strategy: Strategy = Strategy.SNOWBALL
    allocation_type: str = "full"
    allocation_value: Optional[Decimal] = None
    extra_income_allocation_type: str = "full"
    extra_income_allocation_value: Optional[Decimal] = None

    @classmethod
    def minimums_only(cls, strategy: Strategy = Strategy.SNOWBALL) -> "PlanConfig":
        """Configuration that never pays more than the minimums."""

        return cls(
            strategy=strategy,
            allocation_type="fixed",
            allocation_value=Decimal("0"),
            extra_income_allocation_type="fixed",
            extra_income_allocation_value=Decimal("0"),
        )

    @classmethod
    def from_dict(cls, data: dict | None) -> "PlanConfig":
        data = data or {}
        try:
            strategy = Strategy(data.get("strategy") or "snowball")
        except ValueError:
            raise ValueError(f"Unknown strategy: {data.get('strategy')}") from None
        allocation_type = _choice(data, "allocation_type", ALLOCATION_TYPES, "full")
        allocation_value = _optional_money(data, "allocation_value")
        _check_allocation(allocation_type, allocation_value, "allocation_value")
        extra_type = _choice(data, "extra_income_allocation_type", ALLOCATION_TYPES, "full")
        extra_value = _optional_money(data, "extra_income_allocation_value")
        _check_allocation(extra_type, extra_value, "extra_income_allocation_value")
        return cls(
            strategy=strategy,
            allocation_type=allocation_type,
            allocation_value=allocation_value,
            extra_income_allocation_type=extra_type,
            extra_income_allocation_value=extra_value,
        )


def load_debts(items) -> List[Debt]:
    """Parse stored debt documents, numbering any that lack an id."""

    debts = [Debt.from_dict(d, default_id=i) for i, d in enumerate(items, 1)]
    seen = set()
    for debt in debts:
        if debt.id in seen:
            raise ValueError(f"Duplicate debt id: {debt.id}")
        seen.add(debt.id)
    return debts
