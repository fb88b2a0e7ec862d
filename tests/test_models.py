import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Ensure project root on path for direct module imports
sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from models import Budget, Debt, ExtraIncome, PlanConfig, Strategy, load_debts


def test_debt_from_dict():
    debt = Debt.from_dict(
        {
            "id": 7,
            "name": "Visa",
            "category": "credit_card",
            "balance": 1500.5,
            "interest_rate": 18,
            "min_payment_type": "percent",
            "min_payment_value": 3,
            "promo_rate": 0,
            "promo_end_date": "2026-12-31",
            "due_day": 15,
        }
    )
    assert debt.id == 7
    assert debt.balance == Decimal("1500.5")
    assert debt.interest_rate == Decimal("18")
    assert debt.promo_rate == Decimal("0")
    assert debt.promo_end_date == date(2026, 12, 31)
    assert debt.fixed_payment is None
    assert debt.status == "active"
    assert not debt.is_closed


def test_load_debts_numbers_missing_ids():
    debts = load_debts([{"name": "A", "balance": 1}, {"id": 9, "name": "B", "balance": 2}])
    assert [d.id for d in debts] == [1, 9]


@pytest.mark.parametrize(
    "changes",
    [
        {"balance": -1},
        {"interest_rate": -0.5},
        {"min_payment_type": "statement"},
        {"min_payment_type": "percent", "min_payment_value": 120},
        {"status": "frozen"},
        {"due_day": 32},
        {"fixed_payment": -10},
    ],
)
def test_debt_rejects_bad_values(changes):
    data = {"name": "Card", "balance": 100, "interest_rate": 10}
    data.update(changes)
    with pytest.raises(ValueError):
        Debt.from_dict(data, default_id=1)


def test_extra_income_requires_year_unless_yearly():
    assert ExtraIncome.from_dict({"month": 12, "amount": 100, "frequency": "yearly"}).year is None
    with pytest.raises(ValueError):
        ExtraIncome.from_dict({"month": 12, "amount": 100, "frequency": "one-time"})
    with pytest.raises(ValueError):
        ExtraIncome.from_dict({"month": 12, "amount": 100, "frequency": "monthly"})
    with pytest.raises(ValueError):
        ExtraIncome.from_dict({"month": 13, "amount": 100, "year": 2026})
    with pytest.raises(ValueError):
        ExtraIncome.from_dict({"month": 1, "amount": 100, "year": 2026, "frequency": "weekly"})


def test_extra_income_defaults_to_one_time():
    entry = ExtraIncome.from_dict({"month": "3", "year": "2027", "amount": 250})
    assert entry.frequency == "one-time"
    assert entry.month == 3
    assert entry.year == 2027


def test_budget_from_dict():
    budget = Budget.from_dict(
        {
            "salary": 4000,
            "other_income": 250,
            "tax": 200,
            "social_insurance": 75,
            "retirement_fund": 120,
            "expenses": {
                "housing": 1200,
                "food": 400,
                "custom": [{"name": "Phone", "amount": 30}],
            },
            "extra_income": [{"month": 12, "amount": 2000, "frequency": "yearly"}],
        }
    )
    assert budget.fixed_expenses == Decimal("1630")
    assert budget.deductions == Decimal("395")
    assert budget.expenses["transport"] == 0
    assert budget.custom_expenses == [("Phone", Decimal("30"))]
    assert len(budget.extra_income) == 1


def test_budget_rejects_negative_expense():
    with pytest.raises(ValueError):
        Budget.from_dict({"salary": 100, "expenses": {"food": -5}})


def test_plan_config_defaults():
    config = PlanConfig.from_dict(None)
    assert config.strategy is Strategy.SNOWBALL
    assert config.allocation_type == "full"
    assert config.extra_income_allocation_type == "full"


def test_plan_config_from_dict():
    config = PlanConfig.from_dict(
        {
            "strategy": "avalanche",
            "allocation_type": "percent",
            "allocation_value": 60,
            "extra_income_allocation_type": "fixed",
            "extra_income_allocation_value": 500,
        }
    )
    assert config.strategy is Strategy.AVALANCHE
    assert config.allocation_value == Decimal("60")
    assert config.extra_income_allocation_value == Decimal("500")


@pytest.mark.parametrize(
    "data",
    [
        {"strategy": "highest-balance"},
        {"allocation_type": "most"},
        {"allocation_type": "percent", "allocation_value": 150},
        {"allocation_type": "fixed", "allocation_value": -1},
        {"extra_income_allocation_type": "percent", "extra_income_allocation_value": 101},
    ],
)
def test_plan_config_rejects_bad_values(data):
    with pytest.raises(ValueError):
        PlanConfig.from_dict(data)


def test_load_debts_numbers_null_ids():
    debts = load_debts([
        {"id": None, "name": "A", "balance": 1000},
        {"id": None, "name": "B", "balance": 2000},
    ])
    assert [d.id for d in debts] == [1, 2]
    assert [d.name for d in debts] == ["A", "B"]


def test_load_debts_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        load_debts([{"id": 3, "name": "A", "balance": 1}, {"id": 3, "name": "B", "balance": 2}])
