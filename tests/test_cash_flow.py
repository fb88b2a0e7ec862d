import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Ensure project root on path for direct module imports
sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from cash_flow import apply_allocation, regular_free_cash, split_allocatable
from models import Budget, PlanConfig


def test_regular_free_cash():
    budget = Budget(
        salary=Decimal("5000"),
        other_income=Decimal("500"),
        tax=Decimal("300"),
        social_insurance=Decimal("100"),
        retirement_fund=Decimal("200"),
        expenses={"housing": Decimal("1500"), "food": Decimal("600")},
        custom_expenses=[("Gym", Decimal("50"))],
    )
    assert regular_free_cash(budget) == Decimal("2750")


def test_regular_free_cash_can_be_negative():
    budget = Budget(salary=Decimal("1000"), expenses={"housing": Decimal("1200")})
    assert regular_free_cash(budget) == Decimal("-200")


def test_full_allocation():
    assert apply_allocation("full", None, Decimal("800")) == Decimal("800")


def test_percent_allocation():
    assert apply_allocation("percent", Decimal("25"), Decimal("800")) == Decimal("200")
    assert apply_allocation("percent", None, Decimal("800")) == Decimal("800")


def test_fixed_allocation_capped_at_available():
    assert apply_allocation("fixed", Decimal("300"), Decimal("800")) == Decimal("300")
    assert apply_allocation("fixed", Decimal("1300"), Decimal("800")) == Decimal("800")
    assert apply_allocation("fixed", None, Decimal("800")) == Decimal("800")


def test_allocation_of_nothing_is_zero():
    assert apply_allocation("full", None, Decimal("-50")) == 0
    assert apply_allocation("fixed", Decimal("100"), Decimal("0")) == 0


def test_unknown_allocation_type():
    with pytest.raises(ValueError):
        apply_allocation("half", None, Decimal("100"))


def test_split_regular_surplus_only():
    cash = split_allocatable(Decimal("1000"), Decimal("0"), Decimal("500"), PlanConfig())
    assert cash.net_regular == Decimal("500")
    assert cash.allocatable_from_regular == Decimal("500")
    assert cash.allocatable_from_bonus == 0
    assert cash.allocatable == Decimal("500")
    assert cash.cash_after_minimums == Decimal("500")


def test_split_uses_separate_policies():
    config = PlanConfig(
        allocation_type="percent",
        allocation_value=Decimal("50"),
        extra_income_allocation_type="fixed",
        extra_income_allocation_value=Decimal("300"),
    )
    cash = split_allocatable(Decimal("1000"), Decimal("2000"), Decimal("400"), config)
    assert cash.allocatable_from_regular == Decimal("300")
    assert cash.bonus_available == Decimal("2000")
    assert cash.allocatable_from_bonus == Decimal("300")
    assert cash.allocatable == Decimal("600")
    assert cash.cash_after_minimums == Decimal("2600")


def test_split_shortfall_backfilled_from_bonus():
    cash = split_allocatable(Decimal("300"), Decimal("1000"), Decimal("500"), PlanConfig())
    assert cash.net_regular == Decimal("-200")
    assert cash.allocatable_from_regular == 0
    assert cash.bonus_available == Decimal("800")
    assert cash.allocatable == Decimal("800")


def test_split_shortfall_larger_than_bonus():
    cash = split_allocatable(Decimal("-500"), Decimal("200"), Decimal("100"), PlanConfig())
    assert cash.bonus_available == Decimal("-400")
    assert cash.allocatable == 0
    assert cash.cash_after_minimums == 0


def test_minimums_only_config_allocates_nothing():
    cash = split_allocatable(
        Decimal("1000"), Decimal("500"), Decimal("100"), PlanConfig.minimums_only()
    )
    assert cash.allocatable == 0
    assert cash.cash_after_minimums == Decimal("1400")
