"""Command-line interface for managing debts and running payoff plans."""

import json
import logging
import math
import os
from pathlib import Path
from typing import Dict, List

from event_scheduler import upcoming_events
from interest import estimate_payoff_months
from models import Budget, PlanConfig, load_debts
from planner import generate_plan
from reports import (
    compare_strategies,
    debt_payoff_months,
    is_paid_off,
    payoff_date,
    savings_vs_minimums,
    total_interest,
)


DATA_FILE = Path(__file__).with_name("financial_data.json")

# Answers that clear an optional amount
CLEAR_ANSWERS = ("none", "-")


def load_data() -> Dict:
    """Load financial data from ``financial_data.json``."""
    if DATA_FILE.exists():
        with DATA_FILE.open() as f:
            return json.load(f)
    return {"debts": [], "budget": None, "plan": {}}


def save_data(data: Dict) -> None:
    """Persist financial data to disk."""
    with DATA_FILE.open("w") as f:
        json.dump(data, f, indent=2)


# ---------------------------------------------------------------------------
# Editing helpers


def _delete_item(items: List[dict]) -> None:
    idx = input("Number to delete: ").strip()
    if idx.isdigit() and 1 <= int(idx) <= len(items):
        del items[int(idx) - 1]


def _pick_item(items: List[dict]):
    idx = input("Number to edit: ").strip()
    if idx.isdigit() and 1 <= int(idx) <= len(items):
        return items[int(idx) - 1]
    return None


def _ask_amount(prompt: str, default=None):
    shown = f" [{default}]" if default is not None else ""
    value = input(f"{prompt}{shown}: ").strip()
    if not value:
        return default
    if value.lower() in CLEAR_ANSWERS:
        return None
    return float(value)


def _ask_text(prompt: str, default=None):
    shown = f" [{default}]" if default else ""
    return input(f"{prompt}{shown}: ").strip() or default


def _next_debt_id(debts: List[dict]) -> int:
    ids = [d["id"] for d in debts if isinstance(d.get("id"), int)]
    return max(ids, default=0) + 1


def _fill_debt(debt: dict) -> None:
    debt["name"] = _ask_text("Name", debt.get("name") or "Debt")
    debt["balance"] = _ask_amount("Balance", debt.get("balance"))
    debt["interest_rate"] = _ask_amount("Interest rate %", debt.get("interest_rate"))
    debt["min_payment_type"] = _ask_text(
        "Minimum payment type (percent/fixed)", debt.get("min_payment_type") or "percent"
    )
    debt["min_payment_value"] = _ask_amount("Minimum payment value", debt.get("min_payment_value"))
    debt["fixed_payment"] = _ask_amount("Installment amount (none to clear)", debt.get("fixed_payment"))
    debt["promo_rate"] = _ask_amount("Promo rate % (none to clear)", debt.get("promo_rate"))
    if debt["promo_rate"] is not None:
        debt["promo_end_date"] = _ask_text("Promo end date (YYYY-MM-DD)", debt.get("promo_end_date"))
    else:
        debt.pop("promo_end_date", None)
    debt["status"] = _ask_text("Status (active/closed)", debt.get("status") or "active")


def edit_debts(data: Dict) -> None:
    """Add, edit or remove debt entries."""
    debts = data.setdefault("debts", [])
    while True:
        print("\nCurrent debts:")
        for i, d in enumerate(debts, 1):
            unit = "%" if d.get("min_payment_type", "percent") == "percent" else ""
            print(
                f"{i}. {d['name']} balance ${d['balance']} rate {d['interest_rate']}% "
                f"min {d.get('min_payment_value', 0)}{unit} ({d.get('status', 'active')})"
            )
        action = input("A)dd, E)dit, D)elete, B)ack: ").strip().lower()
        if action == "a":
            debt = {"id": _next_debt_id(debts)}
            _fill_debt(debt)
            debts.append(debt)
            save_data(data)
        elif action == "e":
            debt = _pick_item(debts)
            if debt is not None:
                _fill_debt(debt)
                save_data(data)
        elif action == "d":
            _delete_item(debts)
            save_data(data)
        elif action == "b":
            break


def edit_budget(data: Dict) -> None:
    """Edit monthly income, deductions and expenses."""
    budget = data.get("budget") or {}
    expenses = budget.setdefault("expenses", {})
    print("\nMonthly budget (leave blank to keep the current value):")
    for key, label in (
        ("salary", "Salary"),
        ("other_income", "Other income"),
        ("tax", "Tax"),
        ("social_insurance", "Social insurance"),
        ("retirement_fund", "Retirement fund"),
    ):
        budget[key] = _ask_amount(label, budget.get(key, 0.0))
    for key in ("housing", "food", "transport", "other"):
        expenses[key] = _ask_amount(key.capitalize(), expenses.get(key, 0.0))
    custom = expenses.setdefault("custom", [])
    while True:
        for i, c in enumerate(custom, 1):
            print(f"{i}. {c['name']} ${c['amount']}")
        action = input("Custom expenses: A)dd, D)elete, B)ack: ").strip().lower()
        if action == "a":
            name = input("Name: ").strip() or "Expense"
            custom.append({"name": name, "amount": float(input("Amount: ").strip())})
        elif action == "d":
            _delete_item(custom)
        elif action == "b":
            break
    data["budget"] = budget
    save_data(data)


def edit_extra_income(data: Dict) -> None:
    """Add or remove bonuses and other irregular income."""
    budget = data.get("budget") or {}
    entries = budget.setdefault("extra_income", [])
    while True:
        print("\nCurrent extra income:")
        for i, e in enumerate(entries, 1):
            year = f"/{e['year']}" if e.get("year") else ""
            print(f"{i}. {e.get('name', 'Extra income')} ${e['amount']} {e['month']}{year} ({e['frequency']})")
        action = input("A)dd, D)elete, B)ack: ").strip().lower()
        if action == "a":
            name = input("Name: ").strip() or "Extra income"
            amount = float(input("Amount: ").strip())
            month = int(input("Month (1-12): ").strip())
            freq = input("Frequency (one-time/monthly/yearly) [one-time]: ").strip() or "one-time"
            year = input("Year [none]: ").strip()
            entry = {"name": name, "amount": amount, "month": month, "frequency": freq}
            if year:
                entry["year"] = int(year)
            entries.append(entry)
            data["budget"] = budget
            save_data(data)
        elif action == "d":
            _delete_item(entries)
            save_data(data)
        elif action == "b":
            break


def edit_plan(data: Dict) -> None:
    """Choose the strategy and how much free cash goes to extra payments."""
    plan = data.setdefault("plan", {})
    plan["strategy"] = _ask_text("Strategy (snowball/avalanche)", plan.get("strategy") or "snowball")
    plan["allocation_type"] = _ask_text(
        "Regular cash allocation (full/percent/fixed)", plan.get("allocation_type") or "full"
    )
    if plan["allocation_type"] != "full":
        plan["allocation_value"] = _ask_amount("Allocation value", plan.get("allocation_value"))
    plan["extra_income_allocation_type"] = _ask_text(
        "Extra income allocation (full/percent/fixed)",
        plan.get("extra_income_allocation_type") or "full",
    )
    if plan["extra_income_allocation_type"] != "full":
        plan["extra_income_allocation_value"] = _ask_amount(
            "Extra income allocation value", plan.get("extra_income_allocation_value")
        )
    save_data(data)


# ---------------------------------------------------------------------------
# Simulation


def _parse_inputs(data: Dict):
    """Return ``(debts, budget, config)`` or None after printing why not."""
    if not data.get("debts") or not data.get("budget"):
        print("Add your debts and a monthly budget before running a plan.")
        return None
    try:
        debts = load_debts(data["debts"])
        budget = Budget.from_dict(data["budget"])
        config = PlanConfig.from_dict(data.get("plan"))
    except (KeyError, TypeError, ValueError) as exc:
        print(f"Warning: {exc}")
        return None
    return debts, budget, config


def run_simulation(data: Dict) -> None:
    """Run the payoff plan and print it month by month."""
    parsed = _parse_inputs(data)
    if parsed is None:
        return
    debts, budget, config = parsed

    print(f"---  Debt Payoff Plan ({config.strategy.value}) ---")
    plan = generate_plan(debts, budget, config)
    if not plan:
        print("Nothing to pay off.")
        return

    for event in upcoming_events(budget.extra_income, plan[0].date):
        print(f"Extra income {event.date:%b %Y}: {event.name} ${event.amount:.2f}")

    for month in plan:
        print(
            f"{month.date:%b %Y}: paid=${month.total_payment:.2f} "
            f"(interest=${month.total_interest:.2f}) "
            f"remaining debt=${month.total_balance:.2f} "
            f"cash left=${month.remaining_cash:.2f}"
        )

    paid_in = debt_payoff_months(plan)
    print("\nPayoff by debt:")
    for debt in debts:
        if debt.is_closed:
            continue
        if debt.id in paid_in:
            when = plan[paid_in[debt.id]].date
            print(f"  {debt.name}: paid off {when:%b %Y}")
        else:
            print(f"  {debt.name}: not paid off within {len(plan)} months")

    print(f"\nTotal interest: ${total_interest(plan):.2f}")
    if is_paid_off(plan):
        print(f"Debt free by {payoff_date(plan):%B %Y}")
    else:
        print(f"Debts are not paid off within {len(plan)} months.")
    print(f"Unused cash over the plan: ${plan[-1].accumulated_cash:.2f}")


def run_comparison(data: Dict) -> None:
    """Compare the snowball and avalanche strategies side by side."""
    parsed = _parse_inputs(data)
    if parsed is None:
        return
    debts, budget, config = parsed

    for strategy, summary in compare_strategies(debts, budget, config).items():
        finish = f"{summary.payoff_date:%b %Y}" if summary.payoff_date else "not within horizon"
        print(
            f"{strategy.value:>10}: {summary.months} months, "
            f"interest ${summary.total_interest:.2f}, debt free {finish}"
        )


def run_report(data: Dict) -> None:
    """Show how much the plan saves compared with paying only minimums."""
    parsed = _parse_inputs(data)
    if parsed is None:
        return
    debts, budget, config = parsed

    savings = savings_vs_minimums(debts, budget, config)
    print(f"Interest with plan: ${savings.plan_interest:.2f}")
    print(f"Interest paying minimums only: ${savings.baseline_interest:.2f}")
    print(f"Interest saved: ${savings.interest_saved:.2f}")
    print(f"Months saved: {savings.months_saved}")
    for debt in debts:
        if debt.is_closed or debt.balance <= 0:
            continue
        payment = debt.fixed_payment
        if not payment and debt.min_payment_type == "fixed":
            payment = debt.min_payment_value
        if not payment:
            continue
        months = estimate_payoff_months(debt, payment)
        shown = "never" if months == math.inf else f"{months} months"
        print(f"  {debt.name} at its minimum alone: {shown}")


# ---------------------------------------------------------------------------
# Menu


def _log_level() -> int:
    """Level named by ``FIN_LOG_LEVEL``, WARNING when unset or unknown."""
    level = getattr(logging, os.environ.get("FIN_LOG_LEVEL", "WARNING").upper(), None)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def main() -> None:
    """Display the main menu and handle user selections."""
    logging.basicConfig(level=_log_level())
    data = load_data()
    while True:
        print("\n--- Debt Payoff Menu ---")
        print("1. Edit debts")
        print("2. Edit budget")
        print("3. Edit extra income")
        print("4. Plan settings")
        print("5. Run plan")
        print("6. Compare strategies")
        print("7. Savings report")
        print("8. Quit")
        choice = input("Select an option: ").strip()
        if choice == "1":
            edit_debts(data)
        elif choice == "2":
            edit_budget(data)
        elif choice == "3":
            edit_extra_income(data)
        elif choice == "4":
            edit_plan(data)
        elif choice == "5":
            run_simulation(data)
        elif choice == "6":
            run_comparison(data)
        elif choice == "7":
            run_report(data)
        elif choice == "8":
            break
        else:
            print("Invalid option.")


if __name__ == "__main__":
    main()
