import json
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Tuple

from tracker.domain import Budget, Expense, SavingsGoal

BUDGET_EDITABLE_FIELDS = ("category", "limit", "period", "start_date", "end_date")


def parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def load_seed(
    path: str,
) -> Tuple[
    Tuple[Expense, ...],
    Tuple[Budget, ...],
    Tuple[SavingsGoal, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    expenses = tuple(
        Expense(**{**e, "date": parse_date(e["date"])}) for e in data.get("expenses", [])
    )
    budgets = tuple(
        Budget(
            **{
                **b,
                "start_date": parse_date(b.get("start_date")),
                "end_date": parse_date(b.get("end_date")),
            }
        )
        for b in data.get("budgets", [])
    )
    goals = tuple(
        SavingsGoal(**{**g, "deadline": parse_date(g.get("deadline"))}) for g in data.get("goals", [])
    )

    return expenses, budgets, goals


def cascade_spend(budgets: Tuple[Budget, ...], e: Expense) -> Tuple[Budget, ...]:
    """Add the expense amount to every budget tracking its category."""
    return tuple(
        replace(b, spent=b.spent + e.amount) if b.category == e.category else b
        for b in budgets
    )


def add_expense(
    expenses: Tuple[Expense, ...], budgets: Tuple[Budget, ...], e: Expense
) -> Tuple[Tuple[Expense, ...], Tuple[Budget, ...]]:
    # newest first
    return (e,) + expenses, cascade_spend(budgets, e)


def add_budget(budgets: Tuple[Budget, ...], b: Budget) -> Tuple[Budget, ...]:
    return budgets + (replace(b, spent=0.0),)


def merge_budget_fields(b: Budget, fields: dict) -> Budget:
    """Apply the editable subset of ``fields``; id and spent never change."""
    updates = {k: v for k, v in fields.items() if k in BUDGET_EDITABLE_FIELDS}
    return replace(b, **updates)


def replace_budget(budgets: Tuple[Budget, ...], new: Budget) -> Tuple[Budget, ...]:
    return tuple(new if b.id == new.id else b for b in budgets)


def delete_budget(budgets: Tuple[Budget, ...], bid: str) -> Tuple[Budget, ...]:
    return tuple(filter(lambda b: b.id != bid, budgets))


def add_goal(goals: Tuple[SavingsGoal, ...], g: SavingsGoal) -> Tuple[SavingsGoal, ...]:
    return goals + (replace(g, current=0.0),)


def contribute_to_goal(
    goals: Tuple[SavingsGoal, ...], gid: str, amount: float
) -> Tuple[SavingsGoal, ...]:
    # excess over the target is absorbed
    return tuple(
        replace(g, current=min(g.current + amount, g.target)) if g.id == gid else g
        for g in goals
    )


def delete_goal(goals: Tuple[SavingsGoal, ...], gid: str) -> Tuple[SavingsGoal, ...]:
    return tuple(filter(lambda g: g.id != gid, goals))
