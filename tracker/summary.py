"""Derived values for the dashboard, budget and savings views.

Each view is a sequence of calculators. A calculator takes
``(snapshot, today, acc)`` and returns a partial dict; later calculators may
read what earlier ones put in ``acc``. ``services.ReportService`` runs them
with failure isolation, ``dashboard_summary`` runs them directly.
"""

from typing import NamedTuple

from tracker import config
from tracker.budgets import BudgetEvaluation, budget_notifications, budget_totals, budgets_at_risk, classify_budget
from tracker.domain import Expense, Snapshot
from tracker.notifications import SUCCESS, WARNING, Notification, plural
from tracker.savings import GoalProgress, classify_goal, savings_notifications, savings_totals
from tracker.spending import category_shares, safe_percentage, top_categories, total_amount


class CategorySpend(NamedTuple):
    category: str
    amount: float
    share: float    # percent of all spending


class DashboardSummary(NamedTuple):
    total_spent: float
    total_budget: float
    total_saved: float
    total_savings_target: float
    budget_usage_percentage: float
    savings_percentage: float
    top_categories: tuple[CategorySpend, ...]
    recent_expenses: tuple[Expense, ...]
    budgets_at_risk: tuple[BudgetEvaluation, ...]
    goals: tuple[GoalProgress, ...]
    notifications: tuple[Notification, ...]


# --- dashboard

def calc_totals(snapshot: Snapshot, today, acc: dict) -> dict:
    total_spent = total_amount(snapshot.expenses)
    total_budget = sum(b.limit for b in snapshot.budgets)
    saved = savings_totals(snapshot.goals)
    return {
        "total_spent": total_spent,
        "total_budget": total_budget,
        "total_saved": saved.total_saved,
        "total_savings_target": saved.total_target,
        "budget_usage_percentage": safe_percentage(total_spent, total_budget),
        "savings_percentage": saved.overall_progress,
    }


def calc_top_categories(snapshot: Snapshot, today, acc: dict) -> dict:
    shares = category_shares(snapshot.expenses)
    ranked = top_categories(snapshot.expenses, config.TOP_CATEGORIES)
    return {"top_categories": tuple(CategorySpend(c, amount, shares[c]) for c, amount in ranked)}


def calc_recent_expenses(snapshot: Snapshot, today, acc: dict) -> dict:
    # the store keeps newest first
    return {"recent_expenses": snapshot.expenses[: config.RECENT_COUNT]}


def calc_budgets_at_risk(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"budgets_at_risk": budgets_at_risk(snapshot.budgets)}


def calc_goal_progress(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"goals": tuple(classify_goal(g, today) for g in snapshot.goals)}


def calc_dashboard_notifications(snapshot: Snapshot, today, acc: dict) -> dict:
    notes = []
    savings_pct = acc.get("savings_percentage", 0.0)
    usage_pct = acc.get("budget_usage_percentage", 0.0)
    if savings_pct >= config.GREAT_JOB_SAVINGS_PCT and usage_pct < config.GREAT_JOB_MAX_USAGE_PCT:
        notes.append(Notification(
            SUCCESS,
            "Great job this month! 🎉",
            f"You're saving {savings_pct:.1f}% toward your goals. You're on track to reach your savings targets!",
        ))
    at_risk = acc.get("budgets_at_risk", ())
    if at_risk:
        notes.append(Notification(
            WARNING,
            "Budget Alert",
            f"You're approaching the limit on {plural(len(at_risk), 'budget')}. Consider adjusting your spending.",
        ))
    return {"notifications": tuple(notes)}


DASHBOARD_CALCULATORS = (
    calc_totals,
    calc_top_categories,
    calc_recent_expenses,
    calc_budgets_at_risk,
    calc_goal_progress,
    calc_dashboard_notifications,
)

DASHBOARD_DEFAULTS = {
    "total_spent": 0.0,
    "total_budget": 0.0,
    "total_saved": 0.0,
    "total_savings_target": 0.0,
    "budget_usage_percentage": 0.0,
    "savings_percentage": 0.0,
    "top_categories": (),
    "recent_expenses": (),
    "budgets_at_risk": (),
    "goals": (),
    "notifications": (),
}


# --- budget manager

def calc_budget_rows(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"budgets": tuple(classify_budget(b) for b in snapshot.budgets)}


def calc_budget_totals(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"totals": budget_totals(snapshot.budgets)}


def calc_budget_notifications(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"notifications": tuple(budget_notifications(snapshot.budgets))}


BUDGET_CALCULATORS = (calc_budget_rows, calc_budget_totals, calc_budget_notifications)

BUDGET_DEFAULTS = {
    "budgets": (),
    "totals": budget_totals(()),
    "notifications": (),
}


# --- savings goals

def calc_savings_totals(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"totals": savings_totals(snapshot.goals)}


def calc_savings_notifications(snapshot: Snapshot, today, acc: dict) -> dict:
    return {"notifications": tuple(savings_notifications(snapshot.goals))}


SAVINGS_CALCULATORS = (calc_goal_progress, calc_savings_totals, calc_savings_notifications)

SAVINGS_DEFAULTS = {
    "goals": (),
    "totals": savings_totals(()),
    "notifications": (),
}


def dashboard_summary(snapshot: Snapshot, today) -> DashboardSummary:
    acc: dict = {}
    for calc in DASHBOARD_CALCULATORS:
        acc.update(calc(snapshot, today, acc))
    return DashboardSummary(**acc)
