"""Budget status evaluation.

A budget is classified from its spend-to-limit percentage:

- ``exceeded`` at 100% or more
- ``warning`` from ``config.WARNING_PCT`` (80%) up to 100%
- ``on_track`` below that

"At risk" means ``warning`` or ``exceeded`` in every view; the dashboard and
the budget manager share the same inclusive threshold.
"""

from typing import Iterable, NamedTuple

from tracker import config
from tracker.domain import Budget
from tracker.notifications import ERROR, SUCCESS, Notification, plural
from tracker.spending import safe_percentage

ON_TRACK = "on_track"
WARNING = "warning"
EXCEEDED = "exceeded"


class BudgetEvaluation(NamedTuple):
    budget_id: str
    category: str
    status: str
    percentage: float
    remaining: float    # negative when over the limit
    spent: float
    limit: float


class BudgetTotals(NamedTuple):
    total_budget: float
    total_spent: float
    remaining: float
    percentage: float
    exceeded_count: int


def status_for(percentage: float) -> str:
    if percentage >= config.EXCEEDED_PCT:
        return EXCEEDED
    if percentage >= config.WARNING_PCT:
        return WARNING
    return ON_TRACK


def classify_budget(b: Budget) -> BudgetEvaluation:
    percentage = safe_percentage(b.spent, b.limit)
    return BudgetEvaluation(
        budget_id=b.id,
        category=b.category,
        status=status_for(percentage),
        percentage=percentage,
        remaining=b.limit - b.spent,
        spent=b.spent,
        limit=b.limit,
    )


def is_at_risk(b: Budget) -> bool:
    return classify_budget(b).status != ON_TRACK


def budgets_at_risk(budgets: Iterable[Budget]) -> tuple[BudgetEvaluation, ...]:
    evaluations = (classify_budget(b) for b in budgets)
    return tuple(ev for ev in evaluations if ev.status != ON_TRACK)


def exceeded_count(budgets: Iterable[Budget]) -> int:
    return sum(1 for b in budgets if b.spent > b.limit)


def budget_totals(budgets: Iterable[Budget]) -> BudgetTotals:
    budgets = tuple(budgets)
    total_budget = sum(b.limit for b in budgets)
    total_spent = sum(b.spent for b in budgets)
    return BudgetTotals(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        percentage=safe_percentage(total_spent, total_budget),
        exceeded_count=exceeded_count(budgets),
    )


def budget_notifications(budgets: Iterable[Budget]) -> list[Notification]:
    budgets = tuple(budgets)
    totals = budget_totals(budgets)
    notes = []
    if budgets and totals.percentage < config.GOOD_STANDING_MAX_USAGE_PCT:
        notes.append(Notification(
            SUCCESS,
            "Great spending discipline! 💰",
            f"You're using only {totals.percentage:.0f}% of your total budget. Keep up the smart spending!",
        ))
    if totals.exceeded_count > 0:
        verb = "have" if totals.exceeded_count > 1 else "has"
        notes.append(Notification(
            ERROR,
            "Budget Exceeded",
            f"{plural(totals.exceeded_count, 'budget')} {verb} been exceeded. "
            "Consider reviewing your spending in these categories.",
        ))
    return notes
