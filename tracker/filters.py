from datetime import date
from typing import Iterable, NamedTuple, Optional

from tracker.domain import Expense
from tracker.notifications import INFO, Notification, plural
from tracker.spending import total_amount

ALL_CATEGORIES = "all"


class ExpenseSummary(NamedTuple):
    total_spent: float
    count: int
    recurring_count: int


def by_category(category: Optional[str]):
    def _filter(e: Expense) -> bool:
        return category in (None, ALL_CATEGORIES) or e.category == category

    return _filter


def by_date_range(start: date, end: date):
    def _filter(e: Expense) -> bool:
        return start <= e.date <= end

    return _filter


def recurring_only(e: Expense) -> bool:
    return e.recurring


def filter_expenses(expenses: Iterable[Expense], category: Optional[str] = ALL_CATEGORIES) -> tuple[Expense, ...]:
    return tuple(filter(by_category(category), expenses))


def summarize_expenses(expenses: Iterable[Expense]) -> ExpenseSummary:
    expenses = tuple(expenses)
    return ExpenseSummary(
        total_spent=total_amount(expenses),
        count=len(expenses),
        recurring_count=len(tuple(filter(recurring_only, expenses))),
    )


def expense_notifications(expenses: Iterable[Expense]) -> list[Notification]:
    recurring = summarize_expenses(expenses).recurring_count
    if recurring == 0:
        return []
    return [Notification(
        INFO,
        "Recurring Expenses Detected",
        f"You have {plural(recurring, 'recurring expense')} this month. Keep track of these automatic charges!",
    )]
