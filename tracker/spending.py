import math
from typing import Iterable, Iterator

from tracker.domain import Expense


def safe_percentage(part: float, whole: float) -> float:
    """``part / whole * 100``, or 0.0 when the ratio is undefined."""
    if not whole or not math.isfinite(whole) or not math.isfinite(part):
        return 0.0
    return part / whole * 100


def total_amount(expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in expenses)


def spending_by_category(expenses: Iterable[Expense]) -> dict[str, float]:
    # dicts keep first-seen order, which the ranking relies on for ties
    totals: dict[str, float] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return totals


def iter_top_categories(expenses: Iterable[Expense], k: int) -> Iterator[tuple[str, float]]:
    ordered = sorted(spending_by_category(expenses).items(), key=lambda item: item[1], reverse=True)
    for category, total in ordered[: max(0, k)]:
        yield category, total


def top_categories(expenses: Iterable[Expense], k: int) -> list[tuple[str, float]]:
    """Highest-spend categories, ties kept in first-encountered order."""
    return list(iter_top_categories(expenses, k))


def category_shares(expenses: Iterable[Expense]) -> dict[str, float]:
    totals = spending_by_category(expenses)
    grand_total = sum(totals.values())
    return {category: safe_percentage(amount, grand_total) for category, amount in totals.items()}
