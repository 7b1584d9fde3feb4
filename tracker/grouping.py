from datetime import date
from typing import Iterable

from tracker.domain import Expense


def date_label(d: date) -> str:
    """Long US-style label, e.g. ``Saturday, November 15, 2025``."""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def group_by_date(expenses: Iterable[Expense]) -> dict[str, list[Expense]]:
    """Bucket expenses by day, buckets in first-seen order, input order inside."""
    groups: dict[str, list[Expense]] = {}
    for e in expenses:
        groups.setdefault(date_label(e.date), []).append(e)
    return groups
