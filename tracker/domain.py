from dataclasses import dataclass
from datetime import date
from typing import NamedTuple, Optional

CATEGORIES = ("Food", "Transportation", "Bills", "Entertainment", "Shopping", "Health", "Other")
FALLBACK_CATEGORY = "Other"

PERIODS = ("monthly", "custom")


@dataclass(frozen=True)
class Expense:
    id: str
    amount: float       # always > 0
    category: str
    description: str
    date: date
    recurring: bool = False


# A spending limit for one category; spent is maintained by the store
@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    limit: float
    spent: float = 0.0
    period: str = "monthly"   # "monthly" or "custom"
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target: float
    current: float = 0.0      # never above target
    deadline: Optional[date] = None


class Snapshot(NamedTuple):
    expenses: tuple[Expense, ...]
    budgets: tuple[Budget, ...]
    goals: tuple[SavingsGoal, ...]


def category_or_other(category: str) -> str:
    return category if category in CATEGORIES else FALLBACK_CATEGORY
