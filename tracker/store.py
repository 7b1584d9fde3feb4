"""Session-owned record store.

A ``RecordStore`` holds the expense, budget and savings-goal collections of a
single session as immutable tuples. Every mutation runs under one lock and
swaps the tuples in a single step, so a reader never sees a budget's ``spent``
without the expense that caused it.

Creation methods return an ``Either``: ``Right(record)`` when the record was
stored, ``Left(error_dict)`` when the input was rejected and nothing changed.
Update/delete/contribute return a ``Maybe`` of the affected record; an unknown
id is a silent no-op (``Nothing``).
"""

from __future__ import annotations

import threading
from datetime import date
from typing import Callable, Optional, Union
from uuid import uuid4

from tracker import config
from tracker import transforms
from tracker.domain import Budget, Expense, SavingsGoal, Snapshot
from tracker.functional import (
    Either,
    Left,
    Maybe,
    Nothing,
    Some,
    find_budget,
    find_goal,
    validate_budget,
    validate_contribution,
    validate_expense,
    validate_goal,
)
from tracker.logging_setup import get_logger

logger = get_logger(__name__)


def _coerce_date(value, field_name: str) -> Union[Optional[date], Left]:
    try:
        return transforms.parse_date(value)
    except (TypeError, ValueError):
        return Left({"error": "invalid_date", "message": f"Cannot read {field_name} {value!r} as a date"})


class RecordStore:

    def __init__(
        self,
        expenses: tuple[Expense, ...] = (),
        budgets: tuple[Budget, ...] = (),
        goals: tuple[SavingsGoal, ...] = (),
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._lock = threading.RLock()
        self._expenses = tuple(expenses)
        self._budgets = tuple(budgets)
        self._goals = tuple(goals)
        self._new_id = id_factory or (lambda: str(uuid4()))

    @classmethod
    def from_seed(cls, path: Optional[str] = None, **kwargs) -> "RecordStore":
        expenses, budgets, goals = transforms.load_seed(path or config.get_seed_path())
        logger.info(
            "Loaded seed: %d expenses, %d budgets, %d goals", len(expenses), len(budgets), len(goals)
        )
        return cls(expenses, budgets, goals, **kwargs)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._expenses

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self._budgets

    @property
    def goals(self) -> tuple[SavingsGoal, ...]:
        return self._goals

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(self._expenses, self._budgets, self._goals)

    def _rejected(self, what: str, result: Either) -> Either:
        logger.warning("Rejected %s: %s", what, result.get_error()["message"])
        return result

    # --- expenses

    def add_expense(
        self,
        amount: float,
        category: str,
        description: str,
        expense_date=None,
        recurring: bool = False,
    ) -> Either[dict, Expense]:
        """Store a new expense and add its amount to matching budgets."""
        parsed = _coerce_date(expense_date if expense_date is not None else date.today(), "expense date")
        if isinstance(parsed, Left):
            return self._rejected("expense", parsed)

        with self._lock:
            candidate = Expense(
                id=self._new_id(),
                amount=amount,
                category=category,
                description=description,
                date=parsed,
                recurring=bool(recurring),
            )
            result = validate_expense(candidate)
            if result.is_left():
                return self._rejected("expense", result)

            self._expenses, self._budgets = transforms.add_expense(self._expenses, self._budgets, candidate)
            logger.debug("Added expense %s (%s %.2f)", candidate.id, candidate.category, candidate.amount)
            return result

    # --- budgets

    def add_budget(
        self,
        category: str,
        limit: float,
        period: str = "monthly",
        start_date=None,
        end_date=None,
    ) -> Either[dict, Budget]:
        dates = []
        for value, name in ((start_date, "start date"), (end_date, "end date")):
            parsed = _coerce_date(value, name)
            if isinstance(parsed, Left):
                return self._rejected("budget", parsed)
            dates.append(parsed)

        with self._lock:
            candidate = Budget(
                id=self._new_id(),
                category=category,
                limit=limit,
                spent=0.0,
                period=period,
                start_date=dates[0],
                end_date=dates[1],
            )
            result = validate_budget(candidate)
            if result.is_left():
                return self._rejected("budget", result)

            self._budgets = transforms.add_budget(self._budgets, candidate)
            logger.debug("Added budget %s for %s (limit %.2f)", candidate.id, candidate.category, candidate.limit)
            return result

    def update_budget(self, budget_id: str, **fields) -> Maybe[Budget]:
        """Merge editable fields into a budget; invalid merges leave it unchanged."""
        for key in ("start_date", "end_date"):
            if key in fields:
                parsed = _coerce_date(fields[key], key)
                if isinstance(parsed, Left):
                    self._rejected("budget update", parsed)
                    return Nothing()
                fields[key] = parsed

        with self._lock:
            found = find_budget(self._budgets, budget_id)
            if found.is_none():
                logger.debug("Budget %s not found, update ignored", budget_id)
                return found

            result = validate_budget(transforms.merge_budget_fields(found.get_or_else(None), fields))
            if result.is_left():
                self._rejected("budget update", result)
                return Nothing()

            updated = result.get_or_else(None)
            self._budgets = transforms.replace_budget(self._budgets, updated)
            logger.debug("Updated budget %s", budget_id)
            return Some(updated)

    def delete_budget(self, budget_id: str) -> Maybe[Budget]:
        with self._lock:
            found = find_budget(self._budgets, budget_id)
            if found.is_some():
                self._budgets = transforms.delete_budget(self._budgets, budget_id)
                logger.debug("Deleted budget %s", budget_id)
            return found

    # --- savings goals

    def add_savings_goal(self, name: str, target: float, deadline=None) -> Either[dict, SavingsGoal]:
        parsed = _coerce_date(deadline, "deadline")
        if isinstance(parsed, Left):
            return self._rejected("savings goal", parsed)

        with self._lock:
            candidate = SavingsGoal(
                id=self._new_id(),
                name=name,
                target=target,
                current=0.0,
                deadline=parsed,
            )
            result = validate_goal(candidate)
            if result.is_left():
                return self._rejected("savings goal", result)

            self._goals = transforms.add_goal(self._goals, candidate)
            logger.debug("Added savings goal %s (%s, target %.2f)", candidate.id, candidate.name, candidate.target)
            return result

    def contribute_to_goal(self, goal_id: str, amount: float) -> Maybe[SavingsGoal]:
        """Add money to a goal, capping ``current`` at the goal's target."""
        checked = validate_contribution(amount)
        if checked.is_left():
            self._rejected("contribution", checked)
            return Nothing()

        with self._lock:
            if find_goal(self._goals, goal_id).is_none():
                logger.debug("Savings goal %s not found, contribution ignored", goal_id)
                return Nothing()

            self._goals = transforms.contribute_to_goal(self._goals, goal_id, amount)
            updated = find_goal(self._goals, goal_id)
            logger.debug("Contributed %.2f to goal %s", amount, goal_id)
            return updated

    def delete_savings_goal(self, goal_id: str) -> Maybe[SavingsGoal]:
        with self._lock:
            found = find_goal(self._goals, goal_id)
            if found.is_some():
                self._goals = transforms.delete_goal(self._goals, goal_id)
                logger.debug("Deleted savings goal %s", goal_id)
            return found
