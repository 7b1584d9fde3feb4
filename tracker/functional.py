import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Generic, Optional, TypeVar

from tracker.domain import PERIODS, Budget, Expense, SavingsGoal

T = TypeVar('T')
E = TypeVar('E')


class Maybe(Generic[T], ABC):
    """Result of a lookup that may find nothing."""

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):
    """Validation outcome: Right(value) when accepted, Left(error) when rejected."""

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def is_positive_amount(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _is_blank(text: Optional[str]) -> bool:
    return not isinstance(text, str) or not text.strip()


def _reject(code: str, message: str, **details) -> Left:
    return Left({"error": code, "message": message, **details})


def find_budget(budgets: tuple[Budget, ...], budget_id: str) -> Maybe[Budget]:
    for b in budgets:
        if b.id == budget_id:
            return Some(b)
    return Nothing()


def find_goal(goals: tuple[SavingsGoal, ...], goal_id: str) -> Maybe[SavingsGoal]:
    for g in goals:
        if g.id == goal_id:
            return Some(g)
    return Nothing()


def validate_expense(e: Expense) -> Either[dict, Expense]:
    if not is_positive_amount(e.amount):
        return _reject("invalid_amount", f"Expense amount must be positive, got {e.amount!r}", amount=e.amount)
    if _is_blank(e.category):
        return _reject("missing_category", "Expense needs a category")
    if _is_blank(e.description):
        return _reject("missing_description", "Expense needs a description")
    if not isinstance(e.date, date):
        return _reject("invalid_date", f"Expense date must be a calendar date, got {e.date!r}")
    return Right(e)


def validate_budget(b: Budget) -> Either[dict, Budget]:
    if _is_blank(b.category):
        return _reject("missing_category", "Budget needs a category")
    if not is_positive_amount(b.limit):
        return _reject("invalid_limit", f"Budget limit must be positive, got {b.limit!r}", limit=b.limit)
    if b.period not in PERIODS:
        return _reject("invalid_period", f"Unknown budget period {b.period!r}", period=b.period)
    for field_name in ("start_date", "end_date"):
        value = getattr(b, field_name)
        if value is not None and not isinstance(value, date):
            return _reject("invalid_date", f"Budget {field_name} must be a calendar date, got {value!r}")
    return Right(b)


def validate_goal(g: SavingsGoal) -> Either[dict, SavingsGoal]:
    if _is_blank(g.name):
        return _reject("missing_name", "Savings goal needs a name")
    if not is_positive_amount(g.target):
        return _reject("invalid_target", f"Savings target must be positive, got {g.target!r}", target=g.target)
    if g.deadline is not None and not isinstance(g.deadline, date):
        return _reject("invalid_date", f"Goal deadline must be a calendar date, got {g.deadline!r}")
    return Right(g)


def validate_contribution(amount) -> Either[dict, float]:
    if not is_positive_amount(amount):
        return _reject("invalid_contribution", f"Contribution must be positive, got {amount!r}", amount=amount)
    return Right(amount)
