"""Savings goal progress and deadline arithmetic."""

import math
from datetime import date, datetime, time
from typing import Iterable, NamedTuple, Optional, Union

from tracker import config
from tracker.domain import SavingsGoal
from tracker.notifications import SUCCESS, Notification, plural
from tracker.spending import safe_percentage

SECONDS_PER_DAY = 24 * 60 * 60

Moment = Union[date, datetime]


class GoalProgress(NamedTuple):
    goal_id: str
    name: str
    percentage: float
    remaining: float
    is_complete: bool
    days_remaining: Optional[int]   # None without a deadline, negative when overdue


class SavingsTotals(NamedTuple):
    total_saved: float
    total_target: float
    overall_progress: float
    completed_count: int


def _as_datetime(moment: Moment) -> datetime:
    if isinstance(moment, datetime):
        return moment
    return datetime.combine(moment, time())


def days_until(deadline: Moment, today: Moment) -> int:
    """Whole days left until ``deadline``, rounding partial days up.

    A calendar date counts from its midnight, so a deadline twelve hours away
    still reports 1 and a deadline of today reports 0.
    """
    delta = _as_datetime(deadline) - _as_datetime(today)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def deadline_label(days_remaining: int) -> str:
    if days_remaining < 0:
        return f"{abs(days_remaining)} days overdue"
    if days_remaining == 0:
        return "Due today"
    return f"{days_remaining} days remaining"


def classify_goal(goal: SavingsGoal, today: Moment) -> GoalProgress:
    percentage = safe_percentage(goal.current, goal.target)
    return GoalProgress(
        goal_id=goal.id,
        name=goal.name,
        percentage=percentage,
        remaining=max(goal.target - goal.current, 0.0),
        is_complete=percentage >= 100,
        days_remaining=days_until(goal.deadline, today) if goal.deadline is not None else None,
    )


def savings_totals(goals: Iterable[SavingsGoal]) -> SavingsTotals:
    goals = tuple(goals)
    total_saved = sum(g.current for g in goals)
    total_target = sum(g.target for g in goals)
    return SavingsTotals(
        total_saved=total_saved,
        total_target=total_target,
        overall_progress=safe_percentage(total_saved, total_target),
        completed_count=sum(1 for g in goals if safe_percentage(g.current, g.target) >= 100),
    )


def savings_notifications(goals: Iterable[SavingsGoal]) -> list[Notification]:
    totals = savings_totals(goals)
    if totals.completed_count > 0:
        return [Notification(
            SUCCESS,
            "Congratulations! 🎊",
            f"You've completed {plural(totals.completed_count, 'savings goal')}! "
            "Your financial discipline is paying off!",
        )]
    # only reachable while no goal is complete
    if config.HALFWAY_PCT <= totals.overall_progress < 100:
        return [Notification(
            SUCCESS,
            "Halfway There! 🎯",
            f"You've saved {totals.overall_progress:.0f}% of your target amount. Keep up the great work!",
        )]
    return []
