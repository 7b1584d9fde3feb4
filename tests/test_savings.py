import math
from datetime import date, datetime

from tracker.domain import SavingsGoal
from tracker.savings import (
    classify_goal,
    days_until,
    deadline_label,
    savings_notifications,
    savings_totals,
)

TODAY = date(2025, 11, 15)


def make_goal(id, current, target=100.0, deadline=None):
    return SavingsGoal(id=id, name=f"goal {id}", target=target, current=current, deadline=deadline)


def test_days_until_ceiling():
    noon = datetime(2025, 11, 15, 12, 0)
    assert days_until(date(2025, 11, 17), noon) == 2        # 1.5 days
    assert days_until(date(2025, 11, 16), noon) == 1        # 12 hours
    assert days_until(TODAY, TODAY) == 0
    assert days_until(date(2025, 11, 14), TODAY) == -1
    assert days_until(date(2025, 12, 15), TODAY) == 30


def test_deadline_label():
    assert deadline_label(-3) == "3 days overdue"
    assert deadline_label(0) == "Due today"
    assert deadline_label(12) == "12 days remaining"


def test_classify_goal():
    progress = classify_goal(make_goal("g1", 25.0, deadline=date(2025, 11, 25)), TODAY)
    assert progress.percentage == 25.0
    assert progress.remaining == 75.0
    assert progress.is_complete is False
    assert progress.days_remaining == 10


def test_classify_goal_without_deadline():
    assert classify_goal(make_goal("g1", 0.0), TODAY).days_remaining is None


def test_complete_goal():
    progress = classify_goal(make_goal("g1", 100.0), TODAY)
    assert progress.is_complete
    assert progress.remaining == 0.0


def test_zero_target_does_not_crash():
    progress = classify_goal(make_goal("g1", 0.0, target=0), TODAY)
    assert math.isfinite(progress.percentage)
    assert progress.percentage == 0.0


def test_savings_totals():
    totals = savings_totals((make_goal("g1", 100.0), make_goal("g2", 50.0, target=300.0)))
    assert totals.total_saved == 150.0
    assert totals.total_target == 400.0
    assert totals.overall_progress == 37.5
    assert totals.completed_count == 1


def test_completion_notification_fires_for_any_completed_goal():
    notes = savings_notifications((make_goal("g1", 100.0), make_goal("g2", 0.0, target=900.0)))
    assert len(notes) == 1
    assert notes[0].title.startswith("Congratulations")
    assert "1 savings goal!" in notes[0].message


def test_halfway_suppressed_once_a_goal_completes():
    goals = (make_goal("g1", 100.0), make_goal("g2", 10.0))  # overall 55%
    titles = [n.title for n in savings_notifications(goals)]
    assert not any(t.startswith("Halfway") for t in titles)


def test_halfway_notification():
    notes = savings_notifications((make_goal("g1", 60.0), make_goal("g2", 40.0)))
    assert [n.title for n in notes] == ["Halfway There! 🎯"]
    assert "50%" in notes[0].message


def test_no_notifications_below_halfway():
    assert savings_notifications((make_goal("g1", 10.0),)) == []
    assert savings_notifications(()) == []
