import itertools
import threading
from datetime import date

from tracker import config
from tracker.budgets import ON_TRACK, WARNING, classify_budget
from tracker.store import RecordStore


def counting_ids():
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


def make_store(**kwargs):
    return RecordStore(id_factory=counting_ids(), **kwargs)


def test_add_expense_assigns_unique_ids_and_prepends():
    store = RecordStore()
    first = store.add_expense(10.0, "Food", "Coffee", date(2025, 11, 1)).get_or_else(None)
    second = store.add_expense(20.0, "Bills", "Water", date(2025, 11, 2)).get_or_else(None)

    assert first.id != second.id
    assert [e.id for e in store.expenses] == [second.id, first.id]


def test_add_expense_accepts_iso_string_date():
    store = make_store()
    result = store.add_expense(5.0, "Food", "Snack", "2025-11-15", recurring=True)
    assert result.is_right()
    assert store.expenses[0].date == date(2025, 11, 15)
    assert store.expenses[0].recurring is True


def test_rejected_expense_leaves_state_unchanged():
    store = make_store()
    store.add_budget("Food", 100.0)

    for amount in (0, -3.0, float("nan")):
        result = store.add_expense(amount, "Food", "Bad", date(2025, 11, 1))
        assert result.is_left()
    assert store.add_expense(5.0, "Food", "Bad date", "not-a-date").get_error()["error"] == "invalid_date"

    assert store.expenses == ()
    assert store.budgets[0].spent == 0.0


def test_end_to_end_food_budget():
    store = make_store()
    budget = store.add_budget("Food", 100.0).get_or_else(None)
    assert budget.spent == 0.0

    store.add_expense(45.5, "Food", "Groceries", date(2025, 11, 15))
    ev = classify_budget(store.budgets[0])
    assert ev.spent == 45.5
    assert ev.status == ON_TRACK
    assert ev.remaining == 54.5

    store.add_expense(40, "Food", "Dinner", date(2025, 11, 16))
    ev = classify_budget(store.budgets[0])
    assert ev.spent == 85.5
    assert ev.status == WARNING
    assert ev.remaining == 14.5


def test_cascade_matches_sum_of_expenses_while_budget_exists():
    store = make_store()
    store.add_expense(7.0, "Food", "Before any budget", date(2025, 11, 1))
    food = store.add_budget("Food", 500.0).get_or_else(None)
    bills = store.add_budget("Bills", 500.0).get_or_else(None)

    amounts = [("Food", 12.25), ("Bills", 30.0), ("Food", 3.75), ("Health", 9.0), ("Food", 1.0)]
    for category, amount in amounts:
        store.add_expense(amount, category, "item", date(2025, 11, 2))

    by_id = {b.id: b for b in store.budgets}
    assert by_id[food.id].spent == 17.0
    assert by_id[bills.id].spent == 30.0


def test_two_budgets_same_category_both_cascade():
    store = make_store()
    store.add_budget("Food", 100.0)
    store.add_budget("Food", 200.0, "custom", "2025-11-01", "2025-11-30")
    store.add_expense(10.0, "Food", "Lunch", date(2025, 11, 3))
    assert [b.spent for b in store.budgets] == [10.0, 10.0]
    assert store.budgets[1].start_date == date(2025, 11, 1)


def test_add_budget_validation():
    store = make_store()
    assert store.add_budget("", 100.0).get_error()["error"] == "missing_category"
    assert store.add_budget("Food", 0).get_error()["error"] == "invalid_limit"
    assert store.add_budget("Food", 10.0, "weekly").get_error()["error"] == "invalid_period"
    assert store.budgets == ()


def test_update_budget_merges_fields():
    store = make_store()
    b = store.add_budget("Food", 100.0).get_or_else(None)
    store.add_expense(30.0, "Food", "Lunch", date(2025, 11, 1))

    updated = store.update_budget(b.id, limit=250.0, period="custom", spent=0.0, id="hijack")

    assert updated.is_some()
    stored = store.budgets[0]
    assert stored.id == b.id
    assert stored.limit == 250.0
    assert stored.period == "custom"
    assert stored.spent == 30.0


def test_update_budget_unknown_or_invalid_is_noop():
    store = make_store()
    b = store.add_budget("Food", 100.0).get_or_else(None)
    before = store.budgets

    assert store.update_budget("missing", limit=5.0).is_none()
    assert store.update_budget(b.id, limit=-5.0).is_none()
    assert store.update_budget(b.id, category="").is_none()
    assert store.budgets == before


def test_delete_budget_keeps_expenses():
    store = make_store()
    b = store.add_budget("Food", 100.0).get_or_else(None)
    store.add_expense(10.0, "Food", "Lunch", date(2025, 11, 1))

    assert store.delete_budget(b.id).is_some()
    assert store.delete_budget(b.id).is_none()
    assert store.budgets == ()
    assert len(store.expenses) == 1


def test_savings_goal_lifecycle():
    store = make_store()
    goal = store.add_savings_goal("Laptop", 1200.0, "2026-03-01").get_or_else(None)
    assert goal.current == 0.0
    assert goal.deadline == date(2026, 3, 1)

    assert store.contribute_to_goal(goal.id, 450.0).get_or_else(None).current == 450.0
    assert store.contribute_to_goal(goal.id, 10_000.0).get_or_else(None).current == 1200.0

    assert store.delete_savings_goal(goal.id).is_some()
    assert store.goals == ()


def test_contribution_clamp_and_monotonic():
    store = make_store()
    goal = store.add_savings_goal("Trip", 100.0).get_or_else(None)

    previous = 0.0
    for amount in (30.0, 0, -20.0, 50.0, 45.0, 1.0):
        store.contribute_to_goal(goal.id, amount)
        current = store.goals[0].current
        assert current <= 100.0
        assert current >= previous
        previous = current
    assert previous == 100.0


def test_contribution_rejections_are_noops():
    store = make_store()
    goal = store.add_savings_goal("Trip", 100.0).get_or_else(None)

    assert store.contribute_to_goal(goal.id, 0).is_none()
    assert store.contribute_to_goal(goal.id, -5.0).is_none()
    assert store.contribute_to_goal("missing", 5.0).is_none()
    assert store.goals[0].current == 0.0


def test_add_savings_goal_validation():
    store = make_store()
    assert store.add_savings_goal("", 100.0).is_left()
    assert store.add_savings_goal("Trip", 0).is_left()
    assert store.add_savings_goal("Trip", 10.0, "31/12/2025").get_error()["error"] == "invalid_date"
    assert store.goals == ()


def test_from_seed_and_snapshot():
    store = RecordStore.from_seed(config.get_seed_path())
    snap = store.snapshot()

    assert snap.expenses == store.expenses
    assert len(snap.budgets) == 4
    store.add_expense(1.0, "Food", "Gum", date(2025, 11, 20))
    assert len(snap.expenses) == len(store.expenses) - 1


def test_concurrent_expenses_keep_cascade_consistent():
    store = make_store()
    store.add_budget("Food", 1_000_000.0)

    def worker():
        for _ in range(200):
            store.add_expense(1.0, "Food", "tick", date(2025, 11, 1))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.expenses) == 800
    assert store.budgets[0].spent == 800.0


def test_update_budget_category_limit_and_period_together():
    store = make_store()
    b = store.add_budget("Food", 100.0).get_or_else(None)
    store.add_expense(30.0, "Food", "Lunch", date(2025, 11, 1))

    updated = store.update_budget(b.id, category="Shopping", limit=150.0, period="custom").get_or_else(None)

    assert (updated.category, updated.limit, updated.period) == ("Shopping", 150.0, "custom")
    assert updated.spent == 30.0
    store.add_expense(20.0, "Shopping", "Shoes", date(2025, 11, 2))
    store.add_expense(5.0, "Food", "Snack", date(2025, 11, 2))
    assert store.budgets[0].spent == 50.0


def test_update_budget_zero_limit_from_edit_form_is_rejected():
    store = make_store()
    b = store.add_budget("Food", 100.0).get_or_else(None)

    result = store.update_budget(b.id, category="Bills", limit=0.0, period="monthly")

    assert result.is_none()
    assert store.budgets[0] == b
