import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

from tracker import config
from tracker.budgets import EXCEEDED, WARNING
from tracker.domain import CATEGORIES, PERIODS, category_or_other
from tracker.filters import ALL_CATEGORIES, by_date_range, expense_notifications, filter_expenses, summarize_expenses
from tracker.grouping import group_by_date
from tracker.logging_setup import configure_logging, get_logger
from tracker.savings import deadline_label
from tracker.services import budget_service, dashboard_view, savings_service
from tracker.store import RecordStore

configure_logging()
logger = get_logger("tracker.app")

st.set_page_config(page_title="Pocketbook", layout="wide")

CATEGORY_ICONS = {
    "Food": "☕",
    "Transportation": "🚗",
    "Entertainment": "🎬",
    "Bills": "⚡",
    "Shopping": "🛍️",
    "Health": "❤️",
    "Other": "•••",
}


def icon_for(category: str) -> str:
    return CATEGORY_ICONS[category_or_other(category)]


def show_banners(notifications):
    for note in notifications:
        render = getattr(st, note.style.renderer)
        render(f"**{note.title}**  \n{note.message}", icon=note.style.icon)


def show_result(result, success_msg: str):
    if result.is_right():
        # shown on the next run, st.rerun() discards this one
        st.session_state.flash = success_msg
        st.rerun()
    else:
        st.error(result.get_error()["message"])


def show_flash():
    message = st.session_state.pop("flash", None)
    if message:
        st.success(message)


# one store per browser session
if "store" not in st.session_state:
    st.session_state.store = RecordStore.from_seed(config.get_seed_path())
store: RecordStore = st.session_state.store

if not st.session_state.get("user_name"):
    st.title("💰 Pocketbook")
    with st.form("login_form"):
        name = st.text_input("Your name")
        if st.form_submit_button("Get started") and name.strip():
            st.session_state.user_name = name.strip()
            logger.info("Session started for %s", st.session_state.user_name)
            st.rerun()
    st.stop()

st.sidebar.markdown(f"### 👤 {st.session_state.user_name}")
if st.sidebar.button("Log out"):
    st.session_state.user_name = ""
    st.rerun()

menu = st.sidebar.radio("Menu", ["🏠 Dashboard", "🧾 Expenses", "🎯 Budgets", "🐷 Savings"])
today = date.today()

if menu == "🏠 Dashboard":
    snapshot = store.snapshot()
    summary = dashboard_view(snapshot, today)

    st.title(f"Welcome back, {st.session_state.user_name}!")
    st.caption(f"Here's your financial overview for {today:%B}")
    show_flash()
    show_banners(summary.notifications)

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Total Spent", f"${summary.total_spent:,.2f}")
    with k2:
        st.metric("Total Budget", f"${summary.total_budget:,.2f}", f"{summary.budget_usage_percentage:.0f}% used",
                  delta_color="inverse")
    with k3:
        st.metric("Total Saved", f"${summary.total_saved:,.2f}")
    with k4:
        st.metric("Savings Goal", f"${summary.total_savings_target:,.2f}", f"{summary.savings_percentage:.0f}% reached")

    left, right = st.columns(2)
    with left:
        st.subheader("Top Spending Categories")
        for row in summary.top_categories:
            st.markdown(f"{icon_for(row.category)} **{row.category}** · ${row.amount:,.2f}")
            st.progress(min(row.share, 100) / 100)
    with right:
        st.subheader("Recent Transactions")
        if summary.recent_expenses:
            recent_df = pd.DataFrame([
                {
                    "": icon_for(e.category),
                    "Description": e.description,
                    "Category": e.category,
                    "Date": e.date.strftime("%m/%d/%Y"),
                    "Amount": f"-${e.amount:,.2f}",
                }
                for e in summary.recent_expenses
            ])
            st.table(recent_df)
        else:
            st.info("No expenses yet.")

    if summary.budgets_at_risk:
        st.subheader("Budget Alerts")
        for ev in summary.budgets_at_risk:
            st.markdown(f"**{ev.category}** · ${ev.spent:,.2f} / ${ev.limit:,.2f}")
            st.progress(min(ev.percentage, 100) / 100)
            st.caption(f"You've used {ev.percentage:.0f}% of your budget")

    st.subheader("Savings Goals Progress")
    for progress, goal in zip(summary.goals, snapshot.goals):
        due = f" • Due {goal.deadline:%m/%d/%Y}" if goal.deadline else ""
        st.markdown(f"**{goal.name}** · ${goal.current:,.2f} / ${goal.target:,.2f}")
        st.progress(min(progress.percentage, 100) / 100)
        st.caption(f"{progress.percentage:.0f}% complete{due}")

elif menu == "🧾 Expenses":
    st.title("🧾 Expense Tracker")
    st.caption("Track and categorize your daily expenses")

    with st.expander("➕ Add Expense"):
        with st.form("expense_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
                category = st.selectbox("Category", CATEGORIES)
            with col2:
                description = st.text_input("Description", placeholder="What did you buy?")
                spent_on = st.date_input("Date", value=today)
            recurring = st.toggle("Recurring expense")
            if st.form_submit_button("Add Expense"):
                show_result(store.add_expense(amount, category, description, spent_on, recurring), "Expense added")

    col_cat, col_range = st.columns(2)
    with col_cat:
        filter_category = st.selectbox("Category", [ALL_CATEGORIES, *CATEGORIES])
    filtered = filter_expenses(store.expenses, filter_category)
    with col_range:
        if filtered:
            dates = [e.date for e in filtered]
            date_range = st.date_input("Date Range", value=(min(dates), max(dates)), key="expense_date_range")
            if len(date_range) == 2:
                filtered = tuple(filter(by_date_range(*date_range), filtered))

    show_flash()
    show_banners(expense_notifications(filtered))

    totals = summarize_expenses(filtered)
    m1, m2 = st.columns(2)
    m1.metric("Total Spent", f"${totals.total_spent:,.2f}")
    m2.metric("Transactions", totals.count)

    if filtered:
        df = pd.DataFrame([e.__dict__ for e in filtered])
        fig = px.pie(
            df.groupby("category", as_index=False)["amount"].sum(),
            values="amount",
            names="category",
            title="Spending by Category",
        )
        fig.update_layout(height=320)
        st.plotly_chart(fig, use_container_width=True)

        for label, day_expenses in group_by_date(filtered).items():
            st.markdown(f"#### {label}")
            for e in day_expenses:
                tag = " 🔁" if e.recurring else ""
                st.markdown(f"{icon_for(e.category)} {e.description} · *{e.category}*{tag} · **-${e.amount:,.2f}**")

        st.download_button(
            "⬇️ Download Filtered Data",
            df.to_csv(index=False),
            file_name="expenses_filtered.csv",
            mime="text/csv",
        )
    else:
        st.info("No expenses match the selected filters")

elif menu == "🎯 Budgets":
    snapshot = store.snapshot()
    report = budget_service().run(snapshot, today)
    result = report["result"]

    st.title("🎯 Budget Manager")
    st.caption("Set spending limits and track your progress")

    with st.expander("➕ Create Budget"):
        with st.form("budget_form", clear_on_submit=True):
            category = st.selectbox("Category", CATEGORIES)
            limit = st.number_input("Budget Limit", min_value=0.0, step=10.0)
            period = st.selectbox("Period", PERIODS)
            if st.form_submit_button("Create Budget"):
                show_result(store.add_budget(category, limit, period), "Budget created")

    show_flash()
    show_banners(result["notifications"])

    totals = result["totals"]
    m1, m2, m3 = st.columns(3)
    m1.metric("Total Budget", f"${totals.total_budget:,.2f}")
    m2.metric("Total Spent", f"${totals.total_spent:,.2f}")
    m3.metric("Remaining", f"${abs(totals.remaining):,.2f}",
              "over budget" if totals.remaining < 0 else None, delta_color="inverse")

    periods = {b.id: b.period for b in snapshot.budgets}
    cols = st.columns(2)
    for idx, ev in enumerate(result["budgets"]):
        with cols[idx % 2]:
            badge = {EXCEEDED: "🔴 Exceeded", WARNING: "🟠 Warning"}.get(ev.status, "🟢 On track")
            st.markdown(f"### {icon_for(ev.category)} {ev.category}  \n{badge}")
            st.progress(min(ev.percentage, 100) / 100)
            left_over = f"${ev.remaining:,.2f} left" if ev.remaining >= 0 else f"${abs(ev.remaining):,.2f} over"
            st.caption(f"${ev.spent:,.2f} of ${ev.limit:,.2f} · {ev.percentage:.0f}% · {left_over}")

            with st.popover("Edit"):
                new_category = st.selectbox(
                    "Category", CATEGORIES, index=CATEGORIES.index(category_or_other(ev.category)),
                    key=f"category_{ev.budget_id}",
                )
                new_limit = st.number_input("Limit", min_value=0.0, value=float(ev.limit), key=f"limit_{ev.budget_id}")
                new_period = st.selectbox(
                    "Period", PERIODS, index=PERIODS.index(periods[ev.budget_id]), key=f"period_{ev.budget_id}",
                )
                if st.button("Update Budget", key=f"save_{ev.budget_id}"):
                    updated = store.update_budget(
                        ev.budget_id, category=new_category, limit=new_limit, period=new_period,
                    )
                    if updated.is_none():
                        st.error("Pick a category and a limit greater than zero")
                    else:
                        st.session_state.flash = "Budget updated"
                        st.rerun()
            if st.button("🗑 Delete", key=f"del_{ev.budget_id}"):
                store.delete_budget(ev.budget_id)
                st.rerun()

elif menu == "🐷 Savings":
    report = savings_service().run(store.snapshot(), today)
    result = report["result"]

    st.title("🐷 Savings Goals")
    st.caption("Save toward what matters to you")

    with st.expander("➕ New Goal"):
        with st.form("goal_form", clear_on_submit=True):
            name = st.text_input("Goal Name", placeholder="e.g., Vacation Fund")
            target = st.number_input("Target Amount", min_value=0.0, step=50.0)
            has_deadline = st.checkbox("Set a deadline")
            deadline = st.date_input("Deadline", value=today)
            if st.form_submit_button("Create Goal"):
                show_result(
                    store.add_savings_goal(name, target, deadline if has_deadline else None),
                    "Savings goal created",
                )

    show_flash()
    show_banners(result["notifications"])

    totals = result["totals"]
    m1, m2, m3 = st.columns(3)
    m1.metric("Total Saved", f"${totals.total_saved:,.2f}")
    m2.metric("Total Target", f"${totals.total_target:,.2f}")
    m3.metric("Overall Progress", f"{totals.overall_progress:.0f}%")
    st.progress(min(totals.overall_progress, 100) / 100)

    cols = st.columns(2)
    for idx, progress in enumerate(result["goals"]):
        with cols[idx % 2]:
            done = "✅ " if progress.is_complete else ""
            st.markdown(f"### {done}{progress.name}")
            if progress.days_remaining is not None:
                st.caption(deadline_label(progress.days_remaining))
            st.progress(min(progress.percentage, 100) / 100)
            st.caption(f"{progress.percentage:.0f}% complete · ${progress.remaining:,.2f} to go")

            if not progress.is_complete:
                with st.popover("Add Money"):
                    add_amount = st.number_input("Amount", min_value=0.0, step=10.0, key=f"add_{progress.goal_id}")
                    if st.button("Add", key=f"confirm_{progress.goal_id}"):
                        if store.contribute_to_goal(progress.goal_id, add_amount).is_none():
                            st.error("Enter an amount greater than zero")
                        else:
                            st.rerun()
            if st.button("🗑 Delete", key=f"del_{progress.goal_id}"):
                store.delete_savings_goal(progress.goal_id)
                st.rerun()
