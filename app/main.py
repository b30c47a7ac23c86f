import asyncio
import logging
import os
import sys
from datetime import date
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd
import streamlit as st

from finance_core import config
from finance_core.aggregation import by_category, filter_transactions
from finance_core.charts import budget_comparison_figure, category_pie_figure, monthly_expenses_figure
from finance_core.events import (
    BUDGET_ADDED,
    BUDGET_UPDATED,
    NOTIFICATION,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    TRANSACTION_UPDATED,
    EventBus,
    notification_from_event,
    notifier,
)
from finance_core.formatting import format_date, format_money
from finance_core.forms import (
    DeleteDialog,
    FormStatus,
    budget_form,
    cancel_delete,
    close_form,
    confirm_delete,
    request_delete,
    set_field,
    submit_budget,
    submit_transaction,
    transaction_form,
)
from finance_core.log import setup_logging
from finance_core.services import default_dashboard_service
from finance_core.tables import budget_frame, display_transactions, transactions_csv, transactions_frame
from finance_core.transforms import (
    add_budget,
    add_transaction,
    load_seed,
    remove_transaction,
    replace_budget,
    replace_transaction,
)
from finance_core.validation import parse_date

st.set_page_config(page_title=config.PAGE_TITLE, layout="wide")
setup_logging()

if "transactions" not in st.session_state:
    try:
        categories, transactions, budgets = load_seed(config.SEED_PATH)
        st.session_state.seed_missing = False
    except FileNotFoundError:
        logging.warning(f'Seed file {config.SEED_PATH} not found, starting empty')
        categories, transactions, budgets = (), (), ()
        st.session_state.seed_missing = True
    st.session_state.categories = categories
    st.session_state.transactions = transactions
    st.session_state.budgets = budgets
    st.session_state.notifications = []
    st.session_state.activity = []
    st.session_state.form_versions = {}
    st.session_state.tx_edit = None
    st.session_state.budget_edit = None
    st.session_state.delete_dialog = DeleteDialog()


def _collect_notification(event, payload):
    st.session_state.notifications.append(notification_from_event(event))
    return {}


def _record_activity(event, payload):
    st.session_state.activity.append({
        "event": event.name,
        "timestamp": pd.Timestamp(event.ts).strftime("%H:%M:%S"),
        **payload,
    })
    return {}


if "bus" not in st.session_state:
    bus = EventBus()
    bus.subscribe(NOTIFICATION, _collect_notification)
    for name in (TRANSACTION_ADDED, TRANSACTION_UPDATED, TRANSACTION_DELETED, BUDGET_ADDED, BUDGET_UPDATED):
        bus.subscribe(name, _record_activity)
    st.session_state.bus = bus

bus = st.session_state.bus
notify = notifier(bus)
categories = st.session_state.categories


# --- in-memory collaborators standing in for the API layer

async def add_tx(t):
    st.session_state.transactions = add_transaction(st.session_state.transactions, t)
    added = st.session_state.transactions[-1]
    bus.publish(TRANSACTION_ADDED, {"id": added.id, "category": added.category, "amount": added.amount})


async def edit_tx(t):
    st.session_state.transactions = replace_transaction(st.session_state.transactions, t)
    bus.publish(TRANSACTION_UPDATED, {"id": t.id, "category": t.category, "amount": t.amount})


async def delete_tx(tid):
    st.session_state.transactions = remove_transaction(st.session_state.transactions, tid)
    bus.publish(TRANSACTION_DELETED, {"id": tid})


async def add_bgt(b):
    st.session_state.budgets = add_budget(st.session_state.budgets, b)
    bus.publish(BUDGET_ADDED, {"category": b.category, "amount": b.amount})


async def edit_bgt(b):
    st.session_state.budgets = replace_budget(st.session_state.budgets, b)
    bus.publish(BUDGET_UPDATED, {"id": b.id, "category": b.category, "amount": b.amount})


# --- notifications queued by the previous run

for n in st.session_state.notifications:
    if n.severity == "destructive":
        st.toast(f"**{n.title}** {n.message}", icon="⚠️")
    else:
        st.toast(f"**{n.title}** {n.message}", icon="✅")
st.session_state.notifications = []

if st.session_state.seed_missing:
    st.sidebar.warning(f"Seed file {config.SEED_PATH} not found. Starting with no data.")

today = st.sidebar.date_input("As of", value=date.today(), key="as_of")
menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "🧾 Transactions", "💰 Budgets", "💡 Insights"]
)

report = default_dashboard_service().build(
    today, st.session_state.transactions, st.session_state.budgets, categories
)
result = report["result"]


def _bump(key):
    st.session_state.form_versions[key] = st.session_state.form_versions.get(key, 0) + 1


def _field_error(state, name):
    if state.errors.get(name):
        st.caption(f":red[{state.errors[name]}]")


def _category_options(current):
    names = [c.name for c in categories]
    if current and current not in names:
        names.append(current)  # orphaned reference, still shown
    return names


def transaction_form_view(key, state):
    version = st.session_state.form_versions.get(key, 0)
    title = "Edit Transaction" if state.is_editing else "Add New Transaction"
    st.subheader(title)
    with st.form(f"{key}_{version}"):
        amount = st.text_input("Amount ($)", value=state.fields["amount"], placeholder="0.00")
        _field_error(state, "amount")
        description = st.text_input("Description", value=state.fields["description"],
                                    placeholder="Groceries, Rent, etc.")
        _field_error(state, "description")
        tx_date = st.date_input("Date", value=parse_date(state.fields["date"]) or today)
        _field_error(state, "date")
        options = _category_options(state.fields["category"])
        category = ""
        if options:
            current = state.fields["category"]
            category = st.selectbox("Category", options,
                                    index=options.index(current) if current in options else 0)
        _field_error(state, "category")

        col_submit, col_cancel = st.columns([1, 1])
        with col_submit:
            submitted = st.form_submit_button(("Update" if state.is_editing else "Add") + " Transaction")
        with col_cancel:
            cancelled = st.form_submit_button("Cancel") if state.is_editing else False

    if cancelled:
        return close_form(state), True
    if not submitted:
        return state, False

    for name, value in (
        ("amount", amount),
        ("description", description),
        ("date", tx_date.isoformat() if tx_date else ""),
        ("category", category),
    ):
        state = set_field(state, name, value)

    with st.spinner("Saving..."):
        state = asyncio.run(submit_transaction(
            state, add=add_tx, edit=edit_tx, notify=notify, categories=categories, today=today,
        ))
    if state.status == FormStatus.SUCCESS:
        _bump(key)
    return state, True


def budget_form_view(key, state):
    version = st.session_state.form_versions.get(key, 0)
    st.subheader("Edit Budget" if state.is_editing else "Set Category Budget")
    with st.form(f"{key}_{version}"):
        options = _category_options(state.fields["category"])
        current = state.fields["category"]
        category = st.selectbox(
            "Category", options,
            index=options.index(current) if current in options else 0,
            disabled="category" in state.locked,
        ) if options else ""
        _field_error(state, "category")
        amount = st.text_input("Monthly Budget ($)", value=state.fields["amount"], placeholder="0.00")
        _field_error(state, "amount")

        col_submit, col_cancel = st.columns([1, 1])
        with col_submit:
            submitted = st.form_submit_button(("Update" if state.is_editing else "Set") + " Budget")
        with col_cancel:
            cancelled = st.form_submit_button("Cancel") if state.is_editing else False

    if cancelled:
        return close_form(state), True
    if not submitted:
        return state, False

    state = set_field(state, "category", category or "")
    state = set_field(state, "amount", amount)
    with st.spinner("Saving..."):
        state = asyncio.run(submit_budget(
            state, add=add_bgt, edit=edit_bgt, notify=notify, categories=categories,
        ))
    if state.status == FormStatus.SUCCESS:
        _bump(key)
    return state, True


if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Total Expenses", format_money(result["total"]))
    with k2:
        st.subheader("Top Categories")
        if not result["top_categories"]:
            st.caption("No data available")
        for c in result["top_categories"]:
            st.write(f"{c.name} — **{format_money(c.total)}**")
    with k3:
        st.subheader("Recent Transactions")
        if not result["recent"]:
            st.caption("No recent transactions")
        for t in result["recent"]:
            st.write(f"**{t.description}** {format_money(t.amount)}")
            st.caption(f"{t.category} · {format_date(t.date)}")

    col_monthly, col_pie = st.columns(2)
    with col_monthly:
        if result["monthly"]:
            st.plotly_chart(monthly_expenses_figure(result["monthly"]), use_container_width=True)
        else:
            st.info("No data available. Add transactions to see your monthly expenses.")
    with col_pie:
        if result["categories"]:
            st.plotly_chart(category_pie_figure(result["categories"]), use_container_width=True)
        else:
            st.info("No data available. Add transactions to see your category breakdown.")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    # the add form defaults to the "As of" date, so rebuild it when that moves
    if "tx_add" not in st.session_state or st.session_state.get("tx_add_today") != today:
        st.session_state.tx_add = transaction_form(categories, today)
        st.session_state.tx_add_today = today
        _bump("tx_add")
    st.session_state.tx_add, acted = transaction_form_view("tx_add", st.session_state.tx_add)
    if acted:
        st.rerun()

    st.divider()
    st.subheader("Transaction History")

    selected = st.multiselect("Category", options=[c.name for c in categories], default=[])
    shown = st.session_state.transactions
    if selected:
        shown = tuple(t for name in selected for t in filter_transactions(shown, by_category(name)))

    df = transactions_frame(shown)
    if df.empty:
        st.info("No transactions yet. Add your first transaction to get started!")
    else:
        st.dataframe(display_transactions(df), use_container_width=True, hide_index=True)
        st.download_button("⬇ Download CSV", transactions_csv(df), file_name="transactions.csv", mime="text/csv")

        by_id = {t.id: t for t in st.session_state.transactions}
        for tid in df["id"]:
            t = by_id[tid]
            c1, c2, c3 = st.columns([6, 1, 1])
            c1.write(f"{format_date(t.date)} · {t.description} · {t.category} · {format_money(t.amount)}")
            if c2.button("✏️", key=f"edit_{tid}"):
                st.session_state.tx_edit = transaction_form(categories, today, t)
                st.rerun()
            if c3.button("🗑️", key=f"delete_{tid}"):
                st.session_state.delete_dialog = request_delete(st.session_state.delete_dialog, t)
                st.rerun()

    dialog = st.session_state.delete_dialog
    if dialog.is_open:
        st.warning("Are you sure you want to delete this transaction? This action cannot be undone.")
        st.caption(f"{dialog.target.description} · {format_money(dialog.target.amount)}")
        d1, d2 = st.columns(2)
        if d1.button("Cancel", key="cancel_delete"):
            st.session_state.delete_dialog = cancel_delete(dialog)
            st.rerun()
        if d2.button("Delete", key="confirm_delete", type="primary"):
            st.session_state.delete_dialog = asyncio.run(confirm_delete(dialog, delete=delete_tx, notify=notify))
            st.rerun()

    if st.session_state.tx_edit is not None:
        st.divider()
        edited, acted = transaction_form_view("tx_edit", st.session_state.tx_edit)
        st.session_state.tx_edit = edited if edited.is_open else None
        if acted:
            st.rerun()

elif menu == "💰 Budgets":
    st.title("💰 Budgets")

    if "budget_add" not in st.session_state:
        st.session_state.budget_add = budget_form(categories)
    st.session_state.budget_add, acted = budget_form_view("budget_add", st.session_state.budget_add)
    if acted:
        st.rerun()

    st.divider()
    rows = result["comparison"]
    if not rows:
        st.info("No budget data available. Set budgets to see comparison.")
    else:
        st.plotly_chart(budget_comparison_figure(rows), use_container_width=True)
        st.dataframe(budget_frame(rows), use_container_width=True, hide_index=True)

        for b in st.session_state.budgets:
            c1, c2 = st.columns([6, 1])
            c1.write(f"**{b.category}** — {format_money(b.amount)} / month")
            if c2.button("✏️", key=f"edit_budget_{b.id}"):
                st.session_state.budget_edit = budget_form(categories, b)
                st.rerun()

    if st.session_state.budget_edit is not None:
        st.divider()
        edited, acted = budget_form_view("budget_edit", st.session_state.budget_edit)
        st.session_state.budget_edit = edited if edited.is_open else None
        if acted:
            st.rerun()

elif menu == "💡 Insights":
    st.title("💡 Spending Insights")

    m1, m2 = st.columns(2)
    m1.metric("This month", format_money(result["current_month_total"]))
    m2.metric("Last month", format_money(result["previous_month_total"]))

    if not result["insights"]:
        st.success("**You're on track!** Your spending looks consistent and within your budgets.")
    for insight in result["insights"]:
        if insight.severity == "destructive":
            st.error(f"**{insight.title}** — {insight.message}")
        elif insight.severity == "success":
            st.success(f"**{insight.title}** — {insight.message}")
        else:
            st.warning(f"**{insight.title}** — {insight.message}")

    messages = [m for v in report["validation"] for m in v["messages"]]
    if messages:
        with st.expander("Data checks", expanded=False):
            for m in messages:
                st.write(f"- {m}")

    if st.session_state.activity:
        with st.expander("Activity", expanded=False):
            st.dataframe(pd.DataFrame(st.session_state.activity), use_container_width=True)
