"""Streamlit dashboard for the spending tracker.

The dashboard is the only caller of the store.  It keeps one loaded
:class:`SpendingStore` in ``st.session_state`` and recomputes every chart
and statistic from the store on each rerun.

Run it with::

    streamlit run spending_tracker/dashboard.py
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict, List, Mapping, Optional, Tuple

import pandas as pd
import streamlit as st
from pydantic import ValidationError

try:
    from . import config
    from .aggregation import current_period
    from .budgets import budget_amounts_for, build_budget_entries
    from .categories import CATEGORIES, resolve
    from .formatting import escape_dollar_for_markdown, format_currency, format_date, format_period
    from .models import Transaction
    from .schemas import TransactionForm
    from .storage import JsonFileStore
    from .store import SpendingStore
    from . import visualization as viz
except ImportError:
    # Fallback for `streamlit run spending_tracker/dashboard.py`
    import sys
    from pathlib import Path as _Path
    parent_dir = _Path(__file__).resolve().parents[1]
    if str(parent_dir) not in sys.path:
        sys.path.insert(0, str(parent_dir))
    from spending_tracker import config
    from spending_tracker.aggregation import current_period
    from spending_tracker.budgets import budget_amounts_for, build_budget_entries
    from spending_tracker.categories import CATEGORIES, resolve
    from spending_tracker.formatting import escape_dollar_for_markdown, format_currency, format_date, format_period
    from spending_tracker.models import Transaction
    from spending_tracker.schemas import TransactionForm
    from spending_tracker.storage import JsonFileStore
    from spending_tracker.store import SpendingStore
    from spending_tracker import visualization as viz

STORE_STATE_KEY = "spending_store"


def _default_store() -> SpendingStore:
    return SpendingStore(JsonFileStore())


def get_store(factory: Callable[[], SpendingStore] = _default_store) -> SpendingStore:
    """Return the session's store, creating and loading it on first use."""
    store = st.session_state.get(STORE_STATE_KEY)
    if store is None:
        store = factory().load()
        st.session_state[STORE_STATE_KEY] = store
    return store


def _validation_messages(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "form"
        messages.append(f"{field}: {item.get('msg', 'invalid value')}")
    return messages


def submit_transaction(
    store: SpendingStore,
    values: Mapping[str, object],
    existing: Optional[Transaction] = None,
) -> Tuple[Optional[Transaction], List[str]]:
    """Validate form values and add (or update) the transaction.

    Returns:
        The stored transaction and an empty list, or None and the
        validation messages to show next to the form.
    """
    try:
        form = TransactionForm(**values)
    except ValidationError as e:
        return None, _validation_messages(e)

    transaction = form.to_transaction(existing)
    if existing is None:
        store.add(transaction)
    else:
        store.update(transaction)
    return transaction, []


def save_budget_amounts(
    store: SpendingStore,
    amounts: Mapping[str, float],
    period: Optional[str] = None,
) -> None:
    """Save the budget editor's amounts as the budgets for ``period``."""
    period = period or current_period()
    store.save_budgets(build_budget_entries(amounts, period), period)


def transactions_frame(transactions: List[Transaction]) -> pd.DataFrame:
    """Newest-first table of transactions for display."""
    rows = [
        {
            "Date": format_date(t.date),
            "Description": t.description,
            "Category": resolve(t.category).name,
            "Amount": t.amount,
            "_sort": t.date,
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=["Date", "Description", "Category", "Amount"])
    df = pd.DataFrame(rows).sort_values("_sort", ascending=False, kind="stable")
    return df.drop(columns="_sort").reset_index(drop=True)


def save_error_message(store: SpendingStore) -> Optional[str]:
    """Message for slots that could not be written, or None when all are saved."""
    if not store.save_errors:
        return None
    slots = ", ".join(store.save_errors)
    return f"Changes are kept for this session but could not be saved ({slots}): {store.last_error}"


def transaction_options(transactions: List[Transaction]) -> Dict[str, str]:
    """Select-box labels keyed by transaction id, newest first."""
    return {
        t.id: f"{format_date(t.date)} · {t.description} · {format_currency(t.amount)}"
        for t in sorted(transactions, key=lambda t: t.date, reverse=True)
    }


def render_header(store: SpendingStore) -> None:
    col1, col2 = st.columns([3, 1])
    with col1:
        st.title("💸 Spending Tracker")
        st.markdown("Track your expenses and stay within your monthly budgets")
    with col2:
        st.metric(label="Total Spent", value=format_currency(store.total_spent))


def render_transaction_form(store: SpendingStore) -> None:
    st.subheader("Add Transaction")
    category_ids = [c.id for c in CATEGORIES]
    with st.form("add_transaction", clear_on_submit=True):
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        description = st.text_area("Description")
        when = st.date_input("Date", value=date.today())
        category = st.selectbox(
            "Category",
            category_ids,
            index=category_ids.index(config.FALLBACK_CATEGORY_ID),
            format_func=lambda cid: resolve(cid).name,
        )
        submitted = st.form_submit_button("Add Transaction")

    if submitted:
        transaction, errors = submit_transaction(
            store,
            {"amount": amount, "description": description, "date": when, "category": category},
        )
        if errors:
            for message in errors:
                st.error(message)
        else:
            st.success(f"Added {transaction.description} ({format_currency(transaction.amount)})")


def render_overview(store: SpendingStore) -> None:
    stats = store.summary()
    count = len(store.transactions)
    cols = st.columns(4)
    cols[0].metric("Total Spent", format_currency(stats.total_spent), f"{count} transaction{'s' if count != 1 else ''}", delta_color="off")
    cols[1].metric("Average", format_currency(stats.average_transaction), "Per transaction", delta_color="off")
    cols[2].metric("Largest", format_currency(stats.largest_transaction), "Highest spending", delta_color="off")
    cols[3].metric("Top Category", stats.top_category.name, format_currency(stats.top_category.amount), delta_color="off")

    if stats.recent_transactions:
        st.markdown("**Recent Transactions**")
        for t in stats.recent_transactions:
            st.markdown(
                f"• **{t.description}** · {resolve(t.category).name} · "
                f"{format_date(t.date)} · {escape_dollar_for_markdown(t.amount)}"
            )


def render_charts(store: SpendingStore) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(viz.create_monthly_spending_chart(store.monthly()), use_container_width=True)
    with col2:
        st.plotly_chart(viz.create_category_pie_chart(store.breakdown()), use_container_width=True)
    render_budget_insights(store)


def render_budget_insights(store: SpendingStore) -> None:
    st.subheader("Budget vs. Actual")
    rows = store.comparison()
    if not rows:
        st.info("No budget data. Set category budgets to see your spending insights.")
        return
    st.plotly_chart(viz.create_budget_comparison_chart(rows), use_container_width=True)

    insights = store.insights()
    if insights:
        st.markdown("**Spending Insights**")
    for insight in insights:
        show = getattr(st, insight.severity, st.info)
        show(f"**{insight.message}** {insight.detail}".replace("$", "\\$"))


def render_budget_manager(store: SpendingStore) -> None:
    period = current_period()
    st.subheader("Monthly Budgets")
    st.caption(f"Set and track your spending limits for {format_period(period)}")

    saved = budget_amounts_for(store.budgets, period)
    spending = {row.category_id: row.spent_amount for row in store.comparison(period)}
    amounts: Dict[str, float] = {}
    with st.form("budgets"):
        for category in CATEGORIES:
            col_a, col_b = st.columns([2, 3])
            with col_a:
                amounts[category.id] = st.number_input(
                    category.name,
                    min_value=0.0,
                    step=10.0,
                    value=float(saved.get(category.id, 0.0)),
                    key=f"budget_{category.id}",
                )
            with col_b:
                spent = spending.get(category.id, 0.0)
                budget = amounts[category.id]
                if budget > 0:
                    st.progress(min(int(round(spent / budget * 100)), 100))
                st.caption(f"Spent {format_currency(spent)}")
        submitted = st.form_submit_button("Save Budgets")

    if submitted:
        save_budget_amounts(store, amounts, period)
        st.success("Your category budgets have been updated")


def render_transaction_list(store: SpendingStore) -> None:
    st.subheader("Transactions")
    transactions = store.transactions
    if not transactions:
        st.info("No transactions yet. Add your first expense to get started.")
        return

    st.dataframe(
        transactions_frame(transactions).style.format({"Amount": "${:,.2f}"}),
        use_container_width=True,
    )

    labels = transaction_options(transactions)
    choice = st.selectbox("Select a transaction", list(labels), format_func=labels.get)
    selected = store.get(choice)
    category_ids = [c.id for c in CATEGORIES]

    with st.expander("✏️ Edit transaction"):
        with st.form(f"edit_{selected.id}"):
            amount = st.number_input("Amount", min_value=0.0, step=0.01, value=float(selected.amount))
            description = st.text_area("Description", value=selected.description)
            when = st.date_input("Date", value=date.fromisoformat(selected.date))
            category = st.selectbox(
                "Category",
                category_ids,
                index=category_ids.index(resolve(selected.category).id),
                format_func=lambda cid: resolve(cid).name,
            )
            saved = st.form_submit_button("Save Changes")
        if saved:
            _, errors = submit_transaction(
                store,
                {"amount": amount, "description": description, "date": when, "category": category},
                existing=selected,
            )
            for message in errors:
                st.error(message)
            if not errors:
                st.rerun()

    if st.button("🗑️ Delete transaction", key=f"delete_{selected.id}"):
        store.remove(selected.id)
        st.rerun()


def main() -> None:
    """Main entry point for the spending tracker dashboard."""
    st.set_page_config(page_title="Spending Tracker", page_icon="💸", layout="wide")
    config.configure_logging()
    store = get_store()
    # filled last so it reflects writes made during this run
    status = st.empty()

    render_header(store)
    form_col, main_col = st.columns([1, 2])
    with form_col:
        render_transaction_form(store)

    with main_col:
        if not store.transactions:
            render_transaction_list(store)
        else:
            render_overview(store)
            charts_tab, budget_tab, transactions_tab = st.tabs(["📊 Charts", "📋 Budget", "🧾 Transactions"])
            with charts_tab:
                render_charts(store)
            with budget_tab:
                render_budget_manager(store)
            with transactions_tab:
                render_transaction_list(store)

    message = save_error_message(store)
    if message:
        status.error(message)


if __name__ == "__main__":
    main()
