"""Plotly visualisation helpers for the spending tracker.

Each function takes one of the derived views from
:mod:`spending_tracker.aggregation` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty views produce an empty figure titled
"No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .aggregation import CategorySlice, ComparisonRow, MonthlyTotal

OVER_BUDGET_COLOR = "#ef4444"
BUDGET_COLOR = "#8884d8"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_monthly_spending_chart(monthly: Sequence[MonthlyTotal], title: str | None = None) -> go.Figure:
    """Bar chart of total spending per month.

    Parameters
    ----------
    monthly : sequence of MonthlyTotal
        Output of :func:`group_by_month`, already in calendar order.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one bar per month.
    """
    if not monthly:
        return _empty_figure()
    df = pd.DataFrame({
        "Month": [m.label for m in monthly],
        "Amount": [m.amount for m in monthly],
    })
    fig = px.bar(df, x="Month", y="Amount")
    fig.update_layout(
        title=title or "Monthly Expenses",
        xaxis_title="Month",
        yaxis_title="Amount",
        yaxis_tickprefix="$",
    )
    # keep the given order rather than letting plotly sort the labels
    fig.update_xaxes(categoryorder="array", categoryarray=df["Month"].tolist())
    return fig


def create_category_pie_chart(slices: Sequence[CategorySlice], title: str | None = None) -> go.Figure:
    """Pie chart of spending by category, coloured with each category's colour."""
    if not slices:
        return _empty_figure()
    df = pd.DataFrame({
        "Category": [s.name for s in slices],
        "Amount": [s.amount for s in slices],
    })
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        color="Category",
        color_discrete_map={s.name: s.color for s in slices},
    )
    fig.update_layout(title=title or "Spending by Category")
    return fig


def create_budget_comparison_chart(rows: Sequence[ComparisonRow], title: str | None = None) -> go.Figure:
    """Grouped bars of budget vs spent per category.

    Spent bars use the category colour, or red when the category is over
    budget.
    """
    if not rows:
        return _empty_figure()
    names = [r.name for r in rows]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Budget",
        x=names,
        y=[r.budget_amount for r in rows],
        marker_color=BUDGET_COLOR,
        opacity=0.4,
    ))
    fig.add_trace(go.Bar(
        name="Spent",
        x=names,
        y=[r.spent_amount for r in rows],
        marker_color=[OVER_BUDGET_COLOR if r.is_over_budget else r.color for r in rows],
    ))
    fig.update_layout(
        title=title or "Budget vs. Actual",
        barmode="group",
        yaxis_tickprefix="$",
    )
    return fig
