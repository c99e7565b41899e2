"""Spending aggregations over transaction and budget lists.

Every function here is pure: it takes the raw collections, returns a fresh
derived view, and keeps no state between calls.  The dashboard recomputes
all views from scratch on every rerun.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .categories import CATEGORIES, normalize_category_id, resolve
from .config import FALLBACK_CATEGORY_ID, RECENT_TRANSACTION_LIMIT
from .models import Budget, Transaction


@dataclass(frozen=True)
class MonthlyTotal:
    period: str  # YYYY-MM
    label: str
    amount: float


@dataclass(frozen=True)
class TopCategory:
    id: str
    name: str
    color: str
    amount: float


@dataclass(frozen=True)
class SummaryStats:
    total_spent: float
    average_transaction: float
    largest_transaction: float
    top_category: TopCategory
    recent_transactions: List[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class ComparisonRow:
    """Budgeted vs spent amounts for one category in one period."""
    category_id: str
    name: str
    color: str
    budget_amount: float
    spent_amount: float

    @property
    def remaining(self) -> float:
        return max(self.budget_amount - self.spent_amount, 0.0)

    @property
    def is_over_budget(self) -> bool:
        return self.spent_amount > self.budget_amount

    @property
    def percent_used(self) -> int:
        """Share of the budget spent, as a whole percentage capped at 100."""
        if self.budget_amount <= 0:
            return 0
        return min(round(self.spent_amount / self.budget_amount * 100), 100)


@dataclass(frozen=True)
class CategorySlice:
    category_id: str
    name: str
    color: str
    amount: float


def period_of(date_text: str) -> str:
    """Return the ``YYYY-MM`` period a ``YYYY-MM-DD`` date falls in."""
    return date_text[:7]


def current_period(today: Optional[date] = None) -> str:
    today = today or date.today()
    return today.strftime("%Y-%m")


def total_spent(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions), 0.0)


def sum_by_category(
    transactions: Iterable[Transaction],
    period: Optional[str] = None,
) -> Dict[str, float]:
    """Sum transaction amounts per category.

    Args:
        transactions: Transactions to aggregate
        period: Optional ``YYYY-MM`` period; when given only transactions
            dated inside it contribute

    Returns:
        Dictionary mapping category ids to summed amounts, in the order the
        categories were first encountered. Transactions without a category
        are counted under the fallback category.

    Example:
        >>> sum_by_category([groceries_50, groceries_150, dining_20])
        {'groceries': 200.0, 'dining': 20.0}
    """
    totals: Dict[str, float] = {}
    for transaction in transactions:
        if period is not None and period_of(transaction.date) != period:
            continue
        category_id = normalize_category_id(transaction.category)
        totals[category_id] = totals.get(category_id, 0.0) + transaction.amount
    return totals


def group_by_month(transactions: Sequence[Transaction]) -> List[MonthlyTotal]:
    """Total spending per calendar month, oldest month first.

    Months are keyed by a pandas monthly ``Period`` and sorted on it, so the
    output order never depends on the order transactions were recorded.
    """
    if not transactions:
        return []

    frame = pd.DataFrame(
        {
            "Date": [t.date for t in transactions],
            "Amount": [t.amount for t in transactions],
        }
    )
    frame["Month"] = pd.to_datetime(frame["Date"], format="%Y-%m-%d").dt.to_period("M")
    monthly = frame.groupby("Month", sort=True)["Amount"].sum().sort_index()

    return [
        MonthlyTotal(
            period=str(month),
            label=month.strftime("%b %Y"),
            amount=float(amount),
        )
        for month, amount in monthly.items()
    ]


def summary_stats(
    transactions: Sequence[Transaction],
    recent_limit: int = RECENT_TRANSACTION_LIMIT,
) -> SummaryStats:
    """Headline numbers for the dashboard.

    On empty input every number is zero, the top category is the fallback
    category with a zero amount, and there are no recent transactions.
    The top category is the first category whose accumulated total is
    strictly greater than every total seen before it, so ties go to the
    category encountered first.  An unknown top category id is reported as
    the fallback category, id included.
    """
    fallback = resolve(FALLBACK_CATEGORY_ID)
    if not transactions:
        return SummaryStats(
            total_spent=0.0,
            average_transaction=0.0,
            largest_transaction=0.0,
            top_category=TopCategory(fallback.id, fallback.name, fallback.color, 0.0),
            recent_transactions=[],
        )

    total = total_spent(transactions)
    average = total / len(transactions)
    largest = max(t.amount for t in transactions)

    top_id = FALLBACK_CATEGORY_ID
    top_amount = 0.0
    for category_id, amount in sum_by_category(transactions).items():
        if amount > top_amount:
            top_id = category_id
            top_amount = amount
    top = resolve(top_id)

    # sorted() is stable, so same-day transactions keep their recorded order
    recent = sorted(transactions, key=lambda t: t.date, reverse=True)[: max(0, recent_limit)]

    return SummaryStats(
        total_spent=total,
        average_transaction=average,
        largest_transaction=largest,
        top_category=TopCategory(top.id, top.name, top.color, top_amount),
        recent_transactions=recent,
    )


def budget_comparison(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    period: str,
) -> List[ComparisonRow]:
    """Budget vs actual rows for every registry category in ``period``.

    Rows where both the budget and the spending are zero are left out.
    """
    spending = sum_by_category(transactions, period)
    budget_by_category = {b.category_id: b.amount for b in budgets if b.month == period}

    rows: List[ComparisonRow] = []
    for category in CATEGORIES:
        budget_amount = budget_by_category.get(category.id, 0.0)
        spent = spending.get(category.id, 0.0)
        if budget_amount > 0 or spent > 0:
            rows.append(
                ComparisonRow(
                    category_id=category.id,
                    name=category.name,
                    color=category.color,
                    budget_amount=budget_amount,
                    spent_amount=spent,
                )
            )
    return rows


def category_breakdown(transactions: Iterable[Transaction]) -> List[CategorySlice]:
    """Per-category slices across all transactions, for the pie chart."""
    slices = []
    for category_id, amount in sum_by_category(transactions).items():
        category = resolve(category_id)
        slices.append(CategorySlice(category_id, category.name, category.color, amount))
    return slices
