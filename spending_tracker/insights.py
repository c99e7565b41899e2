"""Budget insights derived from budget-vs-actual rows.

At most three insights are produced, always in the same order: categories
over budget, categories well under budget, and categories with spending
but no budget.  Each carries a severity the dashboard maps to a colour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .aggregation import ComparisonRow
from .config import UNDER_BUDGET_RATIO
from .formatting import format_currency, pluralize

WARNING = "warning"
SUCCESS = "success"
INFO = "info"


@dataclass(frozen=True)
class Insight:
    severity: str
    message: str
    detail: str


def _category_count(count: int) -> str:
    return f"{count} {pluralize(count, 'category', 'categories')}"


def over_budget_rows(rows: Sequence[ComparisonRow]) -> List[ComparisonRow]:
    """Budgeted rows where spending exceeds the budget, worst overage first."""
    over = [r for r in rows if r.budget_amount > 0 and r.spent_amount > r.budget_amount]
    return sorted(over, key=lambda r: r.spent_amount - r.budget_amount, reverse=True)


def under_budget_rows(
    rows: Sequence[ComparisonRow],
    ratio: float = UNDER_BUDGET_RATIO,
) -> List[ComparisonRow]:
    """Budgeted rows with at most ``ratio`` of the budget spent, most left over first."""
    under = [r for r in rows if r.budget_amount > 0 and r.spent_amount <= r.budget_amount * ratio]
    return sorted(under, key=lambda r: r.budget_amount - r.spent_amount, reverse=True)


def unbudgeted_rows(rows: Sequence[ComparisonRow]) -> List[ComparisonRow]:
    """Rows with spending but no budget, biggest spender first."""
    unbudgeted = [r for r in rows if r.budget_amount == 0 and r.spent_amount > 0]
    return sorted(unbudgeted, key=lambda r: r.spent_amount, reverse=True)


def derive_insights(rows: Sequence[ComparisonRow]) -> List[Insight]:
    """Generate budget insights for a period's comparison rows.

    Args:
        rows: Output of :func:`spending_tracker.aggregation.budget_comparison`

    Returns:
        Up to three insights, over-budget first, then under-budget, then
        unbudgeted spending. Empty when ``rows`` is empty.
    """
    insights: List[Insight] = []

    over = over_budget_rows(rows)
    if over:
        worst = over[0]
        insights.append(Insight(
            severity=WARNING,
            message=f"You're over budget in {_category_count(len(over))}.",
            detail=(
                f"Most notably in {worst.name} by "
                f"{format_currency(worst.spent_amount - worst.budget_amount)}."
            ),
        ))

    under = under_budget_rows(rows)
    if under:
        best = under[0]
        insights.append(Insight(
            severity=SUCCESS,
            message=f"You're well under budget in {_category_count(len(under))}.",
            detail=(
                f"Most notably in {best.name} with "
                f"{format_currency(best.budget_amount - best.spent_amount)} remaining."
            ),
        ))

    unbudgeted = unbudgeted_rows(rows)
    if unbudgeted:
        top = unbudgeted[0]
        insights.append(Insight(
            severity=INFO,
            message=(
                f"You have {_category_count(len(unbudgeted))} "
                "with spending but no budget."
            ),
            detail=f"Consider setting a budget for {top.name} ({format_currency(top.spent_amount)}).",
        ))

    return insights
