"""Budget reconciliation.

Budgets are saved a whole month at a time: saving a period replaces every
stored entry for that period and leaves other periods untouched.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .models import Budget


def save_budgets(
    existing: Iterable[Budget],
    new_entries: Iterable[Budget],
    period: str,
) -> List[Budget]:
    """Replace all budgets for ``period`` with ``new_entries``.

    Args:
        existing: Currently stored budgets, any period
        new_entries: Entries for ``period``; amounts are expected to have
            been filtered to positive values by the caller
        period: ``YYYY-MM`` period being saved

    Returns:
        New list holding the other periods' budgets followed by
        ``new_entries``. If ``new_entries`` names a category twice the last
        entry wins, so each category appears at most once for ``period``.

    Example:
        >>> save_budgets([Budget('groceries', 80, '2024-06')],
        ...              [Budget('groceries', 100, '2024-06')], '2024-06')
        [Budget(category_id='groceries', amount=100, month='2024-06')]
    """
    kept = [b for b in existing if b.month != period]

    latest: Dict[str, Budget] = {}
    for entry in new_entries:
        latest.pop(entry.category_id, None)
        latest[entry.category_id] = entry

    return kept + list(latest.values())


def build_budget_entries(amounts: Mapping[str, float], period: str) -> List[Budget]:
    """Turn edited per-category amounts into budget entries for ``period``.

    Non-positive amounts mean "no budget" and are dropped.
    """
    return [
        Budget(category_id=category_id, amount=float(amount), month=period)
        for category_id, amount in amounts.items()
        if amount and float(amount) > 0
    ]


def budget_amounts_for(budgets: Iterable[Budget], period: str) -> Dict[str, float]:
    """Per-category amounts stored for ``period``, for pre-filling the editor."""
    return {b.category_id: b.amount for b in budgets if b.month == period}
