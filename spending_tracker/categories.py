"""Category registry.

This module holds the static table of spending categories and resolves
category identifiers to their display metadata, falling back to the
"Other" category for anything it does not know.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import FALLBACK_CATEGORY_ID


@dataclass(frozen=True)
class Category:
    """Display metadata for a spending category."""
    id: str
    name: str
    color: str
    icon: str


CATEGORIES: Tuple[Category, ...] = (
    Category("groceries", "Groceries", "#4CAF50", "ShoppingBag"),
    Category("housing", "Housing", "#2196F3", "Home"),
    Category("dining", "Dining Out", "#FF9800", "Utensils"),
    Category("transportation", "Transportation", "#607D8B", "Car"),
    Category("travel", "Travel", "#9C27B0", "Plane"),
    Category("bills", "Bills", "#F44336", "Wallet"),
    Category("health", "Health", "#E91E63", "HeartPulse"),
    Category("clothing", "Clothing", "#8BC34A", "Shirt"),
    Category("entertainment", "Entertainment", "#673AB7", "Ticket"),
    Category("education", "Education", "#009688", "GraduationCap"),
    Category("technology", "Technology", "#3F51B5", "Smartphone"),
    Category(FALLBACK_CATEGORY_ID, "Other", "#9E9E9E", "Brush"),
)

_BY_ID: Dict[str, Category] = {category.id: category for category in CATEGORIES}
FALLBACK_CATEGORY = _BY_ID[FALLBACK_CATEGORY_ID]


def resolve(category_id: Optional[str]) -> Category:
    """Look up a category by identifier.

    Args:
        category_id: Identifier to look up (may be None or empty)

    Returns:
        The matching registry entry, or the "Other" category if not found

    Example:
        >>> resolve('groceries').name
        'Groceries'
        >>> resolve('crypto').name
        'Other'
    """
    if not category_id:
        return FALLBACK_CATEGORY
    return _BY_ID.get(category_id, FALLBACK_CATEGORY)


def color_of(category_id: Optional[str]) -> str:
    return resolve(category_id).color


def icon_of(category_id: Optional[str]) -> str:
    return resolve(category_id).icon


def normalize_category_id(category_id: Optional[str]) -> str:
    """Map unset or empty identifiers to the fallback id, leaving others untouched."""
    return category_id or FALLBACK_CATEGORY_ID


def category_ids() -> List[str]:
    """Registry identifiers in display order."""
    return [category.id for category in CATEGORIES]
