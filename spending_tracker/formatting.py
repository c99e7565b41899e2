"""Formatting utilities for currency, period and date display."""

from __future__ import annotations

from datetime import datetime
from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{amount:,.2f}"
    return f"${formatted}" if include_sign else formatted


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX delimiter, so the sign is
    escaped.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_period(period: str) -> str:
    """Long month label for a ``YYYY-MM`` period.

    Example:
        >>> format_period('2024-06')
        'June 2024'
    """
    return datetime.strptime(period, "%Y-%m").strftime("%B %Y")


def format_date(date_text: str) -> str:
    """Display form of a ``YYYY-MM-DD`` date.

    Example:
        >>> format_date('2024-06-01')
        'Jun 1, 2024'
    """
    parsed = datetime.strptime(date_text, "%Y-%m-%d")
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural
