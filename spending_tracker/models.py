"""Transaction and budget records.

Both records serialize to the JSON shape stored in the key-value slots
(``createdAt`` and ``categoryId`` keep their camel-case wire names).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _checked_date(value: Any, fmt: str, field: str) -> str:
    """Return ``value`` if it is a zero-padded date string in ``fmt``."""
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string, got {type(value).__name__}")
    if datetime.strptime(value, fmt).strftime(fmt) != value:
        raise ValueError(f"{field} {value!r} is not in {fmt} form")
    return value


@dataclass(frozen=True)
class Transaction:
    """A single recorded expense."""
    id: str
    amount: float
    description: str
    date: str  # YYYY-MM-DD
    category: str
    created_at: str

    @classmethod
    def create(
        cls,
        amount: float,
        description: str,
        date: str,
        category: str,
        created_at: Optional[str] = None,
    ) -> "Transaction":
        """Build a new transaction with a fresh random id."""
        return cls(
            id=str(uuid.uuid4()),
            amount=float(amount),
            description=description,
            date=date,
            category=category,
            created_at=created_at or _utc_timestamp(),
        )

    def edited(self, **changes: Any) -> "Transaction":
        """Return a copy with ``changes`` applied; id and creation time are kept."""
        changes.pop("id", None)
        changes.pop("created_at", None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "date": self.date,
            "category": self.category,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Rebuild a transaction from its stored form.

        Raises:
            KeyError: If a required field is missing
            TypeError: If ``data`` is not a mapping
            ValueError: If the amount is not a positive number or the
                date is not a ``YYYY-MM-DD`` string
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a transaction object, got {type(data).__name__}")
        amount = float(data["amount"])
        # also rejects NaN
        if not amount > 0:
            raise ValueError(f"Transaction amount must be positive, got {amount}")
        return cls(
            id=str(data["id"]),
            amount=amount,
            description=str(data.get("description", "")),
            date=_checked_date(data["date"], "%Y-%m-%d", "date"),
            category=str(data.get("category") or ""),
            created_at=str(data.get("createdAt", "")),
        )


@dataclass(frozen=True)
class Budget:
    """Spending limit for one category in one month."""
    category_id: str
    amount: float
    month: str  # YYYY-MM

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categoryId": self.category_id,
            "amount": self.amount,
            "month": self.month,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Budget":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a budget object, got {type(data).__name__}")
        amount = float(data["amount"])
        if not amount >= 0:
            raise ValueError(f"Budget amount must not be negative, got {amount}")
        return cls(
            category_id=str(data["categoryId"]),
            amount=amount,
            month=_checked_date(data["month"], "%Y-%m", "month"),
        )
