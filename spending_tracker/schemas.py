from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .categories import category_ids
from .models import Transaction


class TransactionForm(BaseModel):
    """Input from the add/edit transaction form.

    The store assumes validated input, so every transaction goes through
    this model before reaching it.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=3, max_length=200)
    date: dt.date
    category: str = Field(..., min_length=1)

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in category_ids():
            raise ValueError(f"Unknown category: {value}")
        return value

    def to_transaction(self, existing: Optional[Transaction] = None) -> Transaction:
        """Build a new transaction, or an edited copy of ``existing``."""
        fields = {
            "amount": self.amount,
            "description": self.description,
            "date": self.date.isoformat(),
            "category": self.category,
        }
        if existing is not None:
            return existing.edited(**fields)
        return Transaction.create(**fields)
