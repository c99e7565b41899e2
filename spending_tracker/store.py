"""Spending store: the owned in-memory collections and their lifecycle.

The store is created once per session, loaded from a key-value backend,
and then mutated through ``add``, ``update``, ``remove`` and
``save_budgets``.  Each successful mutation rewrites the whole affected
collection to the backend.  A failed write is logged and remembered in
``save_errors`` until the same slot is written successfully; the in-memory
collection stays the source of truth in the meantime.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from . import aggregation
from .budgets import save_budgets as reconcile_budgets
from .config import BUDGETS_KEY, TRANSACTIONS_KEY
from .insights import Insight, derive_insights
from .models import Budget, Transaction
from .storage import KeyValueStore, SpendingTrackerError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreNotLoadedError(SpendingTrackerError):
    """A mutation was attempted before ``load()``."""


class DuplicateTransactionError(SpendingTrackerError, ValueError):
    """A transaction with the same id is already stored."""


def _decode_collection(
    raw: Optional[str],
    parse: Callable[[Any], T],
    key: str,
) -> List[T]:
    """Decode a JSON list slot; bad data yields an empty list and a warning."""
    if raw is None:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON list, got {type(data).__name__}")
        return [parse(item) for item in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Failed to parse saved %s, starting empty: %s", key, e)
        return []


class SpendingStore:
    """Owns the transaction and budget collections for one session."""

    def __init__(
        self,
        backend: KeyValueStore,
        transactions_key: str = TRANSACTIONS_KEY,
        budgets_key: str = BUDGETS_KEY,
    ):
        self.backend = backend
        self.transactions_key = transactions_key
        self.budgets_key = budgets_key
        self._transactions: List[Transaction] = []
        self._budgets: List[Budget] = []
        self._loaded = False
        self._lock = threading.RLock()
        self.total_spent = 0.0
        self._save_errors: Dict[str, Exception] = {}

    @property
    def save_errors(self) -> Dict[str, Exception]:
        """Slots whose latest write failed, mapped to the error."""
        return dict(self._save_errors)

    @property
    def last_error(self) -> Optional[Exception]:
        """Most recent write error for any slot that is still unsaved."""
        return next(reversed(list(self._save_errors.values())), None)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def budgets(self) -> List[Budget]:
        return list(self._budgets)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self) -> "SpendingStore":
        """Read both collections from the backend.

        Missing slots and malformed data both start as empty collections;
        the condition is logged and never raised to the caller.
        """
        with self._lock:
            self._transactions = _decode_collection(
                self._read(self.transactions_key), Transaction.from_dict, self.transactions_key
            )
            self._budgets = _decode_collection(
                self._read(self.budgets_key), Budget.from_dict, self.budgets_key
            )
            self._loaded = True
            self._recompute()
            logger.info(
                "Loaded %d transactions and %d budgets",
                len(self._transactions),
                len(self._budgets),
            )
        return self

    def save(self) -> bool:
        """Write both collections in full. Returns False if any write failed."""
        with self._lock:
            self._require_loaded()
            saved_transactions = self._persist_transactions()
            saved_budgets = self._persist_budgets()
            return saved_transactions and saved_budgets

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, transaction: Transaction) -> Transaction:
        """Append a new transaction.

        Raises:
            StoreNotLoadedError: If called before ``load()``
            DuplicateTransactionError: If the id is already stored
        """
        with self._lock:
            self._require_loaded()
            if self.get(transaction.id) is not None:
                raise DuplicateTransactionError(f"Transaction {transaction.id} already exists")
            self._transactions = self._transactions + [transaction]
            self._recompute()
            self._persist_transactions()
        return transaction

    def update(self, transaction: Transaction) -> bool:
        """Replace the stored transaction with the same id.

        Returns:
            True if a transaction was replaced. An unknown id leaves the
            collection unchanged, writes nothing, and returns False.
        """
        with self._lock:
            self._require_loaded()
            if self.get(transaction.id) is None:
                logger.debug("Update ignored, no transaction with id %s", transaction.id)
                return False
            self._transactions = [
                transaction if t.id == transaction.id else t for t in self._transactions
            ]
            self._recompute()
            self._persist_transactions()
        return True

    def remove(self, transaction_id: str) -> bool:
        """Delete a transaction by id. Unknown ids are a no-op returning False."""
        with self._lock:
            self._require_loaded()
            remaining = [t for t in self._transactions if t.id != transaction_id]
            if len(remaining) == len(self._transactions):
                logger.debug("Remove ignored, no transaction with id %s", transaction_id)
                return False
            self._transactions = remaining
            self._recompute()
            self._persist_transactions()
        return True

    def save_budgets(self, entries: Sequence[Budget], period: Optional[str] = None) -> List[Budget]:
        """Replace every budget for ``period`` (default: the current month)."""
        period = period or aggregation.current_period()
        with self._lock:
            self._require_loaded()
            self._budgets = reconcile_budgets(self._budgets, entries, period)
            self._persist_budgets()
            return self.budgets

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def summary(self) -> aggregation.SummaryStats:
        return aggregation.summary_stats(self._transactions)

    def monthly(self) -> List[aggregation.MonthlyTotal]:
        return aggregation.group_by_month(self._transactions)

    def breakdown(self) -> List[aggregation.CategorySlice]:
        return aggregation.category_breakdown(self._transactions)

    def comparison(self, period: Optional[str] = None) -> List[aggregation.ComparisonRow]:
        period = period or aggregation.current_period()
        return aggregation.budget_comparison(self._transactions, self._budgets, period)

    def insights(self, period: Optional[str] = None) -> List[Insight]:
        return derive_insights(self.comparison(period))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_loaded(self) -> None:
        if not self._loaded:
            raise StoreNotLoadedError("Call load() before changing the store")

    def _recompute(self) -> None:
        self.total_spent = aggregation.total_spent(self._transactions)

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.backend.get(key)
        except (OSError, StorageError) as e:
            logger.warning("Could not read %s, starting empty: %s", key, e)
            return None

    def _persist_transactions(self) -> bool:
        payload = json.dumps([t.to_dict() for t in self._transactions])
        return self._write(self.transactions_key, payload)

    def _persist_budgets(self) -> bool:
        payload = json.dumps([b.to_dict() for b in self._budgets])
        return self._write(self.budgets_key, payload)

    def _write(self, key: str, payload: str) -> bool:
        try:
            self.backend.set(key, payload)
        except (OSError, StorageError) as e:
            self._save_errors.pop(key, None)
            self._save_errors[key] = e
            logger.exception("Failed to save %s", key)
            return False
        self._save_errors.pop(key, None)
        return True
