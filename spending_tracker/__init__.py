"""Top‑level package for the Spending Tracker.

The primary modules are:

* ``store`` – the session-owned transaction/budget store and its lifecycle
* ``aggregation`` and ``insights`` – pure derived views over the collections
* ``budgets`` – monthly budget reconciliation
* ``storage`` – key-value persistence backends
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run spending_tracker/dashboard.py
```

or use ``run_tracker.py`` at the project root.
"""

from .models import Budget, Transaction
from .storage import JsonFileStore, MemoryStore, StorageError, SpendingTrackerError
from .store import DuplicateTransactionError, SpendingStore, StoreNotLoadedError

__all__ = [
    "Budget",
    "Transaction",
    "JsonFileStore",
    "MemoryStore",
    "StorageError",
    "SpendingTrackerError",
    "DuplicateTransactionError",
    "SpendingStore",
    "StoreNotLoadedError",
]
