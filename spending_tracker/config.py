"""Configuration management for the spending tracker.

This module centralizes all configuration values including paths,
storage keys, tunables, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# Base project root - assumes this file is in spending_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("SPENDING_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))
STORE_DIR = DATA_DIR / "store"

# Key-value slots holding the serialized collections
TRANSACTIONS_KEY = "spending-tracker-transactions"
BUDGETS_KEY = "spending-tracker-budgets"

# Analytics tunables
FALLBACK_CATEGORY_ID = "other"
RECENT_TRANSACTION_LIMIT = 4
UNDER_BUDGET_RATIO = 0.5

LOG_LEVEL = os.getenv("SPENDING_TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, STORE_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the dashboard process."""
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)
