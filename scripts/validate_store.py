#!/usr/bin/env python3
"""Lightweight validator for the persisted transaction and budget slots."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from spending_tracker import config
from spending_tracker.models import Budget, Transaction
from spending_tracker.storage import JsonFileStore


def validate_slot(raw: Optional[str], parse: Callable[[dict], object]) -> List[str]:
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return [f"not valid JSON: {e}"]
    if not isinstance(data, list):
        return [f"expected a list, got {type(data).__name__}"]

    errors = []
    seen_ids = set()
    for index, item in enumerate(data):
        try:
            record = parse(item)
        except (KeyError, TypeError, ValueError) as e:
            errors.append(f"entry {index}: {e!r}")
            continue
        record_id = getattr(record, "id", None)
        if record_id is not None:
            if record_id in seen_ids:
                errors.append(f"entry {index}: duplicate id {record_id}")
            seen_ids.add(record_id)
    return errors


def main(directory: Optional[Path] = None) -> int:
    store = JsonFileStore(directory or config.STORE_DIR)
    slots = [
        (config.TRANSACTIONS_KEY, Transaction.from_dict),
        (config.BUDGETS_KEY, Budget.from_dict),
    ]

    issues = []
    for key, parse in slots:
        for message in validate_slot(store.get(key), parse):
            issues.append((key, message))

    if issues:
        print("Store validation failed:")
        for key, message in issues:
            print(f"  - {key}: {message}")
        return 1

    print("All slots validated successfully.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Validate the persisted spending tracker slots.")
    parser.add_argument("--dir", type=Path, default=None, help="Store directory (defaults to the configured data dir)")
    args = parser.parse_args()
    raise SystemExit(main(args.dir))
