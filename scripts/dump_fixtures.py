#!/usr/bin/env python3
"""Write the seeded fixture state to JSON files for inspection.

Usage:
    python scripts/dump_fixtures.py --seed 42 --output local/fixtures
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chari_stub.config import FixtureConfig
from chari_stub.serialization import dataclass_to_dict, serialize_value
from chari_stub.store import FixtureStore


def save_json(data: object, filename: str, output_dir: Path) -> None:
    """Save data to JSON file."""
    filepath = output_dir / filename
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print(f"Saved {filepath}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump chari-stub fixtures")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--transactions", type=int, default=25)
    parser.add_argument("--output", type=Path, default=Path("local/fixtures"))
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)
    store = FixtureStore.seeded(
        FixtureConfig(seed=args.seed, transactions_per_customer=args.transactions)
    )

    customers = [
        dataclass_to_dict(c, exclude=("transactions",))
        for c in store.customers.values()
    ]
    save_json(customers, "customers.json", args.output)

    transactions = {
        phone: [dataclass_to_dict(tx) for tx in c.transactions]
        for phone, c in store.customers.items()
    }
    save_json(transactions, "transactions.json", args.output)

    operations = {
        phone: [dataclass_to_dict(op) for op in store.operations_of(phone, c.transactions)]
        for phone, c in store.customers.items()
    }
    save_json(operations, "operations.json", args.output)
    save_json(serialize_value(store.beneficiaries), "beneficiaries.json", args.output)

    print(f"\nSummary: {store.summary()}")


if __name__ == "__main__":
    main()
