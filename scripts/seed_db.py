"""
Seed script for the Safety Signal Engine store.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured store: python scripts/seed_db.py --apply
  - Use another seed file: python scripts/seed_db.py --seed ./fixtures/demo.json --apply

Behavior:
  - Loads `db_seed.json` from the current directory (or --seed).
  - Seed format: {"<collection>": [ {<fields>}, ... ], ...}
  - Inserts each record through the DataStore, so store defaults (initial
    status, created_at) are applied exactly as for live writes.

NOTE: Writing to real Firestore needs FIREBASE_CREDENTIALS_PATH in `.env`.
"""

import argparse
import json
import os
import sys
from typing import Dict, List

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.services.store import DataStore, StoreError, get_store  # noqa: E402


SEEDABLE_COLLECTIONS = {"alerts", "safety_zones", "escalation_requests"}


def load_seed(path: str) -> Dict[str, List[dict]]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_to_store(store: DataStore, seed: Dict[str, List[dict]], apply: bool = False) -> int:
    written = 0
    for collection, records in seed.items():
        if collection not in SEEDABLE_COLLECTIONS:
            print(f"Skipping unknown collection: {collection}")
            continue
        for record in records:
            print(f"Preparing: {collection} {record.get('type') or record.get('label') or ''}".rstrip())
            if not apply:
                continue
            try:
                row = store.insert(collection, record)
                written += 1
                print(f"Wrote: {collection}/{row['id']}")
            except StoreError as e:
                print(f"Failed to write {collection}: {e}")
    return written


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the store instead of dry-run")
    parser.add_argument("--seed", default=os.path.join(os.getcwd(), "db_seed.json"), help="Seed JSON path")
    args = parser.parse_args()

    if not os.path.exists(args.seed):
        print(f"Seed file not found: {args.seed}")
        return

    seed = load_seed(args.seed)
    store = get_store() if args.apply else None

    written = write_to_store(store, seed, apply=args.apply)

    if args.apply:
        print(f"Seeding completed ({written} record(s)).")
    else:
        print("Dry run complete. Re-run with --apply to write to the store.")


if __name__ == "__main__":
    main()
