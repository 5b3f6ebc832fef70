#!/usr/bin/env python3
"""
Demo seed script — posts sample transactions to a running ledger API.

!! NOT FOR PRODUCTION !!
Intended for local demos and frontend development only.

Usage:
    # With the API server running on localhost:8080:
    python demo/seed.py

    # Delete the local SQLite database (restart the server to recreate it):
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000
"""

import argparse
import asyncio
import os
import random
import uuid
from datetime import datetime, timedelta, timezone

import httpx

BASE_URL = "http://localhost:8080"

WALLETS = ["wallet-alice", "wallet-bob", "wallet-carol", "wallet-dave"]

# (trx_type, trx_subtype, name, min cents, max cents)
TEMPLATES = [
    ("deposit", "cash", "Cash deposit", 50_00, 500_00),
    ("deposit", "salary", "Paycheck", 1_500_00, 3_000_00),
    ("withdrawal", "atm", "ATM withdrawal", 20_00, 200_00),
    ("transfer", "p2p", "Peer payment", 5_00, 150_00),
    ("transfer", "internal", "Savings top-up", 100_00, 400_00),
]


def log(msg: str) -> None:
    print(f"  {msg}")


def cents_to_dollars(cents: int) -> str:
    return f"${cents / 100:,.2f}"


def build_transaction(when: datetime) -> dict:
    """Random transaction; wallets follow the type (no source on deposits, no target on withdrawals)."""
    trx_type, trx_subtype, name, low, high = random.choice(TEMPLATES)
    source, target = random.sample(WALLETS, 2)
    fee = random.choice([None, 0, 25, 50]) if trx_type == "transfer" else None
    return {
        "id": str(uuid.uuid4()),
        "datetime": when.isoformat(timespec="seconds").replace("+00:00", "Z"),
        "trx_type": trx_type,
        "trx_subtype": trx_subtype,
        "wallet_from": None if trx_type == "deposit" else source,
        "wallet_to": None if trx_type == "withdrawal" else target,
        "name": name,
        "amount": random.randint(low, high),
        "fee": fee,
        "description": f"Seeded {trx_subtype} {trx_type}",
    }


async def post_transaction(client: httpx.AsyncClient, payload: dict) -> dict:
    response = await client.post("/transactions", json=payload)
    if response.status_code != 200:
        log(f"! {payload['id']} rejected ({response.status_code}): {response.text}")
        return {}
    return response.json()


async def seed(base_url: str, count: int) -> None:
    print(f"\nSeeding {count} transactions into {base_url} ...")
    now = datetime.now(timezone.utc)

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        stored = 0
        for i in range(count):
            when = now - timedelta(days=count - i, hours=random.randint(0, 23))
            result = await post_transaction(client, build_transaction(when))
            if result:
                stored += 1
                log(f"{result['trx_type']:<10s} {result['name']:<16s} {cents_to_dollars(result['amount'])}")

        listing = await client.get("/transactions")
        listing.raise_for_status()

    print(f"\n  Stored {stored}/{count}; ledger now holds {len(listing.json())} transactions.\n")


def reset_database() -> None:
    """Delete the SQLite database file so the server recreates it on restart."""
    db_path = os.path.join(os.path.dirname(__file__), "..", "data", "ledger.db")
    db_path = os.path.normpath(db_path)

    if os.path.exists(db_path):
        os.remove(db_path)
        print(f"\n  Deleted {db_path}")
        print("  Restart the server to recreate an empty table.\n")
    else:
        print(f"\n  No database found at {db_path}\n")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Demo seed script — NOT FOR PRODUCTION",
        epilog="Posts sample transactions to a running ledger API.",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"Base URL of the running API (default: {BASE_URL})",
    )
    parser.add_argument(
        "--count", type=int, default=20,
        help="Number of transactions to create (default: 20)",
    )
    parser.add_argument(
        "--reset", action="store_true",
        help="Delete the database file and exit (restart server to recreate)",
    )
    args = parser.parse_args()

    if args.reset:
        reset_database()
        return

    await seed(args.base_url, args.count)


if __name__ == "__main__":
    asyncio.run(main())
