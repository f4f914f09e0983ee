"""Load test: concurrent receipt submission and points lookup.

Submits batches of synthetic receipts from a thread pool, then looks
every returned id up again and compares the served points with a local
computation. Any mismatch, duplicate id or non-200 response fails the
run.

Safeguards:
  - Refuses to target a non-local host unless ALLOW_REMOTE_LOADTEST=1.

Usage:
  python scripts/loadtest_receipts.py [base_url] [receipts] [workers]

Example:
  python scripts/loadtest_receipts.py http://localhost:8080 2000 16
"""
from __future__ import annotations

import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from random import Random
from typing import Any, Dict, List
from urllib.parse import urlparse

import httpx

from receipt_points.models.schemas import ReceiptPayload
from receipt_points.services.points_calculator import calculate_points
from receipt_points.services.receipt_parser import parse_receipt

DEFAULT_BASE_URL = "http://localhost:8080"
DESCRIPTIONS = [
    "Mountain Dew 12PK",
    "Emils Cheese Pizza",
    "Knorr Creamy Chicken",
    "Doritos Nacho Cheese",
    "   Klarbrunn 12-PK 12 FL OZ  ",
    "Gatorade",
]
RETAILERS = ["Target", "M&M Corner Market", "Walgreens", "Café 7"]


def guard(base_url: str) -> None:
    host = urlparse(base_url).hostname or ""
    if host not in ("localhost", "127.0.0.1", "::1", "testserver") and os.environ.get("ALLOW_REMOTE_LOADTEST") != "1":
        print(f"Refusing to load test {host!r}. Set ALLOW_REMOTE_LOADTEST=1 to proceed.", file=sys.stderr)
        sys.exit(2)


def build_receipt(rng: Random) -> Dict[str, Any]:
    items = []
    for _ in range(rng.randint(1, 6)):
        cents = rng.randint(0, 5000)
        items.append({"shortDescription": rng.choice(DESCRIPTIONS), "price": f"{Decimal(cents) / 100:.2f}"})
    total = sum(Decimal(i["price"]) for i in items)
    return {
        "retailer": rng.choice(RETAILERS),
        "purchaseDate": f"2022-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
        "purchaseTime": f"{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}",
        "items": items,
        "total": f"{total:.2f}",
    }


def expected_points(body: Dict[str, Any]) -> int:
    return calculate_points(parse_receipt(ReceiptPayload.model_validate(body)))


def run_load(client: httpx.Client, receipts: int, workers: int, seed: int = 0) -> Dict[str, Any]:
    """Submit ``receipts`` receipts with ``workers`` threads and verify them.

    ``client`` may be a plain :class:`httpx.Client` bound to a server or a
    FastAPI ``TestClient``.
    """
    rng = Random(seed)
    bodies = [build_receipt(rng) for _ in range(receipts)]
    failures: List[str] = []

    def submit(body: Dict[str, Any]) -> str | None:
        resp = client.post("/receipts/process", json=body)
        if resp.status_code != 200:
            failures.append(f"process -> {resp.status_code} {resp.text}")
            return None
        return resp.json()["id"]

    def check(pair) -> None:
        receipt_id, body = pair
        resp = client.get(f"/receipts/{receipt_id}/points")
        if resp.status_code != 200:
            failures.append(f"points {receipt_id} -> {resp.status_code}")
        elif resp.json()["points"] != expected_points(body):
            failures.append(f"points {receipt_id} mismatch: {resp.json()['points']}")

    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        ids = list(pool.map(submit, bodies))
        issued = [(rid, body) for rid, body in zip(ids, bodies) if rid is not None]
        list(pool.map(check, issued))
    elapsed = time.perf_counter() - started

    unique_ids = {rid for rid, _ in issued}
    if len(unique_ids) != len(issued):
        failures.append(f"duplicate ids: {len(issued) - len(unique_ids)}")
    return {
        "receipts": receipts,
        "stored": len(issued),
        "unique_ids": len(unique_ids),
        "failures": failures,
        "elapsed_s": elapsed,
    }


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL
    receipts = int(sys.argv[2]) if len(sys.argv) > 2 else 500
    workers = int(sys.argv[3]) if len(sys.argv) > 3 else 8
    guard(base_url)
    with httpx.Client(base_url=base_url, timeout=10) as client:
        summary = run_load(client, receipts, workers)
    print(
        f"Load test summary base_url={base_url} receipts={summary['receipts']} "
        f"stored={summary['stored']} unique_ids={summary['unique_ids']} "
        f"elapsed_s={summary['elapsed_s']:.2f}"
    )
    for failure in summary["failures"][:20]:
        print(f"  FAIL {failure}", file=sys.stderr)
    return 1 if summary["failures"] else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
