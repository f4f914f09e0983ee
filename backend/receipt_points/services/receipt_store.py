"""In-memory receipt store.

Receipts are kept in a plain dict keyed by a UUID4 string. Entries are
immutable once inserted and are never removed, so a single lock that
guards the mapping during insert and lookup is all the coordination
required. The lock is never held while parsing or scoring.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional
from uuid import uuid4

from receipt_points.core.exceptions import ReceiptNotFound
from receipt_points.models.schemas import Receipt


def _new_receipt_id() -> str:
    return str(uuid4())


class ReceiptStore:
    """Thread-safe, append-only mapping of identifiers to receipts."""

    def __init__(self, id_factory: Callable[[], str] = _new_receipt_id):
        self._id_factory = id_factory
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def add(self, receipt: Receipt) -> str:
        """Insert ``receipt`` under a fresh identifier and return it."""
        receipt_id = self._id_factory()
        with self._lock:
            # Identifiers are never reused, even if the factory repeats one.
            while receipt_id in self._receipts:
                receipt_id = self._id_factory()
            self._receipts[receipt_id] = receipt
        return receipt_id

    def find(self, receipt_id: str) -> Optional[Receipt]:
        with self._lock:
            return self._receipts.get(receipt_id)

    def get(self, receipt_id: str) -> Receipt:
        """Return the receipt stored under ``receipt_id``.

        :raises ReceiptNotFound: if the identifier was never issued.
        """
        receipt = self.find(receipt_id)
        if receipt is None:
            raise ReceiptNotFound(receipt_id)
        return receipt

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
