"""Receipt validation and ingestion.

Turns a submitted :class:`ReceiptPayload` into a domain :class:`Receipt`.
Fields are checked in a fixed order (date, time, total, item count,
then each item price in submission order) and the first failure is
raised on its own; nothing is stored unless every check passes.
"""

from __future__ import annotations

import logging

from receipt_points.core.exceptions import (
    EmptyItems,
    InvalidDate,
    InvalidItemPrice,
    InvalidTime,
    InvalidTotal,
)
from receipt_points.models.schemas import Item, Receipt, ReceiptPayload
from receipt_points.services.receipt_store import ReceiptStore
from receipt_points.utils.helpers import parse_amount, parse_date, parse_time

logger = logging.getLogger(__name__)


def parse_receipt(payload: ReceiptPayload) -> Receipt:
    """Validate ``payload`` and return the parsed receipt.

    :raises InvalidDate: ``purchaseDate`` is not ``YYYY-MM-DD``.
    :raises InvalidTime: ``purchaseTime`` is not 24-hour ``HH:MM``.
    :raises InvalidTotal: ``total`` is not a non-negative decimal.
    :raises EmptyItems: ``items`` is empty.
    :raises InvalidItemPrice: an item ``price`` is not a non-negative decimal.
    """
    purchase_date = parse_date(payload.purchase_date)
    if purchase_date is None:
        raise InvalidDate()

    purchase_time = parse_time(payload.purchase_time)
    if purchase_time is None:
        raise InvalidTime()

    total = parse_amount(payload.total)
    if total is None:
        raise InvalidTotal()

    if not payload.items:
        raise EmptyItems()

    items = []
    for index, item in enumerate(payload.items):
        price = parse_amount(item.price)
        if price is None:
            raise InvalidItemPrice(index)
        items.append(Item(short_description=item.short_description, price=price))

    return Receipt(
        retailer=payload.retailer,
        purchase_date=purchase_date,
        purchase_time=purchase_time,
        items=tuple(items),
        total=total,
    )


def ingest_receipt(payload: ReceiptPayload, store: ReceiptStore) -> str:
    """Validate ``payload``, store it and return the new identifier."""
    receipt = parse_receipt(payload)
    receipt_id = store.add(receipt)
    logger.info("[receipts] stored id=%s items=%d", receipt_id, len(receipt.items))
    return receipt_id
