"""API routes for receipt submission and points retrieval.

Handlers are plain functions, so Starlette runs each request in its
worker threadpool. The only shared state they touch is the injected
:class:`ReceiptStore`.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from receipt_points.api.dependencies import get_receipt_store
from receipt_points.models.schemas import (
    ErrorResponse,
    ReceiptPayload,
    ReceiptPointsResponse,
    ReceiptProcessResponse,
)
from receipt_points.services.points_calculator import score_breakdown
from receipt_points.services.receipt_parser import ingest_receipt
from receipt_points.services.receipt_store import ReceiptStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ReceiptProcessResponse,
    responses={400: {"model": ErrorResponse}},
)
def process_receipt(
    payload: ReceiptPayload,
    store: ReceiptStore = Depends(get_receipt_store),
):
    """Validate and store a receipt, returning its new identifier."""
    receipt_id = ingest_receipt(payload, store)
    return ReceiptProcessResponse(id=receipt_id)


@router.get(
    "/{receipt_id}/points",
    response_model=ReceiptPointsResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_receipt_points(
    receipt_id: str,
    store: ReceiptStore = Depends(get_receipt_store),
):
    """Compute the points awarded to a stored receipt."""
    receipt = store.get(receipt_id)
    breakdown = score_breakdown(receipt)
    points = sum(breakdown.values())
    logger.debug(
        "[receipts] points id=%s total=%d breakdown=%s",
        receipt_id,
        points,
        {rule.value: value for rule, value in breakdown.items()},
    )
    return ReceiptPointsResponse(points=points)
