"""Pydantic schemas for request, response and domain models.

The wire schemas (``ReceiptPayload`` and friends) mirror the JSON
accepted and returned by the API. Every scalar on the wire is a string,
including prices and totals, so that amounts never pass through binary
floating point. Missing scalars default to ``""`` and a missing item
list to ``[]``; these then fail field validation in
:mod:`receipt_points.services.receipt_parser` with a precise message
instead of being reported as malformed JSON.

The domain schemas (``Item``, ``Receipt``) hold parsed values and are
frozen: a receipt is never mutated once it has been stored.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Domain schemas


class Item(BaseModel):
    """Individual line item on a receipt."""

    model_config = ConfigDict(frozen=True)

    short_description: str
    price: Decimal


class Receipt(BaseModel):
    """A validated receipt as kept in the store."""

    model_config = ConfigDict(frozen=True)

    retailer: str
    purchase_date: dt.date
    purchase_time: dt.time
    items: Tuple[Item, ...] = Field(min_length=1)
    total: Decimal


# ---------------------------------------------------------------------------
# API request/response schemas


class ItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    short_description: str = Field(default="", alias="shortDescription")
    price: str = ""


class ReceiptPayload(BaseModel):
    """Receipt as submitted to ``POST /receipts/process``."""

    model_config = ConfigDict(populate_by_name=True)

    retailer: str = ""
    purchase_date: str = Field(default="", alias="purchaseDate")
    purchase_time: str = Field(default="", alias="purchaseTime")
    items: List[ItemPayload] = Field(default_factory=list)
    total: str = ""


class ReceiptProcessResponse(BaseModel):
    id: str


class ReceiptPointsResponse(BaseModel):
    points: int


class ErrorResponse(BaseModel):
    error: str
