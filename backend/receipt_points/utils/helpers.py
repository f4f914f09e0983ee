"""Miscellaneous parsing helpers.

Each helper returns ``None`` instead of raising when the value cannot
be parsed; callers decide which error to report.
"""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_RE = re.compile(r"\d{1,2}:\d{2}", re.ASCII)
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)

# Longest amount, in digits, accepted on a receipt.
MAX_AMOUNT_DIGITS = 32


def parse_date(value: str | None) -> Optional[dt.date]:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    ``date.fromisoformat`` also accepts compact and week-date forms on
    recent interpreters, so the shape is checked first.
    """
    if not value or not _DATE_RE.fullmatch(value):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def parse_time(value: str | None) -> Optional[dt.time]:
    """Parse a 24-hour ``H:MM`` or ``HH:MM`` wall-clock time."""
    if not value or not _TIME_RE.fullmatch(value):
        return None
    hour, _, minute = value.partition(":")
    hour, minute = int(hour), int(minute)
    if hour > 23 or minute > 59:
        return None
    return dt.time(hour, minute)


def parse_decimal(value: str | None) -> Optional[Decimal]:
    """Parse a finite decimal amount such as ``"35.35"``.

    Only plain positional notation of at most ``MAX_AMOUNT_DIGITS`` digits
    is accepted. Whitespace, underscores, exponents, ``NaN`` and
    ``Infinity`` are rejected even though :class:`decimal.Decimal` would
    accept them.
    """
    if not value or not _DECIMAL_RE.fullmatch(value):
        return None
    if sum(ch.isdigit() for ch in value) > MAX_AMOUNT_DIGITS:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def parse_amount(value: str | None) -> Optional[Decimal]:
    """Parse a non-negative decimal amount; negative values yield ``None``."""
    amount = parse_decimal(value)
    if amount is None or amount < 0:
        return None
    return amount
