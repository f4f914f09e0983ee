"""Reward points calculator.

Scores a stored :class:`Receipt` with seven independent rules whose
contributions are summed:

* ``retailer_name`` – one point per letter or decimal digit in the
  retailer name (Unicode categories ``L*`` and ``Nd``).
* ``round_total`` – 50 points if the total has no fractional part.
* ``quarter_total`` – 25 points if the total is a multiple of ``0.25``.
* ``item_pairs`` – 5 points for every two items.
* ``description_length`` – for each item whose trimmed description is
  a multiple of 3 bytes long in UTF-8, the price multiplied by ``0.2``
  and rounded up to the nearest integer.
* ``odd_day`` – 6 points if the day of the purchase date is odd.
* ``afternoon`` – 10 points if the purchase time is at or after 14:00
  and before 16:00.

All money arithmetic is done with :class:`decimal.Decimal` so that
values such as ``35.35`` are judged exactly. The calculator is pure:
scoring the same receipt always yields the same result.
"""

from __future__ import annotations

import datetime as dt
import math
import unicodedata
from decimal import Decimal, localcontext
from typing import Callable, Dict

from receipt_points.models.enums import PointsRule
from receipt_points.models.schemas import Receipt

QUARTER = Decimal("0.25")
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
AFTERNOON_START = dt.time(14, 0)
AFTERNOON_END = dt.time(16, 0)

# Trimmed from descriptions: the Unicode White_Space set, without the
# \x1c-\x1f separators that str.strip() would also remove.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _exact_precision(*amounts: Decimal) -> int:
    """Context precision large enough for exact remainders and products."""
    digits = max(len(a.as_tuple().digits) + max(a.as_tuple().exponent, 0) for a in amounts)
    return max(28, digits + 4)


def _is_alphanumeric(char: str) -> bool:
    category = unicodedata.category(char)
    return category.startswith("L") or category == "Nd"


def _score_retailer_name(receipt: Receipt) -> int:
    return sum(1 for char in receipt.retailer if _is_alphanumeric(char))


def _score_round_total(receipt: Receipt) -> int:
    total = receipt.total
    return 50 if total == total.to_integral_value() else 0


def _score_quarter_total(receipt: Receipt) -> int:
    with localcontext() as ctx:
        ctx.prec = _exact_precision(receipt.total)
        return 25 if receipt.total % QUARTER == 0 else 0


def _description_length(description: str) -> int:
    """Length in UTF-8 bytes once surrounding whitespace is trimmed."""
    # Lone surrogates from JSON escapes count as one 3-byte replacement character.
    return len(description.strip(WHITESPACE).encode("utf-8", "surrogatepass"))


def _score_item_pairs(receipt: Receipt) -> int:
    return 5 * (len(receipt.items) // 2)


def _score_description_length(receipt: Receipt) -> int:
    points = 0
    with localcontext() as ctx:
        ctx.prec = _exact_precision(*(item.price for item in receipt.items))
        for item in receipt.items:
            if _description_length(item.short_description) % 3 == 0:
                points += math.ceil(item.price * DESCRIPTION_PRICE_MULTIPLIER)
    return points


def _score_odd_day(receipt: Receipt) -> int:
    return 6 if receipt.purchase_date.day % 2 == 1 else 0


def _score_afternoon(receipt: Receipt) -> int:
    return 10 if AFTERNOON_START <= receipt.purchase_time < AFTERNOON_END else 0


SCORERS: Dict[PointsRule, Callable[[Receipt], int]] = {
    PointsRule.RETAILER_NAME: _score_retailer_name,
    PointsRule.ROUND_TOTAL: _score_round_total,
    PointsRule.QUARTER_TOTAL: _score_quarter_total,
    PointsRule.ITEM_PAIRS: _score_item_pairs,
    PointsRule.DESCRIPTION_LENGTH: _score_description_length,
    PointsRule.ODD_DAY: _score_odd_day,
    PointsRule.AFTERNOON: _score_afternoon,
}


def score_breakdown(receipt: Receipt) -> Dict[PointsRule, int]:
    """Return the points contributed by each rule, in rule order."""
    return {rule: scorer(receipt) for rule, scorer in SCORERS.items()}


def calculate_points(receipt: Receipt) -> int:
    """Return the total reward points for ``receipt``."""
    return sum(score_breakdown(receipt).values())
