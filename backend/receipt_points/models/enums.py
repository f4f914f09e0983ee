"""Enumeration types used throughout the receipt points API.

When adding a member to :class:`PointsRule` register a matching scorer
in :mod:`receipt_points.services.points_calculator`.
"""

from enum import Enum


class PointsRule(str, Enum):
    """Independent rules whose contributions sum to a receipt's points."""

    RETAILER_NAME = "retailer_name"
    ROUND_TOTAL = "round_total"
    QUARTER_TOTAL = "quarter_total"
    ITEM_PAIRS = "item_pairs"
    DESCRIPTION_LENGTH = "description_length"
    ODD_DAY = "odd_day"
    AFTERNOON = "afternoon"
