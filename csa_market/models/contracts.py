"""Enumerations shared by the schema, the listing filters and the API."""

from enum import Enum


class ShareFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class PriceTier(str, Enum):
    """Named buckets over a farm's weekly price."""

    UNDER_30 = "under-30"
    FROM_30_TO_40 = "30-40"
    OVER_40 = "40-plus"


class SortKey(str, Enum):
    """Farm listing orders.

    ``DISTANCE`` is the default; without geo computation it resolves to the
    canonical newest-first order.
    """

    DISTANCE = "distance"
    RATING = "rating"
    PRICE = "price"
    NAME = "name"
