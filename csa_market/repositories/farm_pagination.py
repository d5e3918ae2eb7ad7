"""Keyset pagination over farm listings.

Every sort order is a composite key ending in ``(created_at DESC, id DESC)``,
so the order is total and a page can always resume strictly after the last
row served. Rows inserted with an earlier ``created_at`` than rows already
served can still be missed by a running pagination sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from csa_market.core.logging import get_logger
from csa_market.core.settings import get_settings
from csa_market.core.timing import timed
from csa_market.models.contracts import SortKey
from csa_market.models.pagination import FarmPage, PaginationCursorData
from csa_market.models.schema import Farm
from csa_market.repositories.farm_filters import (
    DEFAULT_RATING,
    FarmFilters,
    build_farm_predicate,
    effective_rating,
)
from csa_market.utils.pagination import encode_cursor

logger = get_logger(__name__)

# Farms without a price sort after every priced farm
MISSING_PRICE_SORT_VALUE = 1_000_000_000.0

FETCH_FAILED_MESSAGE = "Failed to fetch farms"


@dataclass(frozen=True)
class SeekColumn:
    expression: Any
    descending: bool

    def ordering(self):
        return self.expression.desc() if self.descending else self.expression.asc()

    def beyond(self, value) -> ColumnElement[bool]:
        """Rows strictly after ``value`` in this column's direction."""
        return self.expression < value if self.descending else self.expression > value


_TIEBREAK = (SeekColumn(Farm.created_at, True), SeekColumn(Farm.id, True))


def seek_columns(sort: SortKey) -> tuple[SeekColumn, ...]:
    """Composite ordering key for a sort."""
    if sort is SortKey.RATING:
        return (SeekColumn(effective_rating(), True), *_TIEBREAK)
    if sort is SortKey.PRICE:
        price = func.coalesce(Farm.price_per_week, MISSING_PRICE_SORT_VALUE)
        return (SeekColumn(price, False), *_TIEBREAK)
    if sort is SortKey.NAME:
        return (SeekColumn(Farm.name, False), *_TIEBREAK)
    return _TIEBREAK


def sort_value(farm: Farm, sort: SortKey) -> float | str | None:
    """The value a farm contributes to the leading key of an alternate sort."""
    if sort is SortKey.RATING:
        return farm.rating if farm.rating is not None else DEFAULT_RATING
    if sort is SortKey.PRICE:
        if farm.price_per_week is None:
            return MISSING_PRICE_SORT_VALUE
        return farm.price_per_week
    if sort is SortKey.NAME:
        return farm.name
    return None


def seek_condition(columns: tuple[SeekColumn, ...], values: tuple) -> ColumnElement[bool]:
    """Lexicographic "strictly after" over a composite key.

    For the default key this is
    ``created_at < c OR (created_at = c AND id < i)``.
    """
    branches = []
    for position, column in enumerate(columns):
        equal_prefix = [
            columns[i].expression == values[i] for i in range(position)
        ]
        branches.append(and_(*equal_prefix, column.beyond(values[position])))
    return or_(*branches)


def _cursor_values(cursor: PaginationCursorData, sort: SortKey) -> tuple:
    if sort is SortKey.DISTANCE:
        return cursor.key
    return (cursor.value, *cursor.key)


def _cursor_matches_sort(cursor: PaginationCursorData, sort: SortKey) -> bool:
    expected = None if sort is SortKey.DISTANCE else sort
    return cursor.sort == expected


def clamp_limit(limit: int | None) -> int:
    """Bound a page size to 1..``listing_max_limit``; None means the default."""
    settings = get_settings()
    if limit is None:
        return settings.listing_default_limit
    return max(1, min(int(limit), settings.listing_max_limit))


def fetch_farm_page(
    db: Session,
    filters: FarmFilters,
    cursor: PaginationCursorData | None = None,
    limit: int | None = None,
) -> FarmPage:
    """Fetch the page of farms that follows ``cursor``.

    Args:
        db: Active SQLAlchemy session
        filters: Normalized listing filters, including the sort
        cursor: Decoded position of the previous page's last row, if any
        limit: Page size, clamped to 1..listing_max_limit

    Returns:
        The page. Storage errors produce a failed, empty page instead of
        raising.
    """
    limit = clamp_limit(limit)
    columns = seek_columns(filters.sort)

    stmt = select(Farm)
    if not filters.is_unconstrained:
        stmt = stmt.where(build_farm_predicate(filters))

    if cursor is not None:
        if _cursor_matches_sort(cursor, filters.sort):
            stmt = stmt.where(seek_condition(columns, _cursor_values(cursor, filters.sort)))
        else:
            logger.debug(
                "Cursor minted for sort %s replayed under sort %s; starting from the beginning",
                cursor.sort.value if cursor.sort else SortKey.DISTANCE.value,
                filters.sort.value,
            )

    # Fetch one extra row to learn whether another page exists
    stmt = stmt.order_by(*(column.ordering() for column in columns)).limit(limit + 1)

    try:
        with timed("query farm page"):
            rows = list(db.execute(stmt).scalars().all())
    except SQLAlchemyError:
        logger.exception(
            "Farm page query failed",
            extra={
                "operation": "fetch_farm_page",
                "context_data": {"sort": filters.sort.value, "limit": limit},
            },
        )
        db.rollback()
        return FarmPage.failed(FETCH_FAILED_MESSAGE)

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor = None
    if has_more and items:
        last = items[-1]
        next_cursor = encode_cursor(
            last.created_at,
            last.id,
            sort=filters.sort,
            value=sort_value(last, filters.sort),
        )

    return FarmPage(items=items, has_more=has_more, next_cursor=next_cursor)
