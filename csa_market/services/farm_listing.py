"""Farm listing: filters + keyset pagination + response envelope."""

from sqlalchemy.orm import Session

from csa_market.core.logging import get_logger
from csa_market.models.contracts import PriceTier, SortKey
from csa_market.repositories.farm_filters import FarmFilters
from csa_market.repositories.farm_pagination import fetch_farm_page
from csa_market.schemas.farms import FarmListResponse, FarmResponse
from csa_market.utils.pagination import decode_cursor

logger = get_logger(__name__)


def list_farms(
    db: Session,
    *,
    cursor: str | None = None,
    limit: int | None = None,
    search: str | None = None,
    category: str | None = None,
    price: PriceTier | str | None = None,
    delivery: str | None = None,
    rating: float | str | None = None,
    sort: SortKey | str | None = None,
) -> FarmListResponse:
    """List farms matching the query, one page at a time.

    An undecodable cursor is ignored and the listing starts from the
    beginning. Storage failures come back as ``success=False``.
    """
    filters = FarmFilters.from_params(
        search=search,
        category=category,
        price=price,
        delivery=delivery,
        rating=rating,
        sort=sort,
    )

    position = None
    if cursor:
        position = decode_cursor(cursor)
        if position is None:
            logger.debug("Ignoring malformed farm listing cursor")

    page = fetch_farm_page(db, filters, position, limit)

    if not page.success:
        return FarmListResponse(
            success=False, data=[], next_cursor=None, has_more=False, error=page.error
        )

    return FarmListResponse(
        success=True,
        data=[FarmResponse.model_validate(farm) for farm in page.items],
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )
