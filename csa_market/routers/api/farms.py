"""Farm listing and farm management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from csa_market.core.db import get_db_session
from csa_market.core.deps import get_current_user_id
from csa_market.core.logging import get_logger
from csa_market.core.settings import get_settings
from csa_market.models.contracts import SortKey
from csa_market.models.schema import Farm
from csa_market.services import farm_listing, farms
from csa_market.schemas.farms import (
    FarmCollectionResponse,
    FarmCreate,
    FarmListResponse,
    FarmResponse,
    FarmUpdate,
)

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(tags=["farms"], responses={404: {"description": "Not found"}})


@router.get(
    "",
    response_model=FarmListResponse,
    summary="List farms",
    description=(
        "Browse farms newest first, or by rating, price or name. "
        "Supports search, category, price tier, delivery and rating filters "
        "and cursor-based pagination."
    ),
    responses={500: {"model": FarmListResponse, "description": "Farms could not be fetched"}},
)
def list_farms(
    db: Annotated[Session, Depends(get_db_session)],
    cursor: str | None = Query(None, description="Pagination cursor for next page"),
    limit: int = Query(
        settings.listing_default_limit,
        ge=1,
        le=settings.listing_max_limit,
        description=f"Number of farms per page (max {settings.listing_max_limit})",
    ),
    search: str | None = Query(
        None,
        max_length=settings.search_max_length,
        description="Text to find in name, city, state or description",
    ),
    category: str | None = Query(None, description="Produce category, or 'all'"),
    price: str | None = Query(
        None,
        pattern="^(all|under-30|30-40|40-plus)$",
        description="Weekly price tier (all/under-30/30-40/40-plus)",
    ),
    delivery: str | None = Query(None, description="Delivery option (delivery/pickup), or 'all'"),
    rating: float | None = Query(None, ge=0, le=5, description="Minimum rating"),
    sort: SortKey = Query(SortKey.DISTANCE, description="Sort order"),
):
    """List farms with filters and cursor-based pagination."""
    result = farm_listing.list_farms(
        db,
        cursor=cursor,
        limit=limit,
        search=search,
        category=category,
        price=price,
        delivery=delivery,
        rating=rating,
        sort=sort,
    )
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.model_dump(mode="json", by_alias=True),
        )
    return result


@router.get("/user/me", response_model=FarmCollectionResponse, summary="List my farms")
def list_my_farms(
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> FarmCollectionResponse:
    owned = farms.get_farms_by_user(db, user_id)
    return FarmCollectionResponse(data=[FarmResponse.model_validate(f) for f in owned])


@router.get("/{farm_id}", response_model=FarmResponse, summary="Get a farm")
def get_farm(farm_id: str, db: Annotated[Session, Depends(get_db_session)]) -> Farm:
    farm = farms.get_farm(db, farm_id)
    if farm is None:
        raise HTTPException(status_code=404, detail="Farm not found")
    return farm


@router.post(
    "",
    response_model=FarmResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a farm",
)
def create_farm(
    payload: FarmCreate,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> Farm:
    return farms.create_farm(db, payload, user_id)


def _get_owned_farm(db: Session, farm_id: str, user_id: str) -> Farm:
    farm = farms.get_farm(db, farm_id)
    if farm is None:
        raise HTTPException(status_code=404, detail="Farm not found")
    if farm.user_id != user_id:
        logger.warning("User %s tried to modify farm %s owned by %s", user_id, farm_id, farm.user_id)
        raise HTTPException(status_code=403, detail="Unauthorized")
    return farm


@router.put("/{farm_id}", response_model=FarmResponse, summary="Update a farm")
def update_farm(
    farm_id: str,
    payload: FarmUpdate,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> Farm:
    farm = _get_owned_farm(db, farm_id, user_id)
    return farms.update_farm(db, farm, payload)


@router.delete("/{farm_id}", summary="Delete a farm")
def delete_farm(
    farm_id: str,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> dict[str, bool]:
    farm = _get_owned_farm(db, farm_id, user_id)
    farms.delete_farm(db, farm)
    return {"success": True}
