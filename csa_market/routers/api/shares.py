"""CSA share endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from csa_market.core.db import get_db_session
from csa_market.core.deps import get_current_user_id
from csa_market.models.schema import CsaShare
from csa_market.schemas.shares import (
    ShareAvailabilityUpdate,
    ShareCreate,
    ShareResponse,
    ShareUpdate,
)
from csa_market.services import farms, shares

router = APIRouter(tags=["shares"], responses={404: {"description": "Not found"}})

NOT_OWNED_DETAIL = "Share not found or you are not authorized to modify it"


@router.get("", response_model=list[ShareResponse], summary="List all shares")
def list_shares(db: Annotated[Session, Depends(get_db_session)]) -> list[CsaShare]:
    return shares.get_all_shares(db)


@router.get("/farm/{farm_id}", response_model=list[ShareResponse], summary="List a farm's shares")
def list_farm_shares(
    farm_id: str, db: Annotated[Session, Depends(get_db_session)]
) -> list[CsaShare]:
    return shares.get_shares_by_farm(db, farm_id)


@router.get("/user/me", response_model=list[ShareResponse], summary="List my farms' shares")
def list_my_shares(
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> list[CsaShare]:
    return shares.get_shares_by_user(db, user_id)


@router.get("/{share_id}", response_model=ShareResponse, summary="Get a share")
def get_share(share_id: str, db: Annotated[Session, Depends(get_db_session)]) -> CsaShare:
    share = shares.get_share(db, share_id)
    if share is None:
        raise HTTPException(status_code=404, detail="CSA share not found")
    return share


@router.post(
    "/farm/{farm_id}",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a share for a farm",
)
def create_share(
    farm_id: str,
    payload: ShareCreate,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> CsaShare:
    farm = farms.get_farm(db, farm_id)
    if farm is None:
        raise HTTPException(status_code=404, detail="Farm not found")
    if farm.user_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized to create shares for this farm")
    return shares.create_share(db, farm_id, payload)


def _get_owned_share(db: Session, share_id: str, user_id: str) -> CsaShare:
    if not shares.check_share_ownership(db, share_id, user_id):
        raise HTTPException(status_code=404, detail=NOT_OWNED_DETAIL)
    return shares.get_share(db, share_id)


@router.put("/{share_id}", response_model=ShareResponse, summary="Update a share")
def update_share(
    share_id: str,
    payload: ShareUpdate,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> CsaShare:
    share = _get_owned_share(db, share_id, user_id)
    return shares.update_share(db, share, payload)


@router.put(
    "/{share_id}/availability", response_model=ShareResponse, summary="Toggle availability"
)
def set_share_availability(
    share_id: str,
    payload: ShareAvailabilityUpdate,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> CsaShare:
    share = _get_owned_share(db, share_id, user_id)
    return shares.set_availability(db, share, payload.available)


@router.delete("/{share_id}", summary="Delete a share")
def delete_share(
    share_id: str,
    db: Annotated[Session, Depends(get_db_session)],
    user_id: Annotated[str, Depends(get_current_user_id)],
) -> dict[str, bool]:
    share = _get_owned_share(db, share_id, user_id)
    shares.delete_share(db, share)
    return {"success": True}
