"""CSA share persistence operations."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from csa_market.models.schema import CsaShare, Farm, utcnow
from csa_market.schemas.shares import ShareCreate, ShareUpdate

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {"name", "price", "frequency", "available", "current_subscribers"}


def get_all_shares(db: Session) -> list[CsaShare]:
    return list(db.execute(select(CsaShare).order_by(CsaShare.created_at)).scalars().all())


def get_shares_by_farm(db: Session, farm_id: str) -> list[CsaShare]:
    stmt = select(CsaShare).where(CsaShare.farm_id == farm_id).order_by(CsaShare.created_at)
    return list(db.execute(stmt).scalars().all())


def get_shares_by_user(db: Session, user_id: str) -> list[CsaShare]:
    """All shares offered by farms that ``user_id`` owns."""
    stmt = (
        select(CsaShare)
        .join(Farm, CsaShare.farm_id == Farm.id)
        .where(Farm.user_id == user_id)
        .order_by(CsaShare.created_at)
    )
    return list(db.execute(stmt).scalars().all())


def get_share(db: Session, share_id: str) -> CsaShare | None:
    return db.get(CsaShare, share_id)


def create_share(db: Session, farm_id: str, data: ShareCreate) -> CsaShare:
    share = CsaShare(farm_id=farm_id, **data.model_dump())
    db.add(share)
    db.commit()
    db.refresh(share)
    logger.info("Created share id=%s for farm_id=%s", share.id, farm_id)
    return share


def update_share(db: Session, share: CsaShare, data: ShareUpdate) -> CsaShare:
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(share, key, value)
    share.updated_at = utcnow()
    db.commit()
    db.refresh(share)
    return share


def set_availability(db: Session, share: CsaShare, available: bool) -> CsaShare:
    share.available = available
    share.updated_at = utcnow()
    db.commit()
    db.refresh(share)
    logger.debug("Share id=%s available=%s", share.id, available)
    return share


def delete_share(db: Session, share: CsaShare) -> None:
    db.delete(share)
    db.commit()


def check_share_ownership(db: Session, share_id: str, user_id: str) -> bool:
    """Whether the share exists and belongs to a farm owned by ``user_id``."""
    stmt = (
        select(CsaShare.id)
        .join(Farm, CsaShare.farm_id == Farm.id)
        .where(CsaShare.id == share_id, Farm.user_id == user_id)
    )
    return db.execute(stmt).first() is not None
