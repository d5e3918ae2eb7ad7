"""Farm persistence operations."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from csa_market.models.schema import Farm, utcnow
from csa_market.schemas.farms import FarmCreate, FarmUpdate

logger = logging.getLogger(__name__)


def get_farm(db: Session, farm_id: str) -> Farm | None:
    return db.get(Farm, farm_id)


def get_farms_by_user(db: Session, user_id: str) -> list[Farm]:
    stmt = (
        select(Farm)
        .where(Farm.user_id == user_id)
        .order_by(Farm.created_at.desc(), Farm.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def create_farm(db: Session, data: FarmCreate, user_id: str) -> Farm:
    """Create a farm owned by ``user_id``."""
    farm = Farm(user_id=user_id, **data.model_dump(exclude={"categories", "delivery_options"}))
    farm.categories = data.categories
    farm.delivery_options = data.delivery_options
    db.add(farm)
    db.commit()
    db.refresh(farm)
    logger.info("Created farm id=%s for user_id=%s", farm.id, user_id)
    return farm


def update_farm(db: Session, farm: Farm, data: FarmUpdate) -> Farm:
    """Apply the fields present in ``data``; ``created_at`` never changes."""
    for key, value in data.model_dump(exclude_unset=True).items():
        if key == "name" and value is None:
            continue
        if key in ("categories", "delivery_options"):
            value = value or []
        setattr(farm, key, value)
    farm.updated_at = utcnow()
    db.commit()
    db.refresh(farm)
    logger.debug("Updated farm id=%s", farm.id)
    return farm


def delete_farm(db: Session, farm: Farm) -> None:
    """Delete a farm together with its shares."""
    db.delete(farm)
    db.commit()
    logger.info("Deleted farm id=%s", farm.id)
