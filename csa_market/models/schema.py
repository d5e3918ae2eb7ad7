import secrets
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from csa_market.core.db import Base
from csa_market.models.contracts import ShareFrequency, SubscriptionStatus


def utcnow() -> datetime:
    """Naive UTC timestamp with microsecond precision."""
    return datetime.now(UTC).replace(tzinfo=None)


def new_id(prefix: str) -> str:
    """Generate a prefixed identifier such as ``farm_k3v9x0q2m1ab``."""
    return f"{prefix}_{secrets.token_hex(8)}"


class Farm(Base):
    __tablename__ = "farms"

    id = Column(String(255), primary_key=True, default=lambda: new_id("farm"))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    state = Column(String(64), nullable=True)
    zip_code = Column(String(20), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image_urls = Column(JSON, nullable=True)

    # Listing attributes
    price_per_week = Column(Float, nullable=True)
    rating = Column(Float, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    category_rows = relationship(
        "FarmCategory",
        back_populates="farm",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="FarmCategory.name",
    )
    delivery_option_rows = relationship(
        "FarmDeliveryOption",
        back_populates="farm",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="FarmDeliveryOption.name",
    )
    shares = relationship("CsaShare", back_populates="farm", cascade="all, delete-orphan")

    # (created_at, id) is the pagination key
    __table_args__ = (Index("idx_farms_created_at_id", "created_at", "id"),)

    @property
    def categories(self) -> list[str]:
        return [row.name for row in self.category_rows]

    @categories.setter
    def categories(self, values: list[str]) -> None:
        existing = {row.name: row for row in self.category_rows}
        self.category_rows = [
            existing.get(name) or FarmCategory(name=name) for name in _normalize_labels(values)
        ]

    @property
    def delivery_options(self) -> list[str]:
        return [row.name for row in self.delivery_option_rows]

    @delivery_options.setter
    def delivery_options(self, values: list[str]) -> None:
        existing = {row.name: row for row in self.delivery_option_rows}
        self.delivery_option_rows = [
            existing.get(name) or FarmDeliveryOption(name=name)
            for name in _normalize_labels(values)
        ]


class FarmCategory(Base):
    """Produce category offered by a farm (lowercase)."""

    __tablename__ = "farm_categories"

    id = Column(Integer, primary_key=True)
    farm_id = Column(String(255), ForeignKey("farms.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(64), nullable=False)

    farm = relationship("Farm", back_populates="category_rows")

    __table_args__ = (
        UniqueConstraint("farm_id", "name", name="uq_farm_category"),
        Index("idx_farm_categories_name", "name"),
    )


class FarmDeliveryOption(Base):
    """Delivery mode offered by a farm, e.g. ``delivery`` or ``pickup``."""

    __tablename__ = "farm_delivery_options"

    id = Column(Integer, primary_key=True)
    farm_id = Column(String(255), ForeignKey("farms.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(64), nullable=False)

    farm = relationship("Farm", back_populates="delivery_option_rows")

    __table_args__ = (
        UniqueConstraint("farm_id", "name", name="uq_farm_delivery_option"),
        Index("idx_farm_delivery_options_name", "name"),
    )


class CsaShare(Base):
    __tablename__ = "csa_shares"

    id = Column(String(255), primary_key=True, default=lambda: new_id("share"))
    farm_id = Column(String(255), ForeignKey("farms.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False)  # cents
    frequency = Column(
        Enum(ShareFrequency, name="frequency", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    available = Column(Boolean, default=True, nullable=False)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    max_subscribers = Column(Integer, nullable=True)
    current_subscribers = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    farm = relationship("Farm", back_populates="shares")


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(String(255), primary_key=True, default=lambda: new_id("sub"))
    user_id = Column(String(255), nullable=False, index=True)
    share_id = Column(String(255), ForeignKey("csa_shares.id"), nullable=False, index=True)
    status = Column(
        Enum(SubscriptionStatus, name="status", values_callable=lambda e: [m.value for m in e]),
        default=SubscriptionStatus.ACTIVE,
        nullable=False,
    )
    start_date = Column(DateTime, default=utcnow, nullable=True)
    next_delivery_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


def _normalize_labels(values: list[str] | None) -> list[str]:
    seen: list[str] = []
    for value in values or []:
        label = value.strip().lower()
        if label and label not in seen:
            seen.append(label)
    return seen
