"""Request and response models for CSA share endpoints."""

from datetime import datetime

from pydantic import Field

from csa_market.models.contracts import ShareFrequency
from csa_market.schemas.common import CamelModel


class ShareBase(CamelModel):
    description: str | None = None
    available: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    max_subscribers: int | None = Field(None, ge=0)


class ShareCreate(ShareBase):
    name: str = Field(..., min_length=1)
    price: int = Field(..., ge=0, description="Price in cents")
    frequency: ShareFrequency
    available: bool = True


class ShareUpdate(ShareBase):
    name: str | None = Field(None, min_length=1)
    price: int | None = Field(None, ge=0)
    frequency: ShareFrequency | None = None
    current_subscribers: int | None = Field(None, ge=0)


class ShareAvailabilityUpdate(CamelModel):
    available: bool


class ShareResponse(ShareBase):
    id: str
    farm_id: str
    name: str
    price: int
    frequency: ShareFrequency
    available: bool
    current_subscribers: int
    created_at: datetime
    updated_at: datetime
