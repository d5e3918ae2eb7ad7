"""Request and response models for farm endpoints."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator, model_serializer

from csa_market.schemas.common import CamelModel


def normalize_image_urls(value: Any) -> Any:
    """Accept a single URL as a one-item list."""
    if isinstance(value, str):
        return [value]
    return value


class FarmBase(CamelModel):
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    image_urls: list[str] | None = None
    price_per_week: float | None = Field(None, ge=0, description="Weekly share price in dollars")
    rating: float | None = Field(None, ge=0, le=5)

    @field_validator("image_urls", mode="before")
    @classmethod
    def wrap_single_image_url(cls, value: Any) -> Any:
        return normalize_image_urls(value)


class FarmCreate(FarmBase):
    name: str = Field(..., min_length=1)
    categories: list[str] = Field(default_factory=list)
    delivery_options: list[str] = Field(default_factory=list)


class FarmUpdate(FarmBase):
    name: str | None = Field(None, min_length=1)
    categories: list[str] | None = None
    delivery_options: list[str] | None = None


class FarmResponse(FarmBase):
    id: str
    user_id: str
    name: str
    categories: list[str] = Field(default_factory=list)
    delivery_options: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class FarmListResponse(CamelModel):
    """Envelope for one page of the farm listing."""

    success: bool = Field(..., description="False when the page could not be fetched")
    data: list[FarmResponse] = Field(default_factory=list)
    next_cursor: str | None = Field(
        None, description="Opaque cursor for the next page (null if no more results)"
    )
    has_more: bool = Field(False, description="Whether more results are available")
    error: str | None = Field(None, description="Human-readable failure message")

    @model_serializer(mode="wrap")
    def _omit_empty_error(self, handler):
        data = handler(self)
        if self.error is None:
            data.pop("error", None)
        return data


class FarmCollectionResponse(CamelModel):
    success: bool = True
    data: list[FarmResponse] = Field(default_factory=list)
