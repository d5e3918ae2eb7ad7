"""Models for farm listing pagination."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from csa_market.models.contracts import SortKey
from csa_market.models.schema import Farm


class PaginationCursorData(BaseModel):
    """Decoded position of the last farm served on the previous page."""

    created_at: datetime = Field(..., description="Created timestamp of last item")
    id: str = Field(..., min_length=1, description="ID of last item")
    sort: SortKey | None = Field(
        None, description="Alternate sort the cursor was minted under (absent for default order)"
    )
    value: float | str | None = Field(
        None, description="Effective sort value of the last item for alternate sorts"
    )

    @field_validator("id", "value")
    @classmethod
    def reject_nul(cls, v):
        # PostgreSQL text cannot hold NUL
        if isinstance(v, str) and "\x00" in v:
            raise ValueError("cursor strings cannot contain NUL")
        return v

    @model_validator(mode="after")
    def check_sort_value(self) -> "PaginationCursorData":
        if self.sort in (None, SortKey.DISTANCE):
            if self.value is not None:
                raise ValueError("default-order cursors carry no sort value")
            self.sort = None
        elif self.value is None:
            raise ValueError(f"cursor for sort '{self.sort.value}' is missing its value")
        elif self.sort is SortKey.NAME and not isinstance(self.value, str):
            raise ValueError("name cursors need a string value")
        elif self.sort is not SortKey.NAME and isinstance(self.value, str):
            raise ValueError(f"cursor for sort '{self.sort.value}' needs a numeric value")
        return self

    @property
    def key(self) -> tuple[datetime, str]:
        return (self.created_at, self.id)


@dataclass
class FarmPage:
    """One page of farms produced by the pagination engine."""

    items: list[Farm] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None
    success: bool = True
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> "FarmPage":
        return cls(success=False, error=error)
