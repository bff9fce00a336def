"""Item schemas."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from shopping_list.exceptions import InvalidItem
from shopping_list.models.enums import UrgencyBucket


class Item(BaseModel):
    """Read-only view of an item record owned by the document store.

    Accepts the store's camelCase keys (``dateNextPurchased``) as well as the
    Python field names, and serializes back to camelCase.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str | None = None
    name: str = Field(..., min_length=1)
    date_created: datetime
    date_last_purchased: datetime | None = None
    date_next_purchased: datetime
    total_purchases: int = Field(default=0, ge=0)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Item":
        """Validate a raw store record, raising InvalidItem on any problem."""
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
                for error in e.errors()
            )
            raise InvalidItem(f"Invalid item record: {problems}") from e


class ItemCreate(BaseModel):
    """Create a new item record."""

    name: str = Field(..., min_length=1, max_length=255)
    days_until_next_purchase: int | None = Field(None, ge=0)
    # Names already on the list, for duplicate detection
    existing: list[str] = Field(default_factory=list)
    now: datetime | None = None


class PurchaseRequest(BaseModel):
    """Mark an item as purchased."""

    item: dict[str, Any]
    days_until_next_purchase: int | None = Field(None, ge=0)
    now: datetime | None = None


class ClassifyRequest(BaseModel):
    """Classify a single item record."""

    item: dict[str, Any]
    now: datetime | None = None


class ClassifiedItemResponse(BaseModel):
    """Item with its urgency score and tier."""

    item: Item
    score: int
    bucket: UrgencyBucket


class RankRequest(BaseModel):
    """Rank a snapshot of item records."""

    items: list[dict[str, Any]]
    now: datetime | None = None


class SkippedItemResponse(BaseModel):
    """A record that could not be classified and was left out of the ranking."""

    index: int
    name: str | None
    detail: str


class RankResponse(BaseModel):
    """Ranked items, most urgent first, with counts per tier."""

    items: list[ClassifiedItemResponse]
    counts: dict[str, int]
    errors: list[SkippedItemResponse] = Field(default_factory=list)
