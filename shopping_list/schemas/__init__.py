"""Pydantic schemas for item records, API requests and responses."""

from shopping_list.schemas.item import (
    ClassifiedItemResponse,
    ClassifyRequest,
    Item,
    ItemCreate,
    PurchaseRequest,
    RankRequest,
    RankResponse,
    SkippedItemResponse,
)

__all__ = [
    "Item",
    "ItemCreate",
    "PurchaseRequest",
    "ClassifyRequest",
    "ClassifiedItemResponse",
    "RankRequest",
    "RankResponse",
    "SkippedItemResponse",
]
