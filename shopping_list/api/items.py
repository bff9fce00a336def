"""Item API endpoints.

The service is stateless: callers send item records from their store and
persist whatever comes back.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from shopping_list.api.dependencies import get_classifier, get_ranker, resolve_now
from shopping_list.config import Settings, get_settings
from shopping_list.exceptions import InvalidItem
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
from shopping_list.services.purchases import find_duplicate, new_item, record_purchase
from shopping_list.services.urgency import UrgencyClassifier, UrgencyRanker

router = APIRouter(prefix="/api/v1/items", tags=["items"])


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: ItemCreate,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Build the record for a new item, rejecting names already on the list."""
    if find_duplicate(item_data.name, item_data.existing) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This item already exists in the list",
        )

    days = item_data.days_until_next_purchase
    if days is None:
        days = settings.default_cadence_days

    try:
        return new_item(item_data.name, days, resolve_now(item_data.now))
    except InvalidItem as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/purchase", response_model=Item)
def purchase_item(
    purchase: PurchaseRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Mark an item as purchased and move its next purchase date."""
    try:
        item = Item.from_record(purchase.item)
        return record_purchase(
            item,
            resolve_now(purchase.now),
            purchase.days_until_next_purchase,
            tz=settings.tzinfo,
        )
    except InvalidItem as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/classify", response_model=ClassifiedItemResponse)
def classify_item(
    request: ClassifyRequest,
    classifier: Annotated[UrgencyClassifier, Depends(get_classifier)],
):
    """Get the urgency score and tier of a single item."""
    try:
        item = Item.from_record(request.item)
        classification = classifier.classify(item, resolve_now(request.now))
    except InvalidItem as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ClassifiedItemResponse(
        item=classification.item,
        score=classification.score,
        bucket=classification.bucket,
    )


@router.post("/rank", response_model=RankResponse)
def rank_items(
    request: RankRequest,
    ranker: Annotated[UrgencyRanker, Depends(get_ranker)],
):
    """Rank a snapshot of items, most urgent first.

    Invalid records are left out of the ranking and listed under ``errors``.
    """
    report = ranker.rank(request.items, resolve_now(request.now), skip_invalid=True)

    return RankResponse(
        items=[
            ClassifiedItemResponse(item=c.item, score=c.score, bucket=c.bucket)
            for c in report.classifications
        ],
        counts={bucket.value: count for bucket, count in report.counts().items()},
        errors=[
            SkippedItemResponse(index=skipped.index, name=skipped.name, detail=str(skipped.error))
            for skipped in report.errors
        ],
    )
