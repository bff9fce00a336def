"""FastAPI dependencies for the urgency services."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends

from shopping_list.config import Settings, get_settings
from shopping_list.services.urgency import UrgencyClassifier, UrgencyRanker


def get_classifier(
    settings: Annotated[Settings, Depends(get_settings)],
) -> UrgencyClassifier:
    """Get a classifier counting calendar days in the configured timezone."""
    return UrgencyClassifier(tz=settings.tzinfo)


def get_ranker(
    classifier: Annotated[UrgencyClassifier, Depends(get_classifier)],
) -> UrgencyRanker:
    """Get ranker with dependencies."""
    return UrgencyRanker(classifier)


def resolve_now(now: datetime | None) -> datetime:
    """Use the caller's reference instant, or the current UTC time."""
    return now if now is not None else datetime.now(UTC)
