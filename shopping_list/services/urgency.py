"""Urgency classification and ranking for shopping list items."""

import logging
import numbers
import unicodedata
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any

from shopping_list.config import get_settings
from shopping_list.exceptions import InvalidItem, UnclassifiableItem
from shopping_list.models.enums import UrgencyBucket
from shopping_list.schemas.item import Item
from shopping_list.services.dates import whole_days_between

logger = logging.getLogger(__name__)

# Items untouched for this many days are inactive whatever their next purchase date
DORMANCY_DAYS = 60
INACTIVE_SCORE = 1000

SOON_DAYS = 7
NOT_SOON_DAYS = 30


@dataclass(frozen=True)
class Classification:
    """Urgency score and tier of one item."""

    item: Item
    score: int
    bucket: UrgencyBucket


@dataclass(frozen=True)
class SkippedItem:
    """A record left out of a classification pass."""

    index: int
    record: Any
    error: InvalidItem

    @property
    def name(self) -> str | None:
        if isinstance(self.record, Mapping):
            name = self.record.get("name")
        else:
            name = getattr(self.record, "name", None)
        return name if isinstance(name, str) else None


class UrgencyBuckets:
    """Partition of one classification pass into urgency tiers.

    Every pass allocates its own instance. An item object belongs to exactly
    one tier; adding it again moves it rather than duplicating it.
    """

    def __init__(self) -> None:
        self._members: dict[UrgencyBucket, list[Item]] = {bucket: [] for bucket in UrgencyBucket}
        self._placement: dict[int, UrgencyBucket] = {}

    def add(self, item: Item, bucket: UrgencyBucket) -> None:
        previous = self._placement.get(id(item))
        if previous == bucket:
            return
        if previous is not None:
            self._members[previous] = [m for m in self._members[previous] if m is not item]
        self._members[bucket].append(item)
        self._placement[id(item)] = bucket

    def bucket_of(self, item: Item) -> UrgencyBucket | None:
        return self._placement.get(id(item))

    def counts(self) -> dict[UrgencyBucket, int]:
        """Number of items per tier, e.g. for an "3 overdue" badge."""
        return {bucket: len(members) for bucket, members in self._members.items()}

    def __getitem__(self, bucket: UrgencyBucket | str) -> tuple[Item, ...]:
        return tuple(self._members[UrgencyBucket(bucket)])

    def __contains__(self, item: object) -> bool:
        return id(item) in self._placement

    def __iter__(self) -> Iterator[Item]:
        for members in self._members.values():
            yield from members

    def __len__(self) -> int:
        return len(self._placement)

    def __repr__(self) -> str:
        counts = ", ".join(f"{bucket}={n}" for bucket, n in self.counts().items())
        return f"UrgencyBuckets({counts})"


@dataclass
class UrgencyReport:
    """Result of one classification pass.

    ``classifications`` is in input order from ``classify_all`` and in display
    order from ``UrgencyRanker.rank``.
    """

    classifications: list[Classification]
    buckets: UrgencyBuckets
    errors: list[SkippedItem] = field(default_factory=list)
    _scores: dict[int, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._scores = {id(c.item): c.score for c in self.classifications}

    @property
    def items(self) -> list[Item]:
        return [c.item for c in self.classifications]

    def counts(self) -> dict[UrgencyBucket, int]:
        return self.buckets.counts()

    def score_of(self, item: Item) -> int:
        try:
            return self._scores[id(item)]
        except KeyError:
            raise KeyError(item.name) from None


class UrgencyClassifier:
    """Score items by days until their next purchase and assign urgency tiers."""

    def __init__(self, tz: tzinfo | None = None):
        self.tz = tz if tz is not None else get_settings().tzinfo

    def score(self, item: Item, now: datetime) -> int:
        """Days until the item's next purchase, or INACTIVE_SCORE when dormant."""
        if item.date_next_purchased is None:
            raise InvalidItem(f"Item [{item.name}] has no next purchase date")

        # Anchor on the last purchase, or on creation for never-purchased items
        reference_date = item.date_last_purchased or item.date_created
        if reference_date is None:
            raise InvalidItem(f"Item [{item.name}] has neither a purchase nor a creation date")

        days_since_reference = whole_days_between(reference_date, now, self.tz)
        if days_since_reference >= DORMANCY_DAYS:
            return INACTIVE_SCORE

        return whole_days_between(now, item.date_next_purchased, self.tz)

    @staticmethod
    def bucket_for(score: int, name: str = "") -> UrgencyBucket:
        """Map a score to its tier. The first matching range wins."""
        if isinstance(score, bool) or not isinstance(score, numbers.Real):
            raise UnclassifiableItem(name, score)

        if score < 0:
            return UrgencyBucket.OVERDUE
        elif score == INACTIVE_SCORE:
            return UrgencyBucket.INACTIVE
        elif score < SOON_DAYS:
            return UrgencyBucket.SOON
        elif SOON_DAYS <= score < NOT_SOON_DAYS:
            return UrgencyBucket.KIND_OF_SOON
        elif score >= NOT_SOON_DAYS:
            return UrgencyBucket.NOT_SOON
        # NaN compares false against every range
        raise UnclassifiableItem(name, score)

    def classify(
        self,
        item: Item,
        now: datetime,
        buckets: UrgencyBuckets | None = None,
    ) -> Classification:
        """Score one item and, when ``buckets`` is given, record its tier there."""
        score = self.score(item, now)
        bucket = self.bucket_for(score, item.name)
        if buckets is not None:
            buckets.add(item, bucket)
        return Classification(item=item, score=score, bucket=bucket)

    def classify_all(
        self,
        items: Iterable[Item | Mapping[str, Any]],
        now: datetime,
        skip_invalid: bool = False,
    ) -> UrgencyReport:
        """Run one classification pass over a snapshot of items.

        Raw store records are validated into Items first. With ``skip_invalid``
        an InvalidItem is logged and reported instead of aborting the pass.
        UnclassifiableItem always propagates.
        """
        buckets = UrgencyBuckets()
        classifications: list[Classification] = []
        errors: list[SkippedItem] = []

        for index, record in enumerate(items):
            try:
                if isinstance(record, Mapping):
                    item = Item.from_record(record)
                elif isinstance(record, Item):
                    item = record
                else:
                    raise InvalidItem(f"Expected an item record, got {type(record).__name__}")
                classifications.append(self.classify(item, now, buckets))
            except InvalidItem as e:
                if not skip_invalid:
                    raise
                skipped = SkippedItem(index=index, record=record, error=e)
                logger.warning(f"Skipping item #{index} ({skipped.name}): {e}")
                errors.append(skipped)

        logger.debug(f"Classified {len(classifications)} items: {buckets!r}")
        return UrgencyReport(classifications=classifications, buckets=buckets, errors=errors)


def name_collation_key(name: str) -> tuple[str, str, tuple[bool, ...], str]:
    """Sort key ordering names like a root-locale collator.

    Letters compare first without accents or case, then accents (plain before
    accented), then case (lower before upper). "apple" < "Apple" < "bread" <
    "éclair" < "fig" < "Milk".
    """
    decomposed = unicodedata.normalize("NFD", name)
    letters = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (
        letters.casefold(),
        decomposed.casefold(),
        tuple(ch != ch.lower() for ch in letters),
        name,
    )


def _display_key(classification: Classification) -> tuple[int, tuple]:
    return classification.score, name_collation_key(classification.item.name)


class UrgencyRanker:
    """Order items most urgent first, breaking score ties by name."""

    def __init__(self, classifier: UrgencyClassifier | None = None):
        self.classifier = classifier or UrgencyClassifier()

    def compare(self, item_a: Item, item_b: Item, now: datetime) -> int:
        """Three-way comparison: negative when ``item_a`` is more urgent.

        Classifies both items on every call; use ``rank`` to order a collection.
        """
        score_a = self.classifier.classify(item_a, now).score
        score_b = self.classifier.classify(item_b, now).score

        if score_a == score_b:
            key_a = name_collation_key(item_a.name)
            key_b = name_collation_key(item_b.name)
            return (key_a > key_b) - (key_a < key_b)
        return score_a - score_b

    def rank(
        self,
        items: Iterable[Item | Mapping[str, Any]],
        now: datetime,
        skip_invalid: bool = False,
    ) -> UrgencyReport:
        """Classify every item once, then sort stably by (score, name)."""
        report = self.classifier.classify_all(items, now, skip_invalid=skip_invalid)
        report.classifications.sort(key=_display_key)
        return report

    def sort(self, items: Iterable[Item | Mapping[str, Any]], now: datetime) -> list[Item]:
        """Items in display order."""
        return self.rank(items, now).items
