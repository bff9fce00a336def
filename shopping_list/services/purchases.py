"""Item lifecycle: adding items to a list and recording purchases."""

import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime, tzinfo

from shopping_list.exceptions import InvalidItem
from shopping_list.schemas.item import Item
from shopping_list.services.dates import add_days, whole_days_between

logger = logging.getLogger(__name__)

# Characters ignored when comparing item names ("Peanut-Butter" keeps its dash)
_IGNORED_NAME_CHARS = re.compile(r"[&/\\#,+$!~%.'\":*?<>{} ]")


def normalize_item_name(name: str) -> str:
    """Normalize an item name for duplicate detection.

    "  Oat Milk! " and "oatmilk" normalize to the same value.
    """
    return _IGNORED_NAME_CHARS.sub("", name.strip().lower())


def find_duplicate(name: str, existing: Iterable[Item | str]) -> Item | str | None:
    """Return the entry in ``existing`` whose name matches ``name``, if any."""
    normalized = normalize_item_name(name)
    for entry in existing:
        entry_name = entry if isinstance(entry, str) else entry.name
        if normalize_item_name(entry_name) == normalized:
            return entry
    return None


def new_item(
    name: str,
    days_until_next_purchase: int,
    now: datetime,
    item_id: str | None = None,
) -> Item:
    """Build the record for an item that has never been purchased."""
    if not name or not name.strip():
        raise InvalidItem("Item name must not be empty")
    if days_until_next_purchase < 0:
        raise InvalidItem(
            f"Days until next purchase must not be negative, got {days_until_next_purchase}"
        )

    return Item(
        id=item_id,
        name=name,
        date_created=now,
        date_last_purchased=None,
        date_next_purchased=add_days(now, days_until_next_purchase),
        total_purchases=0,
    )


def previous_cadence(item: Item, tz: tzinfo = UTC) -> int:
    """Days between the item's reference date and its current next purchase date."""
    reference_date = item.date_last_purchased or item.date_created
    return max(1, whole_days_between(reference_date, item.date_next_purchased, tz))


def record_purchase(
    item: Item,
    now: datetime,
    days_until_next_purchase: int | None = None,
    tz: tzinfo = UTC,
) -> Item:
    """Return the item updated for a purchase made at ``now``.

    Without an explicit cadence the item keeps the one it had before.
    """
    if days_until_next_purchase is None:
        days_until_next_purchase = previous_cadence(item, tz)
    if days_until_next_purchase < 0:
        raise InvalidItem(
            f"Days until next purchase must not be negative, got {days_until_next_purchase}"
        )

    updated = item.model_copy(
        update={
            "date_last_purchased": now,
            "date_next_purchased": add_days(now, days_until_next_purchase),
            "total_purchases": item.total_purchases + 1,
        }
    )
    logger.info(
        f"Recorded purchase of '{item.name}' (total {updated.total_purchases}), "
        f"next purchase in {days_until_next_purchase} days"
    )
    return updated
