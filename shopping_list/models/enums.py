"""Enums for item urgency and purchase cadence."""

from enum import IntEnum, StrEnum


class UrgencyBucket(StrEnum):
    """Urgency tiers, listed from most to least urgent."""

    OVERDUE = "overdue"
    SOON = "soon"
    KIND_OF_SOON = "kindOfSoon"
    NOT_SOON = "notSoon"
    INACTIVE = "inactive"


class PurchaseCadence(IntEnum):
    """Days until the next purchase offered when adding an item."""

    SOON = 7
    KIND_OF_SOON = 14
    NOT_SOON = 30
