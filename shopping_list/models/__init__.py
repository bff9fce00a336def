"""Domain enums shared by services, schemas and the API."""

from shopping_list.models.enums import PurchaseCadence, UrgencyBucket

__all__ = [
    "PurchaseCadence",
    "UrgencyBucket",
]
