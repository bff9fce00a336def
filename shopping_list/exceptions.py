"""Errors raised by the urgency engine."""


class UrgencyError(Exception):
    """Base class for urgency engine errors."""


class InvalidItem(UrgencyError, ValueError):
    """An item record is missing a field or carries a malformed date."""


class UnclassifiableItem(UrgencyError):
    """An urgency score matched none of the bucket ranges."""

    def __init__(self, name: str, score: object):
        super().__init__(f"Failed to place [{name}] with urgency score {score!r}")
        self.name = name
        self.score = score
