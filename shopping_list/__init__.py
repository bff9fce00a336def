"""Household shopping list urgency engine."""

__version__ = "0.1.0"
