"""Pytest configuration and fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from shopping_list.config import Settings, get_settings
from shopping_list.main import app
from shopping_list.schemas.item import Item
from shopping_list.services.urgency import UrgencyClassifier, UrgencyRanker


@pytest.fixture
def now():
    """Fixed reference instant: midday UTC on 2024-06-01."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_item(now):
    """Factory for items relative to ``now``.

    ``next_in`` / ``last_ago`` / ``created_ago`` are day offsets; absolute
    datetimes can be passed through the keyword overrides instead.
    """

    def _make_item(
        name: str = "milk",
        next_in: int = 10,
        last_ago: int | None = None,
        created_ago: int = 5,
        **overrides,
    ) -> Item:
        fields = {
            "name": name,
            "date_created": now - timedelta(days=created_ago),
            "date_last_purchased": (
                now - timedelta(days=last_ago) if last_ago is not None else None
            ),
            "date_next_purchased": now + timedelta(days=next_in),
            "total_purchases": 0 if last_ago is None else 1,
        }
        fields.update(overrides)
        return Item(**fields)

    return _make_item


@pytest.fixture
def classifier():
    """Classifier counting calendar days in UTC."""
    return UrgencyClassifier(tz=UTC)


@pytest.fixture
def ranker(classifier):
    """Ranker built on the UTC classifier."""
    return UrgencyRanker(classifier)


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, environment="test", calendar_timezone="UTC")


@pytest.fixture
def client(test_settings):
    """Create a test client with settings override."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
