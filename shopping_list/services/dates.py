"""Calendar-day arithmetic for purchase dates."""

from datetime import UTC, date, datetime, timedelta, tzinfo

from shopping_list.exceptions import InvalidItem

DateLike = date | datetime


def calendar_date(value: DateLike, tz: tzinfo = UTC) -> date:
    """Return the calendar date of ``value`` as seen in ``tz``.

    Naive datetimes are taken to be UTC. Plain dates are already calendar dates
    and are returned unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(tz).date()
    if isinstance(value, date):
        return value
    raise InvalidItem(f"Expected a date or datetime, got {type(value).__name__}: {value!r}")


def add_days(value: DateLike, days: int) -> DateLike:
    """Return ``value`` moved ``days`` calendar days forward (backward if negative)."""
    if not isinstance(value, date):
        raise InvalidItem(f"Expected a date or datetime, got {type(value).__name__}: {value!r}")
    return value + timedelta(days=days)


def whole_days_between(start: DateLike, end: DateLike, tz: tzinfo = UTC) -> int:
    """Signed number of calendar days from ``start`` to ``end``.

    Both values are truncated to their calendar date in ``tz`` before
    differencing, so 23:59 on one day and 00:01 the next are one day apart.
    """
    return (calendar_date(end, tz) - calendar_date(start, tz)).days
