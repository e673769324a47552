"""Clock suppliers and calendar-date normalization."""

from datetime import date, datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo

from freshshelf.core.config import settings
from freshshelf.core.errors import InvalidDateError


class Clock(Protocol):
    """Supplies "today" as a date-only value."""

    def today(self) -> date:
        """Return the current calendar date."""
        ...


class SystemClock:
    """Clock reading the wall time in the shop's operating timezone."""

    def __init__(self, timezone: str | None = None) -> None:
        self._zone = ZoneInfo(timezone or settings.shop_timezone)

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    def today(self) -> date:
        return datetime.now(self._zone).date()


class FixedClock:
    """Clock pinned to a single day, for tests and replays."""

    def __init__(self, day: date | str) -> None:
        self._day = to_calendar_date(day)

    def today(self) -> date:
        return self._day


def to_calendar_date(value: object, tz: tzinfo | None = None) -> date:
    """Normalize a date-like value to a plain calendar date.

    Accepts ``date``, ``datetime`` and ISO-8601 text in either date or datetime
    form. Time-of-day is discarded. Timezone-aware datetimes are first converted
    to ``tz`` when one is given, so both sides of a comparison land on the same
    calendar.

    Args:
        value: Value to normalize
        tz: Optional timezone to convert aware datetimes into

    Returns:
        The calendar date

    Raises:
        InvalidDateError: If the value cannot be read as a calendar date
    """
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDateError(value)
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return to_calendar_date(datetime.fromisoformat(text), tz)
        except ValueError as e:
            raise InvalidDateError(value) from e

    raise InvalidDateError(value)
