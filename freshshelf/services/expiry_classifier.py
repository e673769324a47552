"""Expiry classification for single inventory items.

Maps the number of whole calendar days between "today" and an expiry date to
an urgency status:

- days < 0: expired
- days == 0: today
- 1..5: critical
- 6..10: warning
- more than 10: ok
"""

from datetime import date, tzinfo

from freshshelf.core.clock import to_calendar_date
from freshshelf.core.config import Constants
from freshshelf.domain.inventory import AggregateStatus, ExpiryStatus


URGENT_STATUSES = frozenset({ExpiryStatus.EXPIRED, ExpiryStatus.TODAY, ExpiryStatus.CRITICAL})


def days_until_expiry(expiry_date: object, today: object, *, tz: tzinfo | None = None) -> int:
    """Return whole calendar days from ``today`` to ``expiry_date``.

    Both sides are truncated to a date first, so the result is an exact day
    count unaffected by time-of-day or daylight-saving shifts.

    Raises:
        InvalidDateError: If either value cannot be read as a calendar date
    """
    return (to_calendar_date(expiry_date, tz) - to_calendar_date(today, tz)).days


def status_for_days(days: int) -> ExpiryStatus:
    """Map a day difference to an urgency status."""
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days == 0:
        return ExpiryStatus.TODAY
    if days <= Constants.EXPIRY_CRITICAL_DAYS:
        return ExpiryStatus.CRITICAL
    if days <= Constants.EXPIRY_WARNING_DAYS:
        return ExpiryStatus.WARNING
    return ExpiryStatus.OK


def classify(expiry_date: object, today: object, *, tz: tzinfo | None = None) -> ExpiryStatus:
    """Classify an expiry date relative to ``today``.

    Args:
        expiry_date: Expiry as a date, datetime or ISO-8601 text
        today: Reference day as a date, datetime or ISO-8601 text
        tz: Optional timezone aware datetimes are converted to before truncation

    Returns:
        The item's ExpiryStatus

    Raises:
        InvalidDateError: If either value cannot be read as a calendar date
    """
    return status_for_days(days_until_expiry(expiry_date, today, tz=tz))


def is_urgent(status: ExpiryStatus) -> bool:
    """Return True for statuses that make a category critical."""
    return status in URGENT_STATUSES


def to_aggregate(status: ExpiryStatus) -> AggregateStatus:
    """Collapse an item status onto the three-level category scale."""
    if is_urgent(status):
        return AggregateStatus.CRITICAL
    if status == ExpiryStatus.WARNING:
        return AggregateStatus.WARNING
    return AggregateStatus.OK


def expiry_label(status: ExpiryStatus, expiry_date: date) -> str:
    """Caption shown under an item: "EXPIRED" or "Expires: <date>"."""
    if status == ExpiryStatus.EXPIRED:
        return Constants.EXPIRED_LABEL
    return f"{Constants.EXPIRES_LABEL_PREFIX} {expiry_date.isoformat()}"
