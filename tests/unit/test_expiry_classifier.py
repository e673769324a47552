"""Unit tests for expiry classification."""

from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from freshshelf.core.errors import InvalidDateError
from freshshelf.domain.inventory import AggregateStatus, ExpiryStatus
from freshshelf.services.expiry_classifier import (
    classify,
    days_until_expiry,
    expiry_label,
    is_urgent,
    to_aggregate,
)


TODAY = date(2024, 1, 10)


@pytest.mark.unit
class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (-30, ExpiryStatus.EXPIRED),
            (-1, ExpiryStatus.EXPIRED),
            (0, ExpiryStatus.TODAY),
            (1, ExpiryStatus.CRITICAL),
            (5, ExpiryStatus.CRITICAL),
            (6, ExpiryStatus.WARNING),
            (10, ExpiryStatus.WARNING),
            (11, ExpiryStatus.OK),
            (365, ExpiryStatus.OK),
        ],
    )
    def test_day_boundaries(self, days, expected):
        """Test each status band and its exact boundaries."""
        assert classify(TODAY + timedelta(days=days), TODAY) == expected

    def test_time_of_day_is_ignored(self):
        """Test late-evening reference and early-morning expiry still count whole days."""
        expiry = datetime(2024, 1, 15, 0, 5)
        now = datetime(2024, 1, 10, 23, 55)

        assert days_until_expiry(expiry, now) == 5
        assert classify(expiry, now) == ExpiryStatus.CRITICAL

    def test_same_day_with_time_is_today(self):
        """Test an expiry earlier in the same day is still 'today', not expired."""
        assert classify(datetime(2024, 1, 10, 1, 0), datetime(2024, 1, 10, 18, 0)) == ExpiryStatus.TODAY

    def test_iso_text_inputs(self):
        """Test ISO date and datetime strings are accepted."""
        assert classify("2024-01-09", "2024-01-10") == ExpiryStatus.EXPIRED
        assert classify("2024-01-16T08:30:00", "2024-01-10") == ExpiryStatus.WARNING

    def test_across_daylight_saving_change(self):
        """Test day counts across a DST switch are exact calendar days."""
        # Europe/Berlin switches to summer time on 2024-03-31
        assert days_until_expiry(date(2024, 4, 5), date(2024, 3, 30)) == 6
        assert classify(date(2024, 4, 5), date(2024, 3, 30)) == ExpiryStatus.WARNING

    def test_aware_datetimes_normalized_to_zone(self):
        """Test aware datetimes are converted to the shop zone before truncation."""
        zone = ZoneInfo("America/New_York")
        # 02:00 UTC on the 11th is still the 10th in New York
        expiry = datetime(2024, 1, 11, 2, 0, tzinfo=UTC)

        assert classify(expiry, TODAY, tz=zone) == ExpiryStatus.TODAY
        assert classify(expiry, TODAY) == ExpiryStatus.CRITICAL

    def test_aware_datetime_other_offset(self):
        """Test a fixed-offset datetime is handled like any aware value."""
        expiry = datetime(2024, 1, 20, 23, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert days_until_expiry(expiry, TODAY, tz=UTC) == 11

    @pytest.mark.parametrize("bad_value", ["", "   ", "not a date", "2024-13-01", "2024-02-30", None, 20240101])
    def test_invalid_expiry_raises(self, bad_value):
        """Test unreadable expiry values raise InvalidDateError."""
        with pytest.raises(InvalidDateError):
            classify(bad_value, TODAY)

    def test_invalid_reference_day_raises(self):
        """Test an unreadable reference day raises InvalidDateError."""
        with pytest.raises(InvalidDateError):
            classify(TODAY, "yesterday")

    def test_invalid_date_error_is_value_error(self):
        """Test InvalidDateError can be caught as ValueError and keeps the value."""
        with pytest.raises(ValueError, match="Invalid date") as exc_info:
            classify("soon", TODAY)

        assert exc_info.value.value == "soon"


@pytest.mark.unit
class TestStatusHelpers:
    """Tests for status helper functions."""

    @pytest.mark.parametrize(
        ("status", "urgent", "aggregate"),
        [
            (ExpiryStatus.EXPIRED, True, AggregateStatus.CRITICAL),
            (ExpiryStatus.TODAY, True, AggregateStatus.CRITICAL),
            (ExpiryStatus.CRITICAL, True, AggregateStatus.CRITICAL),
            (ExpiryStatus.WARNING, False, AggregateStatus.WARNING),
            (ExpiryStatus.OK, False, AggregateStatus.OK),
        ],
    )
    def test_urgency_and_aggregate_mapping(self, status, urgent, aggregate):
        """Test how item statuses collapse onto the category scale."""
        assert is_urgent(status) is urgent
        assert to_aggregate(status) == aggregate

    def test_expired_label(self):
        """Test expired items are captioned EXPIRED."""
        assert expiry_label(ExpiryStatus.EXPIRED, date(2024, 1, 1)) == "EXPIRED"

    def test_expires_label(self):
        """Test other items show their expiry date."""
        assert expiry_label(ExpiryStatus.TODAY, TODAY) == "Expires: 2024-01-10"
        assert expiry_label(ExpiryStatus.OK, date(2024, 3, 1)) == "Expires: 2024-03-01"
