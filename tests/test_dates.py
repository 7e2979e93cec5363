"""Tests for villabook.dates pure functions."""

from datetime import date

import pytest

from villabook.dates import (
    add_months,
    iter_months,
    iter_nights,
    month_bounds,
    month_key,
    month_range,
    weekday_index,
)
from villabook.domain.models import Month


class TestWeekdayIndex:
    """Tests for weekday_index."""

    def test_sunday_is_zero(self) -> None:
        """Should number Sunday as 0."""
        assert weekday_index(date(2024, 6, 9)) == 0

    def test_monday_is_one(self) -> None:
        """Should number Monday as 1."""
        assert weekday_index(date(2024, 6, 10)) == 1

    def test_saturday_is_six(self) -> None:
        """Should number Saturday as 6."""
        assert weekday_index(date(2024, 6, 15)) == 6


class TestIterNights:
    """Tests for iter_nights."""

    def test_excludes_end_date(self) -> None:
        """Should yield start up to, but not including, end."""
        nights = list(iter_nights(date(2024, 6, 10), date(2024, 6, 13)))

        assert nights == [date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)]

    def test_crosses_month_boundary(self) -> None:
        """Should walk across month ends."""
        nights = list(iter_nights(date(2024, 2, 28), date(2024, 3, 2)))

        assert nights == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    def test_empty_when_end_equals_start(self) -> None:
        """Should yield nothing for a zero-length range."""
        assert list(iter_nights(date(2024, 6, 10), date(2024, 6, 10))) == []

    def test_empty_when_reversed(self) -> None:
        """Should yield nothing when end is before start."""
        assert list(iter_nights(date(2024, 6, 13), date(2024, 6, 10))) == []


class TestMonthArithmetic:
    """Tests for month_key, add_months, month_bounds and iter_months."""

    def test_month_key_pads_month(self) -> None:
        """Should format as YYYY-MM."""
        assert month_key(date(2024, 3, 31)) == "2024-03"

    def test_add_months_forward_across_year(self) -> None:
        """Should roll over into the next year."""
        assert add_months(Month("2024-11"), 3) == "2025-02"

    def test_add_months_backward_across_year(self) -> None:
        """Should roll back into the previous year."""
        assert add_months(Month("2024-01"), -1) == "2023-12"

    def test_month_bounds_leap_february(self) -> None:
        """Should end February 2024 on the 29th."""
        assert month_bounds(Month("2024-02")) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_month_bounds_december(self) -> None:
        """Should end December on the 31st."""
        assert month_bounds(Month("2024-12")) == (date(2024, 12, 1), date(2024, 12, 31))

    def test_iter_months_inclusive(self) -> None:
        """Should include both ends."""
        months = list(iter_months(Month("2024-11"), Month("2025-02")))

        assert months == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_iter_months_single(self) -> None:
        """Should yield one month when first equals last."""
        assert list(iter_months(Month("2024-06"), Month("2024-06"))) == ["2024-06"]

    def test_iter_months_reversed_is_empty(self) -> None:
        """Should yield nothing when first is after last."""
        assert list(iter_months(Month("2024-06"), Month("2024-05"))) == []


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(Month("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(Month("2025-12"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, label = month_range(Month("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"
        assert label == "February 2024"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(Month("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))
