"""Tests for villabook.domain.cashflow pure functions."""

from datetime import date

import pytest

from villabook.domain.cashflow import (
    RecordedActualsSource,
    aggregate,
    default_window,
    extend_projection,
    summarize,
)
from villabook.domain.models import (
    Booking,
    CategoryName,
    DateRange,
    Expense,
    Money,
    Month,
    MonthBucket,
)


def booking(start: date, end: date, amount: int, prepayment: int = 0) -> Booking:
    return Booking(
        date_range=DateRange(start, end),
        guest_name="Guest",
        amount=Money(amount),
        prepayment=Money(prepayment),
    )


def expense(day: date, amount: int, category: str = "Cleaning") -> Expense:
    return Expense(date=day, category=CategoryName(category), amount=Money(amount))


@pytest.fixture
def bookings() -> list[Booking]:
    return [
        booking(date(2024, 5, 30), date(2024, 6, 2), 45000, 15000),  # checks in May, out June
        booking(date(2024, 6, 10), date(2024, 6, 13), 30000, 10000),
        booking(date(2024, 6, 20), date(2024, 6, 22), 20000, 20000),
        booking(date(2024, 8, 1), date(2024, 8, 8), 70000, 0),
        booking(date(2024, 10, 3), date(2024, 10, 5), 25000, 5000),
    ]


@pytest.fixture
def expenses() -> list[Expense]:
    return [
        expense(date(2024, 6, 5), 4000),
        expense(date(2024, 6, 30), 1500, "Utilities"),
        expense(date(2024, 9, 12), 12000, "Repairs"),
        expense(date(2024, 10, 1), 3000),
    ]


class TestAggregate:
    """Tests for aggregate."""

    def test_empty_inputs_three_months(self) -> None:
        """Should return zeroed buckets for every month of the window."""
        window = DateRange(date(2024, 6, 15), date(2024, 8, 10))

        buckets = aggregate([], [], window)

        assert [b.month for b in buckets] == ["2024-06", "2024-07", "2024-08"]
        for bucket in buckets:
            assert bucket.prepaid == 0
            assert bucket.paid == 0
            assert bucket.revenue == 0
            assert bucket.bookings_count == 0
            assert bucket.expenses == 0
            assert bucket.is_projection is False

    def test_reversed_window_is_empty(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should return no buckets when the window starts after it ends."""
        assert aggregate(bookings, expenses, DateRange(date(2024, 8, 1), date(2024, 6, 1))) == []

    def test_single_day_window(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should return one bucket when start equals end."""
        buckets = aggregate(bookings, expenses, DateRange(date(2024, 6, 10), date(2024, 6, 10)))

        assert len(buckets) == 1
        assert buckets[0].revenue == Money(30000)

    def test_attributes_by_check_in_month(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should count a stay in its check-in month, not split across months."""
        buckets = aggregate(bookings, expenses, DateRange(date(2024, 5, 1), date(2024, 6, 30)))
        by_month = {b.month: b for b in buckets}

        assert by_month[Month("2024-05")].revenue == Money(45000)
        assert by_month[Month("2024-05")].bookings_count == 1
        assert by_month[Month("2024-06")].revenue == Money(50000)
        assert by_month[Month("2024-06")].bookings_count == 2

    def test_prepaid_and_paid_split(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should split revenue into prepaid and the remainder."""
        buckets = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 6, 30)))
        june = buckets[0]

        assert june.prepaid == Money(30000)
        assert june.paid == Money(20000)
        assert june.paid == june.revenue - june.prepaid

    def test_expenses_by_month(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should add expenses to the month of their date."""
        buckets = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 10, 31)))
        by_month = {b.month: b.expenses for b in buckets}

        assert by_month == {
            "2024-06": Money(5500),
            "2024-07": Money(0),
            "2024-08": Money(0),
            "2024-09": Money(12000),
            "2024-10": Money(3000),
        }

    def test_window_bounds_are_inclusive_by_day(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should skip records outside the window even inside a bucketed month."""
        window = DateRange(date(2024, 6, 11), date(2024, 6, 30))

        buckets = aggregate(bookings, expenses, window)

        assert len(buckets) == 1
        assert buckets[0].revenue == Money(20000)
        assert buckets[0].expenses == Money(1500)

    def test_revenue_total_matches_bookings_in_window(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should total exactly the amounts of bookings starting in the window."""
        window = DateRange(date(2024, 6, 1), date(2024, 9, 30))

        buckets = aggregate(bookings, expenses, window)
        expected = sum(b.amount for b in bookings if window.start <= b.check_in <= window.end)

        assert sum(b.revenue for b in buckets) == expected

    def test_contiguous_across_years(self) -> None:
        """Should produce one bucket per month with no gaps across a year end."""
        buckets = aggregate([], [], DateRange(date(2023, 11, 30), date(2025, 2, 1)))

        assert len(buckets) == 16
        assert buckets[0].month == "2023-11"
        assert buckets[-1].month == "2025-02"


class TestDefaultWindow:
    """Tests for default_window."""

    def test_no_data(self) -> None:
        """Should return None without records."""
        assert default_window([], []) is None

    def test_spans_check_ins_and_expenses(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should run from the earliest to the latest record date."""
        window = default_window(bookings, expenses)

        assert window == DateRange(date(2024, 5, 30), date(2024, 10, 3))

    def test_bookings_only(self, bookings: list[Booking]) -> None:
        """Should use check-in dates only (not check-out)."""
        assert default_window(bookings) == DateRange(date(2024, 5, 30), date(2024, 10, 3))


class TestSummarize:
    """Tests for summarize."""

    def test_totals(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should total every field and compute net."""
        buckets = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 6, 30)))

        summary = summarize(buckets)

        assert summary.revenue == Money(50000)
        assert summary.prepaid == Money(30000)
        assert summary.paid == Money(20000)
        assert summary.expenses == Money(5500)
        assert summary.net == Money(44500)
        assert summary.bookings_count == 2

    def test_projection_excluded_by_default(self) -> None:
        """Should leave projected buckets out unless asked."""
        buckets = [
            MonthBucket(Month("2024-06"), Money(100), Money(200), Money(300), 1, Money(50)),
            MonthBucket(Month("2024-07"), Money(0), Money(900), Money(900), 1, Money(0), is_projection=True),
        ]

        assert summarize(buckets).revenue == Money(300)
        assert summarize(buckets, include_projection=True).revenue == Money(1200)

    def test_empty(self) -> None:
        """Should return zeros for no buckets."""
        summary = summarize([])

        assert summary.revenue == 0
        assert summary.net == 0


class TestExtendProjection:
    """Tests for extend_projection."""

    def test_zero_horizon_is_noop(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should return the historical series unchanged."""
        historical = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 7, 31)))

        assert extend_projection(historical, 0, bookings, expenses) == historical
        assert extend_projection(historical, -3, bookings, expenses) == historical

    def test_empty_history_is_noop(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should not project from an empty series."""
        assert extend_projection([], 3, bookings, expenses) == []

    def test_appends_recorded_future_months(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should append buckets built from records in the following months."""
        historical = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 7, 31)))

        extended = extend_projection(historical, 3, bookings, expenses)

        assert [b.month for b in extended] == ["2024-06", "2024-07", "2024-08", "2024-09", "2024-10"]
        assert [b.is_projection for b in extended] == [False, False, True, True, True]
        august, september, october = extended[2:]
        assert august.revenue == Money(70000)
        assert august.bookings_count == 1
        assert september.revenue == Money(0)
        assert september.expenses == Money(12000)
        assert october.revenue == Money(25000)
        assert october.prepaid == Money(5000)
        assert october.expenses == Money(3000)

    def test_projected_match_direct_aggregation(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should equal the same month aggregated as history, apart from the flag."""
        historical = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 7, 31)))
        projected = extend_projection(historical, 1, bookings, expenses)[-1]

        (direct,) = aggregate(bookings, expenses, DateRange(date(2024, 8, 1), date(2024, 8, 31)))

        assert projected.revenue == direct.revenue
        assert projected.prepaid == direct.prepaid
        assert projected.expenses == direct.expenses

    def test_does_not_mutate_history(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should return a new list."""
        historical = aggregate(bookings, expenses, DateRange(date(2024, 6, 1), date(2024, 6, 30)))

        extend_projection(historical, 2, bookings, expenses)

        assert len(historical) == 1

    def test_custom_source(self) -> None:
        """Should use a substituted forward source and flag its buckets."""

        class FlatSource:
            def bucket_for(self, month: Month) -> MonthBucket:
                return MonthBucket(month, Money(0), Money(1000), Money(1000), 1, Money(0))

        historical = aggregate([], [], DateRange(date(2024, 11, 1), date(2024, 12, 31)))

        extended = extend_projection(historical, 2, source=FlatSource())

        assert [b.month for b in extended[2:]] == ["2025-01", "2025-02"]
        assert all(b.is_projection and b.revenue == 1000 for b in extended[2:])


class TestRecordedActualsSource:
    """Tests for RecordedActualsSource."""

    def test_single_month_bucket(self, bookings: list[Booking], expenses: list[Expense]) -> None:
        """Should aggregate exactly one calendar month."""
        source = RecordedActualsSource(bookings, expenses)

        bucket = source.bucket_for(Month("2024-06"))

        assert bucket.month == "2024-06"
        assert bucket.revenue == Money(50000)
        assert bucket.expenses == Money(5500)
