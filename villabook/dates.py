"""Date utilities for villabook.

Pure functions for nights, weekdays and calendar month arithmetic.
"""

from collections.abc import Iterator
from datetime import date, datetime, timedelta

from villabook.domain.models import Month


def weekday_index(day: date) -> int:
    """Weekday ordinal with Sunday=0 ... Saturday=6."""
    return (day.weekday() + 1) % 7


def iter_nights(start: date, end: date) -> Iterator[date]:
    """Yield every night from start (inclusive) to end (exclusive).

    Yields nothing when end <= start.
    """
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def month_key(day: date) -> Month:
    """Month key (YYYY-MM) for a date."""
    return Month(f"{day.year:04d}-{day.month:02d}")


def parse_month(month: Month) -> date:
    """First day of a YYYY-MM month.

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    return datetime.strptime(month, "%Y-%m").date()


def add_months(month: Month, count: int) -> Month:
    """Shift a month key by count months (may be negative)."""
    first = parse_month(month)
    index = first.year * 12 + (first.month - 1) + count
    year, month_zero = divmod(index, 12)
    return Month(f"{year:04d}-{month_zero + 1:02d}")


def month_bounds(month: Month) -> tuple[date, date]:
    """First and last day of a month, both inclusive."""
    first = parse_month(month)
    next_first = parse_month(add_months(month, 1))
    return first, next_first - timedelta(days=1)


def iter_months(first: Month, last: Month) -> Iterator[Month]:
    """Yield every month key from first to last inclusive.

    Yields nothing when first is after last.
    """
    current = first
    while current <= last:
        yield current
        current = add_months(current, 1)


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "June 2024")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label
