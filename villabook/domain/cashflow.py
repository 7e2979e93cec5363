"""Pure functions for monthly cash-flow aggregation.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from villabook.dates import add_months, iter_months, month_bounds, month_key
from villabook.domain.models import Booking, CashFlowSummary, DateRange, Expense, Money, Month, MonthBucket

logger = logging.getLogger(__name__)


@dataclass
class _MonthTotals:
    """Mutable accumulator for one month while aggregating."""

    prepaid: int = 0
    revenue: int = 0
    bookings_count: int = 0
    expenses: int = 0

    def to_bucket(self, month: Month) -> MonthBucket:
        return MonthBucket(
            month=month,
            prepaid=Money(self.prepaid),
            paid=Money(self.revenue - self.prepaid),
            revenue=Money(self.revenue),
            bookings_count=self.bookings_count,
            expenses=Money(self.expenses),
            is_projection=False,
        )


def aggregate(
    bookings: Iterable[Booking],
    expenses: Iterable[Expense],
    window: DateRange,
) -> list[MonthBucket]:
    """Bucket bookings and expenses into calendar months.

    Every month from window.start's month to window.end's month is present,
    even with no activity. A booking counts in the month of its check-in
    only, and only if the check-in lies inside the window (inclusive). An
    expense counts in the month of its date, if inside the window.

    Args:
        bookings: Booking records.
        expenses: Expense records.
        window: Reporting window, inclusive at both ends.

    Returns:
        Buckets in ascending month order; empty if window.start > window.end.
    """
    if window.start > window.end:
        return []

    totals = {month: _MonthTotals() for month in iter_months(month_key(window.start), month_key(window.end))}

    for booking in bookings:
        if not window.contains(booking.check_in):
            continue
        month_totals = totals[month_key(booking.check_in)]
        month_totals.prepaid += booking.prepayment
        month_totals.revenue += booking.amount
        month_totals.bookings_count += 1

    for expense in expenses:
        if not window.contains(expense.date):
            continue
        totals[month_key(expense.date)].expenses += expense.amount

    return [month_totals.to_bucket(month) for month, month_totals in totals.items()]


def default_window(bookings: Iterable[Booking], expenses: Iterable[Expense] = ()) -> DateRange | None:
    """Window spanning the earliest to the latest recorded date.

    Booking check-ins and expense dates are considered. Returns None when
    there are no records at all.
    """
    dates = [booking.check_in for booking in bookings] + [expense.date for expense in expenses]
    if not dates:
        return None
    return DateRange(start=min(dates), end=max(dates))


def summarize(buckets: Iterable[MonthBucket], include_projection: bool = False) -> CashFlowSummary:
    """Total a bucket series.

    Args:
        buckets: Month buckets.
        include_projection: Whether projected buckets count towards totals.

    Returns:
        CashFlowSummary with net = revenue - expenses.
    """
    counted = [b for b in buckets if include_projection or not b.is_projection]

    revenue = Money(sum(b.revenue for b in counted))
    expenses = Money(sum(b.expenses for b in counted))

    return CashFlowSummary(
        revenue=revenue,
        prepaid=Money(sum(b.prepaid for b in counted)),
        paid=Money(sum(b.paid for b in counted)),
        expenses=expenses,
        net=Money(revenue - expenses),
        bookings_count=sum(b.bookings_count for b in counted),
    )


class ForwardBucketSource(Protocol):
    """Produces the bucket for a month beyond the historical series."""

    def bucket_for(self, month: Month) -> MonthBucket: ...


class RecordedActualsSource:
    """Forward buckets built from bookings and expenses already on record.

    This is a lookup of known future records, not a forecast.
    """

    def __init__(self, bookings: Iterable[Booking], expenses: Iterable[Expense]) -> None:
        self.bookings = list(bookings)
        self.expenses = list(expenses)

    def bucket_for(self, month: Month) -> MonthBucket:
        first, last = month_bounds(month)
        (bucket,) = aggregate(self.bookings, self.expenses, DateRange(start=first, end=last))
        return bucket


def extend_projection(
    historical: Sequence[MonthBucket],
    horizon_months: int,
    bookings: Iterable[Booking] = (),
    expenses: Iterable[Expense] = (),
    source: ForwardBucketSource | None = None,
) -> list[MonthBucket]:
    """Append forward months after a historical series.

    Args:
        historical: Buckets from aggregate, in ascending order.
        horizon_months: Number of months to append.
        bookings: Records used by the default source.
        expenses: Records used by the default source.
        source: Alternative producer of forward buckets.

    Returns:
        historical unchanged when horizon_months <= 0 or historical is
        empty; otherwise historical followed by exactly horizon_months
        buckets flagged as projections.
    """
    if horizon_months <= 0 or not historical:
        return list(historical)

    if source is None:
        source = RecordedActualsSource(bookings, expenses)

    last_month = historical[-1].month
    extended = list(historical)
    for offset in range(1, horizon_months + 1):
        month = add_months(last_month, offset)
        extended.append(replace(source.bucket_for(month), month=month, is_projection=True))

    logger.debug("Extended %d historical months with %d projected months", len(historical), horizon_months)
    return extended
