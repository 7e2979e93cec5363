"""Tabular export of month buckets and bookings.

The cash-flow column order is fixed: Month, Type, Bookings, Prepayment,
Total Amount, Expenses.
"""

from collections.abc import Iterable

from villabook.domain.models import Booking, MonthBucket
from villabook.domain.money import format_decimal

CSV_HEADER = ("Month", "Type", "Bookings", "Prepayment", "Total Amount", "Expenses")


def bucket_type(bucket: MonthBucket) -> str:
    return "Projection" if bucket.is_projection else "Historical"


def cashflow_rows(buckets: Iterable[MonthBucket]) -> list[list[str]]:
    """Convert buckets to CSV rows, header first.

    Amounts are rendered in major units with two decimals.
    """
    rows = [list(CSV_HEADER)]
    for bucket in buckets:
        rows.append(
            [
                bucket.month,
                bucket_type(bucket),
                str(bucket.bookings_count),
                format_decimal(bucket.prepaid),
                format_decimal(bucket.revenue),
                format_decimal(bucket.expenses),
            ]
        )
    return rows


BOOKING_CSV_HEADER = (
    "ID",
    "Check-in",
    "Check-out",
    "Guest",
    "Phone",
    "Total Amount",
    "Prepayment",
    "Notes",
)


def booking_rows(bookings: Iterable[Booking]) -> list[list[str]]:
    """Convert bookings to CSV rows, header first."""
    rows = [list(BOOKING_CSV_HEADER)]
    for booking in bookings:
        rows.append(
            [
                str(booking.id),
                booking.check_in.isoformat(),
                booking.check_out.isoformat(),
                booking.guest_name,
                booking.guest_phone,
                format_decimal(booking.amount),
                format_decimal(booking.prepayment),
                booking.notes,
            ]
        )
    return rows
