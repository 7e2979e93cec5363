"""Booking conflict detection.

Stays are half-open [check-in, check-out), so a guest checking out on a
day and another checking in on the same day do not conflict.
"""

from collections.abc import Iterable

from villabook.domain.models import Booking, BookingId, DateRange


def overlaps(a: DateRange, b: DateRange) -> bool:
    """Half-open interval overlap test.

    Args:
        a: First stay range.
        b: Second stay range.

    Returns:
        True if each range starts strictly before the other ends.
    """
    return a.start < b.end and a.end > b.start


def find_conflicts(
    candidate: Booking,
    existing: Iterable[Booking],
    exclude_id: BookingId | None = None,
) -> list[Booking]:
    """Find bookings whose stay overlaps the candidate's.

    Args:
        candidate: Booking being created or edited.
        existing: Bookings already on record.
        exclude_id: Booking id to skip (the booking being edited).

    Returns:
        Conflicting bookings, in the order given.
    """
    return [
        booking
        for booking in existing
        if not (exclude_id is not None and booking.id == exclude_id)
        and overlaps(candidate.date_range, booking.date_range)
    ]


def has_conflict(
    candidate: Booking,
    existing: Iterable[Booking],
    exclude_id: BookingId | None = None,
) -> bool:
    """Check whether any existing booking overlaps the candidate.

    The verdict is advisory: the caller decides whether to block the save.
    """
    return any(
        overlaps(candidate.date_range, booking.date_range)
        for booking in existing
        if not (exclude_id is not None and booking.id == exclude_id)
    )
