"""Validation for records before they reach the store.

Every function raises before the caller mutates or persists anything.
"""

from villabook.domain.errors import InvalidPriceError, InvalidRangeError
from villabook.domain.models import WEEKDAY_PRICE_FIELDS, Booking, DateRange, Expense, SeasonalPriceRule


def validate_range(date_range: DateRange, subject: str = "date range") -> None:
    """Require end > start.

    Raises:
        InvalidRangeError: If end <= start.
    """
    if date_range.is_empty():
        raise InvalidRangeError(date_range, subject)


def validate_rule(rule: SeasonalPriceRule) -> None:
    """Validate a seasonal rule's range and weekday prices.

    Raises:
        InvalidRangeError: If the range ends on or before its start.
        InvalidPriceError: If any weekday price is negative.
    """
    validate_range(rule.date_range, "pricing period")

    negative = [name for name in WEEKDAY_PRICE_FIELDS if getattr(rule, name) < 0]
    if negative:
        days = ", ".join(name.removesuffix("_price").capitalize() for name in negative)
        raise InvalidPriceError(f"Prices cannot be negative ({days})")


def validate_booking(booking: Booking) -> None:
    """Validate a booking's stay and payment figures.

    The amount is taken as given: it may be a computed quote or a manual
    override.

    Raises:
        InvalidRangeError: If check-out is not after check-in.
        InvalidPriceError: If amount or prepayment is negative, or the
            prepayment exceeds the amount.
    """
    validate_range(booking.date_range, "stay")

    if booking.amount < 0:
        raise InvalidPriceError("Amount cannot be negative")
    if booking.prepayment < 0:
        raise InvalidPriceError("Prepayment amount cannot be negative")
    if booking.prepayment > booking.amount:
        raise InvalidPriceError("Prepayment cannot be greater than total amount")


def validate_expense(expense: Expense) -> None:
    """Validate an expense amount.

    Raises:
        InvalidPriceError: If the amount is negative.
    """
    if expense.amount < 0:
        raise InvalidPriceError("Expense amount cannot be negative")
