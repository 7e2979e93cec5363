"""Validation errors raised by the domain core.

All of them derive from ValueError. Booking conflicts are not errors;
they are reported as a boolean.
"""

from datetime import date

from villabook.domain.models import DateRange, SeasonalPriceRule


class VillabookError(ValueError):
    """Base class for villabook validation errors."""


class InvalidRangeError(VillabookError):
    """End date is not after the start date."""

    def __init__(self, date_range: DateRange, subject: str = "date range") -> None:
        self.date_range = date_range
        super().__init__(
            f"Invalid {subject}: end {date_range.end.isoformat()} must be after start {date_range.start.isoformat()}"
        )


class OverlapError(VillabookError):
    """Seasonal rule range intersects an existing rule."""

    def __init__(self, rule: SeasonalPriceRule, existing: SeasonalPriceRule) -> None:
        self.rule = rule
        self.existing = existing
        existing_range = existing.date_range
        super().__init__(
            "Dates overlap with an existing pricing period "
            f"({existing_range.start.isoformat()} to {existing_range.end.isoformat()})"
        )


class InvalidPriceError(VillabookError):
    """Negative price or amount, or prepayment outside [0, amount]."""


class PricingGapError(VillabookError):
    """Some nights of a stay are not covered by any seasonal rule."""

    def __init__(self, nights: list[date]) -> None:
        self.nights = nights
        shown = ", ".join(night.isoformat() for night in nights[:5])
        more = f" (+{len(nights) - 5} more)" if len(nights) > 5 else ""
        super().__init__(f"No seasonal price for {len(nights)} night(s): {shown}{more}")
