"""Domain type definitions for villabook.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- Month: Month in YYYY-MM format
- BookingId / RuleId / ExpenseId: Storage identifiers
- CategoryName: Name of an expense category

The dataclasses are immutable snapshots of stored records. Date range
semantics differ per entity and are stated on each one.
"""

from dataclasses import dataclass
from datetime import date
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2024-06")
Month = NewType("Month", str)

BookingId = NewType("BookingId", int)
RuleId = NewType("RuleId", int)
ExpenseId = NewType("ExpenseId", int)

# Expense category (e.g., "Cleaning")
CategoryName = NewType("CategoryName", str)

# Price attribute names indexed by weekday, Sunday=0 ... Saturday=6
WEEKDAY_PRICE_FIELDS = (
    "sunday_price",
    "monday_price",
    "tuesday_price",
    "wednesday_price",
    "thursday_price",
    "friday_price",
    "saturday_price",
)


@dataclass(frozen=True)
class DateRange:
    """Immutable pair of dates.

    Whether ``end`` is included depends on the owner: seasonal rules and
    report windows include it, booking stays do not.
    """

    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of days between start and end (negative if reversed)."""
        return (self.end - self.start).days

    def is_empty(self) -> bool:
        """True when the range has no positive length."""
        return self.end <= self.start

    def contains(self, day: date) -> bool:
        """Inclusive membership test: start <= day <= end."""
        return self.start <= day <= self.end

    def intersects(self, other: "DateRange") -> bool:
        """Inclusive intersection test, used for seasonal rules."""
        return self.start <= other.end and self.end >= other.start


@dataclass(frozen=True)
class SeasonalPriceRule:
    """Immutable seasonal rate card.

    The date range is inclusive at both ends. Prices are per night, in cents.
    """

    date_range: DateRange
    monday_price: Money = Money(0)
    tuesday_price: Money = Money(0)
    wednesday_price: Money = Money(0)
    thursday_price: Money = Money(0)
    friday_price: Money = Money(0)
    saturday_price: Money = Money(0)
    sunday_price: Money = Money(0)
    id: RuleId | None = None

    def price_for_weekday(self, weekday: int) -> Money:
        """Get the nightly price for a weekday index (Sunday=0 ... Saturday=6)."""
        return getattr(self, WEEKDAY_PRICE_FIELDS[weekday])


@dataclass(frozen=True)
class Booking:
    """Immutable booking record.

    The stay is half-open: [check-in, check-out). The check-out night is
    not billed.
    """

    date_range: DateRange
    guest_name: str
    amount: Money
    prepayment: Money = Money(0)
    guest_phone: str = ""
    notes: str = ""
    checkin_time: str | None = None
    checkout_time: str | None = None
    id: BookingId | None = None

    @property
    def check_in(self) -> date:
        return self.date_range.start

    @property
    def check_out(self) -> date:
        return self.date_range.end

    @property
    def nights(self) -> int:
        return max(self.date_range.days, 0)

    @property
    def balance_due(self) -> Money:
        """Amount still to be paid after the prepayment."""
        return Money(self.amount - self.prepayment)


@dataclass(frozen=True)
class Expense:
    """Immutable expense record, bucketed by the month of its date."""

    date: date
    category: CategoryName
    amount: Money
    description: str = ""
    id: ExpenseId | None = None


@dataclass(frozen=True)
class MonthBucket:
    """Immutable financial summary for one calendar month.

    Derived on every aggregation call and never persisted.
    """

    month: Month
    prepaid: Money
    paid: Money
    revenue: Money
    bookings_count: int
    expenses: Money
    is_projection: bool = False


@dataclass(frozen=True)
class CashFlowSummary:
    """Immutable totals over a series of month buckets."""

    revenue: Money
    prepaid: Money
    paid: Money
    expenses: Money
    net: Money
    bookings_count: int
