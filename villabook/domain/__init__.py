"""Domain models and types for villabook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from villabook.domain.models import (
    Booking,
    BookingId,
    CashFlowSummary,
    CategoryName,
    DateRange,
    Expense,
    ExpenseId,
    Money,
    Month,
    MonthBucket,
    RuleId,
    SeasonalPriceRule,
)

__all__ = [
    "Booking",
    "BookingId",
    "CashFlowSummary",
    "CategoryName",
    "DateRange",
    "Expense",
    "ExpenseId",
    "Money",
    "Month",
    "MonthBucket",
    "RuleId",
    "SeasonalPriceRule",
]
