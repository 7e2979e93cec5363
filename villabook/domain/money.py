"""Money conversion and formatting helpers.

All stored amounts are in cents (Money type); user input and display use
major units.
"""

from villabook.domain.models import Money


def to_cents(amount: float) -> Money:
    """Convert a major-unit amount (e.g. 12.5) to cents."""
    return Money(round(amount * 100))


def format_decimal(amount: Money) -> str:
    """Format cents as a plain decimal string (e.g. "1234.50")."""
    sign = "-" if amount < 0 else ""
    whole, cents = divmod(abs(amount), 100)
    return f"{sign}{whole}.{cents:02d}"


def format_money(amount: Money, currency: str = "$") -> str:
    """Format money amount for display.

    Args:
        amount: Amount in cents.
        currency: Currency symbol to prefix.

    Returns:
        Formatted string (e.g., "$1,234.50" or "-$12.00").
    """
    formatted = f"{currency}{abs(amount) / 100:,.2f}"
    if amount < 0:
        return f"-{formatted}"
    return formatted
