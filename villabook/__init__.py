"""villabook - villa rental bookings, seasonal pricing and cash flow."""

__version__ = "0.1.0"
