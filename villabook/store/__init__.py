"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from villabook.store.queries import (
    delete_booking,
    delete_expense,
    delete_seasonal_rule,
    get_booking,
    get_bookings,
    get_expenses,
    get_seasonal_rules,
    insert_booking,
    insert_expense,
    save_seasonal_rule,
    update_booking,
)
from villabook.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_booking",
    "delete_expense",
    "delete_seasonal_rule",
    "get_booking",
    "get_bookings",
    "get_expenses",
    "get_seasonal_rules",
    "insert_booking",
    "insert_expense",
    "save_seasonal_rule",
    "update_booking",
]
