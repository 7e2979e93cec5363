"""Database query functions.

Rows are converted to the immutable domain records on the way out.
Callers validate records before passing them in.
"""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Any

from villabook.domain.models import (
    Booking,
    BookingId,
    CategoryName,
    DateRange,
    Expense,
    ExpenseId,
    Money,
    RuleId,
    SeasonalPriceRule,
)
from villabook.store.schema import get_db_path

logger = logging.getLogger(__name__)

BOOKING_SORT_COLUMNS = {
    "date": "start_date",
    "name": "guest_name",
    "amount": "amount",
}

_BOOKING_COLUMNS = (
    "id, start_date, end_date, checkin_time, checkout_time, guest_name, guest_phone, amount, prepayment, notes"
)

_RULE_COLUMNS = (
    "id, start_date, end_date, monday_price, tuesday_price, wednesday_price, "
    "thursday_price, friday_price, saturday_price, sunday_price"
)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _booking_from_row(row: sqlite3.Row) -> Booking:
    return Booking(
        id=BookingId(row["id"]),
        date_range=DateRange(date.fromisoformat(row["start_date"]), date.fromisoformat(row["end_date"])),
        guest_name=row["guest_name"],
        guest_phone=row["guest_phone"],
        amount=Money(row["amount"]),
        prepayment=Money(row["prepayment"]),
        notes=row["notes"],
        checkin_time=row["checkin_time"],
        checkout_time=row["checkout_time"],
    )


def _rule_from_row(row: sqlite3.Row) -> SeasonalPriceRule:
    return SeasonalPriceRule(
        id=RuleId(row["id"]),
        date_range=DateRange(date.fromisoformat(row["start_date"]), date.fromisoformat(row["end_date"])),
        monday_price=Money(row["monday_price"]),
        tuesday_price=Money(row["tuesday_price"]),
        wednesday_price=Money(row["wednesday_price"]),
        thursday_price=Money(row["thursday_price"]),
        friday_price=Money(row["friday_price"]),
        saturday_price=Money(row["saturday_price"]),
        sunday_price=Money(row["sunday_price"]),
    )


def _expense_from_row(row: sqlite3.Row) -> Expense:
    return Expense(
        id=ExpenseId(row["id"]),
        date=date.fromisoformat(row["date"]),
        category=CategoryName(row["category"]),
        amount=Money(row["amount"]),
        description=row["description"],
    )


def _booking_params(booking: Booking) -> tuple[Any, ...]:
    return (
        booking.check_in.isoformat(),
        booking.check_out.isoformat(),
        booking.checkin_time,
        booking.checkout_time,
        booking.guest_name,
        booking.guest_phone,
        booking.amount,
        booking.prepayment,
        booking.notes,
    )


def insert_booking(booking: Booking, db_path: Path | None = None) -> BookingId:
    """Insert a booking.

    Args:
        booking: Validated booking (its id is ignored).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new booking.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO bookings (
                    start_date, end_date, checkin_time, checkout_time,
                    guest_name, guest_phone, amount, prepayment, notes
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                _booking_params(booking),
            )
            conn.commit()
            booking_id = BookingId(cursor.lastrowid or 0)
            logger.debug("Inserted booking %s for %s", booking_id, booking.guest_name)
            return booking_id
        except sqlite3.Error:
            conn.rollback()
            raise


def update_booking(booking: Booking, db_path: Path | None = None) -> bool:
    """Update a stored booking.

    Args:
        booking: Validated booking with id set.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was updated, False if the id is unknown.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE bookings SET
                    start_date = ?, end_date = ?, checkin_time = ?, checkout_time = ?,
                    guest_name = ?, guest_phone = ?, amount = ?, prepayment = ?, notes = ?
                WHERE id = ?
                """,
                (*_booking_params(booking), booking.id),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_booking(booking_id: BookingId, db_path: Path | None = None) -> bool:
    """Delete a booking.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM bookings WHERE id = ?", (booking_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_booking(booking_id: BookingId, db_path: Path | None = None) -> Booking | None:
    """Get a booking by id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE id = ?", (booking_id,))
        row = cursor.fetchone()
        return _booking_from_row(row) if row else None


def get_bookings(
    db_path: Path | None = None,
    since_date: str | None = None,
    until_date: str | None = None,
    sort_by: str = "date",
    descending: bool = False,
) -> list[Booking]:
    """Get bookings, optionally filtered and sorted.

    Args:
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional earliest check-in (YYYY-MM-DD, inclusive).
        until_date: Optional latest check-out (YYYY-MM-DD, inclusive).
        sort_by: "date", "name" or "amount".
        descending: Sort order.

    Returns:
        List of bookings.

    Raises:
        ValueError: If sort_by is not a known column.
        sqlite3.Error: If database operation fails.
    """
    if sort_by not in BOOKING_SORT_COLUMNS:
        raise ValueError(f"Cannot sort bookings by '{sort_by}' (use date, name or amount)")

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE 1 = 1"
        params: list[Any] = []

        if since_date:
            query += " AND start_date >= ?"
            params.append(since_date)
        if until_date:
            query += " AND end_date <= ?"
            params.append(until_date)

        order = "DESC" if descending else "ASC"
        query += f" ORDER BY {BOOKING_SORT_COLUMNS[sort_by]} {order}, id {order}"

        cursor.execute(query, params)
        return [_booking_from_row(row) for row in cursor.fetchall()]


def save_seasonal_rule(rule: SeasonalPriceRule, db_path: Path | None = None) -> RuleId:
    """Insert a seasonal rule, or update it when its id is set.

    Args:
        rule: Rule already accepted by a SeasonalPriceTable.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the stored rule.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    params = (
        rule.date_range.start.isoformat(),
        rule.date_range.end.isoformat(),
        rule.monday_price,
        rule.tuesday_price,
        rule.wednesday_price,
        rule.thursday_price,
        rule.friday_price,
        rule.saturday_price,
        rule.sunday_price,
    )

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            if rule.id is None:
                cursor.execute(
                    """
                    INSERT INTO seasonal_prices (
                        start_date, end_date, monday_price, tuesday_price, wednesday_price,
                        thursday_price, friday_price, saturday_price, sunday_price
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    params,
                )
                rule_id = RuleId(cursor.lastrowid or 0)
            else:
                cursor.execute(
                    """
                    UPDATE seasonal_prices SET
                        start_date = ?, end_date = ?, monday_price = ?, tuesday_price = ?,
                        wednesday_price = ?, thursday_price = ?, friday_price = ?,
                        saturday_price = ?, sunday_price = ?
                    WHERE id = ?
                    """,
                    (*params, rule.id),
                )
                rule_id = rule.id
            conn.commit()
            return rule_id
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_seasonal_rule(rule_id: RuleId, db_path: Path | None = None) -> bool:
    """Delete a seasonal rule.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM seasonal_prices WHERE id = ?", (rule_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_seasonal_rules(db_path: Path | None = None) -> list[SeasonalPriceRule]:
    """Get all seasonal rules ordered by start date.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_RULE_COLUMNS} FROM seasonal_prices ORDER BY start_date ASC, id ASC")
        return [_rule_from_row(row) for row in cursor.fetchall()]


def insert_expense(expense: Expense, db_path: Path | None = None) -> ExpenseId:
    """Insert an expense.

    Returns:
        ID of the new expense.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO expenses (date, category, amount, description) VALUES (?, ?, ?, ?)",
                (expense.date.isoformat(), expense.category, expense.amount, expense.description),
            )
            conn.commit()
            return ExpenseId(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_expense(expense_id: ExpenseId, db_path: Path | None = None) -> bool:
    """Delete an expense.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_expenses(
    db_path: Path | None = None,
    since_date: str | None = None,
    until_date: str | None = None,
    category: CategoryName | None = None,
) -> list[Expense]:
    """Get expenses ordered by date.

    Args:
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional start date (YYYY-MM-DD, inclusive).
        until_date: Optional end date (YYYY-MM-DD, inclusive).
        category: Optional category filter.

    Returns:
        List of expenses.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, date, category, amount, description FROM expenses WHERE 1 = 1"
        params: list[Any] = []

        if since_date:
            query += " AND date >= ?"
            params.append(since_date)
        if until_date:
            query += " AND date <= ?"
            params.append(until_date)
        if category:
            query += " AND category = ?"
            params.append(category)

        query += " ORDER BY date ASC, id ASC"

        cursor.execute(query, params)
        return [_expense_from_row(row) for row in cursor.fetchall()]
