"""Booking commands (add, edit, delete, list)."""

import sqlite3
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.table import Table

from villabook.commands.common import load_price_table, parse_date, parse_optional_date
from villabook.config import get_gap_policy, get_setting, load_settings
from villabook.domain.conflicts import find_conflicts
from villabook.domain.errors import VillabookError
from villabook.domain.models import Booking, BookingId, DateRange, Money
from villabook.domain.money import format_money, to_cents
from villabook.domain.pricing import compute_amount
from villabook.domain.validation import validate_booking
from villabook.store.queries import (
    delete_booking,
    get_booking,
    get_bookings,
    insert_booking,
    update_booking,
)
from villabook.store.schema import get_db_path

console = Console()


def quote_stay(stay: DateRange, db_path: Path) -> Money:
    """Price a stay from the stored seasonal rates and configured gap policy."""
    if stay.is_empty():
        return Money(0)
    return compute_amount(stay, load_price_table(db_path), get_gap_policy(load_settings()))


def render_conflicts(conflicts: list[Booking], currency: str) -> None:
    """Show the bookings that block a save."""
    console.print("[red]The selected dates are already booked:[/red]", style="bold")
    for booking in conflicts:
        console.print(
            f"  #{booking.id} {booking.guest_name}: "
            f"{booking.check_in.isoformat()} to {booking.check_out.isoformat()} "
            f"({format_money(booking.amount, currency)})"
        )
    console.print("[yellow]Please choose different dates.[/yellow]")


def save_booking(booking: Booking, db_path: Path, currency: str) -> Booking:
    """Validate, check conflicts, and persist a booking.

    Exits with status 1 if the stay conflicts with another booking.
    """
    validate_booking(booking)

    conflicts = find_conflicts(booking, get_bookings(db_path), exclude_id=booking.id)
    if conflicts:
        render_conflicts(conflicts, currency)
        sys.exit(1)

    if booking.id is None:
        return replace(booking, id=insert_booking(booking, db_path))

    update_booking(booking, db_path)
    return booking


def print_booking_summary(booking: Booking, currency: str) -> None:
    console.print(f"  Guest: {booking.guest_name}")
    console.print(
        f"  Stay: {booking.check_in.isoformat()} to {booking.check_out.isoformat()} ({booking.nights} nights)"
    )
    console.print(f"  Amount: {format_money(booking.amount, currency)}")
    console.print(f"  Prepayment: {format_money(booking.prepayment, currency)}")
    console.print(f"  To pay: {format_money(booking.balance_due, currency)}")


def booking_add_command(
    checkin: str,
    checkout: str,
    guest_name: str,
    guest_phone: str = "",
    amount: float | None = None,
    prepayment: float = 0.0,
    notes: str = "",
    checkin_time: str | None = None,
    checkout_time: str | None = None,
) -> None:
    """Add a booking.

    Args:
        checkin: Check-in date.
        checkout: Check-out date (night not billed).
        guest_name: Guest name.
        guest_phone: Guest phone number.
        amount: Total amount in major units. If None, quoted from seasonal rates.
        prepayment: Prepayment already received, in major units.
        notes: Free-form notes.
        checkin_time: Expected check-in time (HH:MM).
        checkout_time: Expected check-out time (HH:MM).
    """
    db_path = get_db_path()
    currency = get_setting(load_settings(), "currency", "$")

    try:
        stay = DateRange(parse_date(checkin), parse_date(checkout))
        total = to_cents(amount) if amount is not None else quote_stay(stay, db_path)

        booking = Booking(
            date_range=stay,
            guest_name=guest_name.strip(),
            guest_phone=guest_phone,
            amount=total,
            prepayment=to_cents(prepayment),
            notes=notes,
            checkin_time=checkin_time,
            checkout_time=checkout_time,
        )

        if not booking.guest_name:
            console.print("[red]Please enter a guest name[/red]", style="bold")
            sys.exit(1)

        saved = save_booking(booking, db_path, currency)

        console.print(f"[green]✓[/green] Booking {saved.id} added:")
        print_booking_summary(saved, currency)
        if amount is None and saved.amount == 0:
            console.print("[yellow]No seasonal rates cover this stay; amount is zero[/yellow]")

    except VillabookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def booking_edit_command(
    booking_id: int,
    checkin: str | None = None,
    checkout: str | None = None,
    guest_name: str | None = None,
    guest_phone: str | None = None,
    amount: float | None = None,
    prepayment: float | None = None,
    notes: str | None = None,
    reprice: bool = False,
) -> None:
    """Edit a booking.

    Changing either date re-quotes the amount from seasonal rates unless an
    explicit amount is given. reprice forces a re-quote.
    """
    db_path = get_db_path()
    currency = get_setting(load_settings(), "currency", "$")

    try:
        existing = get_booking(BookingId(booking_id), db_path)
        if existing is None:
            console.print(f"[red]Booking {booking_id} not found[/red]", style="bold")
            sys.exit(1)

        stay = DateRange(
            parse_optional_date(checkin) or existing.check_in,
            parse_optional_date(checkout) or existing.check_out,
        )

        if amount is not None:
            total = to_cents(amount)
        elif reprice or stay != existing.date_range:
            total = quote_stay(stay, db_path)
        else:
            total = existing.amount

        updated = replace(
            existing,
            date_range=stay,
            guest_name=guest_name.strip() if guest_name is not None else existing.guest_name,
            guest_phone=guest_phone if guest_phone is not None else existing.guest_phone,
            amount=total,
            prepayment=to_cents(prepayment) if prepayment is not None else existing.prepayment,
            notes=notes if notes is not None else existing.notes,
        )

        saved = save_booking(updated, db_path, currency)

        console.print(f"[green]✓[/green] Booking {saved.id} updated:")
        print_booking_summary(saved, currency)

    except VillabookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def booking_delete_command(booking_id: int) -> None:
    """Delete a booking."""
    db_path = get_db_path()

    try:
        if delete_booking(BookingId(booking_id), db_path):
            console.print(f"[green]✓[/green] Booking {booking_id} deleted")
        else:
            console.print(f"[yellow]Booking {booking_id} not found[/yellow]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def booking_list_command(
    since: str | None = None,
    until: str | None = None,
    sort_by: str = "date",
    descending: bool = False,
) -> None:
    """List bookings."""
    db_path = get_db_path()
    currency = get_setting(load_settings(), "currency", "$")

    try:
        since_date = parse_optional_date(since)
        until_date = parse_optional_date(until)

        bookings = get_bookings(
            db_path,
            since_date.isoformat() if since_date else None,
            until_date.isoformat() if until_date else None,
            sort_by,
            descending,
        )

        if not bookings:
            console.print("[yellow]No bookings found[/yellow]")
            return

        table = Table(title=f"Bookings ({len(bookings)})")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Check-in", style="cyan")
        table.add_column("Check-out", style="cyan")
        table.add_column("Nights", justify="right")
        table.add_column("Guest", style="white")
        table.add_column("Phone", style="dim")
        table.add_column("Amount", justify="right")
        table.add_column("Prepaid", justify="right")
        table.add_column("To pay", justify="right")

        for booking in bookings:
            check_in = booking.check_in.isoformat()
            if booking.checkin_time:
                check_in += f" {booking.checkin_time}"
            check_out = booking.check_out.isoformat()
            if booking.checkout_time:
                check_out += f" {booking.checkout_time}"

            due = booking.balance_due
            due_display = f"[yellow]{format_money(due, currency)}[/yellow]" if due > 0 else "[green]paid[/green]"

            table.add_row(
                str(booking.id),
                check_in,
                check_out,
                str(booking.nights),
                booking.guest_name,
                booking.guest_phone or "[dim]-[/dim]",
                format_money(booking.amount, currency),
                format_money(booking.prepayment, currency),
                due_display,
            )

        console.print(table)

    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
