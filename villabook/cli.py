"""CLI entry point for villabook."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from villabook.commands.admin import init_command
from villabook.commands.bookings import (
    booking_add_command,
    booking_delete_command,
    booking_edit_command,
    booking_list_command,
)
from villabook.commands.expenses import expense_add_command, expense_delete_command, expense_list_command
from villabook.commands.pricing import (
    price_list_command,
    price_quote_command,
    price_remove_command,
    price_set_command,
)
from villabook.commands.report import report_command

app = typer.Typer(
    name="villabook",
    help="Villa rental bookings, seasonal pricing and cash flow",
    add_completion=False,
)
price_app = typer.Typer(help="Manage seasonal pricing periods", add_completion=False)
booking_app = typer.Typer(help="Manage bookings", add_completion=False)
expense_app = typer.Typer(help="Manage expenses", add_completion=False)

app.add_typer(price_app, name="price")
app.add_typer(booking_app, name="booking")
app.add_typer(expense_app, name="expense")


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Villa rental bookings, seasonal pricing and cash flow."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Drop the existing database and start empty"),
    migrate: bool = typer.Option(False, "--migrate", help="Add missing tables to the existing database"),
    export_path: str = typer.Option(None, "--export", help="Save bookings to this CSV before --force drops them"),
) -> None:
    """Set up the villabook database and configuration."""
    init_command(force, migrate, export_path)


@price_app.command(name="set")
def price_set(
    start: str,
    end: str,
    monday: float = typer.Option(0.0, "--mon", help="Monday nightly price"),
    tuesday: float = typer.Option(0.0, "--tue", help="Tuesday nightly price"),
    wednesday: float = typer.Option(0.0, "--wed", help="Wednesday nightly price"),
    thursday: float = typer.Option(0.0, "--thu", help="Thursday nightly price"),
    friday: float = typer.Option(0.0, "--fri", help="Friday nightly price"),
    saturday: float = typer.Option(0.0, "--sat", help="Saturday nightly price"),
    sunday: float = typer.Option(0.0, "--sun", help="Sunday nightly price"),
    rule_id: int = typer.Option(None, "--id", help="Replace the pricing period with this ID"),
) -> None:
    """Add or replace a pricing period (START and END inclusive)."""
    price_set_command(start, end, monday, tuesday, wednesday, thursday, friday, saturday, sunday, rule_id)


@price_app.command(name="list")
def price_list() -> None:
    """List your pricing periods."""
    price_list_command()


@price_app.command(name="remove")
def price_remove(rule_id: int) -> None:
    """Remove a pricing period."""
    price_remove_command(rule_id)


@price_app.command(name="quote")
def price_quote(checkin: str, checkout: str) -> None:
    """Quote a stay night by night."""
    price_quote_command(checkin, checkout)


@booking_app.command(name="add")
def booking_add(
    checkin: str,
    checkout: str,
    guest_name: str,
    guest_phone: str = typer.Option("", "--phone", help="Guest phone number"),
    amount: float = typer.Option(None, "--amount", help="Total amount (default: quoted from seasonal pricing)"),
    prepayment: float = typer.Option(0.0, "--prepayment", help="Prepayment received"),
    notes: str = typer.Option("", "--notes", help="Notes"),
    checkin_time: str = typer.Option(None, "--checkin-time", help="Check-in time (HH:MM)"),
    checkout_time: str = typer.Option(None, "--checkout-time", help="Check-out time (HH:MM)"),
) -> None:
    """Add a booking."""
    booking_add_command(
        checkin, checkout, guest_name, guest_phone, amount, prepayment, notes, checkin_time, checkout_time
    )


@booking_app.command(name="edit")
def booking_edit(
    booking_id: int,
    checkin: str = typer.Option(None, "--checkin", help="New check-in date"),
    checkout: str = typer.Option(None, "--checkout", help="New check-out date"),
    guest_name: str = typer.Option(None, "--guest", help="New guest name"),
    guest_phone: str = typer.Option(None, "--phone", help="New guest phone"),
    amount: float = typer.Option(None, "--amount", help="New total amount"),
    prepayment: float = typer.Option(None, "--prepayment", help="New prepayment"),
    notes: str = typer.Option(None, "--notes", help="New notes"),
    reprice: bool = typer.Option(False, "--reprice", help="Re-quote the amount from seasonal pricing"),
) -> None:
    """Edit a booking."""
    booking_edit_command(booking_id, checkin, checkout, guest_name, guest_phone, amount, prepayment, notes, reprice)


@booking_app.command(name="delete")
def booking_delete(booking_id: int) -> None:
    """Delete a booking."""
    booking_delete_command(booking_id)


@booking_app.command(name="list")
def booking_list(
    since: str = typer.Option(None, "--since", help="Earliest check-in date"),
    until: str = typer.Option(None, "--until", help="Latest check-out date"),
    sort_by: str = typer.Option("date", "--sort", help="Sort by 'date', 'name' or 'amount'"),
    descending: bool = typer.Option(False, "--desc", help="Sort descending"),
) -> None:
    """List your bookings."""
    booking_list_command(since, until, sort_by, descending)


@expense_app.command(name="add")
def expense_add(
    date: str,
    category: str,
    amount: float,
    description: str = typer.Option("", "--description", "-d", help="Description"),
) -> None:
    """Add an expense."""
    expense_add_command(date, category, amount, description)


@expense_app.command(name="list")
def expense_list(
    since: str = typer.Option(None, "--since", help="Earliest date"),
    until: str = typer.Option(None, "--until", help="Latest date"),
    category: str = typer.Option(None, "--category", help="Only this category"),
) -> None:
    """List your expenses."""
    expense_list_command(since, until, category)


@expense_app.command(name="delete")
def expense_delete(expense_id: int) -> None:
    """Delete an expense."""
    expense_delete_command(expense_id)


@app.command(name="report")
def report(
    since: str = typer.Option(None, "--since", help="Window start (default: earliest record)"),
    until: str = typer.Option(None, "--until", help="Window end (default: latest record)"),
    projection: int = typer.Option(None, "--projection", "-p", help="Months to append after the window"),
    csv_path: str = typer.Option(None, "--csv", help="Export the table to a CSV file"),
) -> None:
    """Show your monthly cash flow."""
    report_command(since, until, projection, csv_path)


if __name__ == "__main__":
    app()
