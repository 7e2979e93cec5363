"""Seasonal pricing commands (set, list, remove, quote)."""

import sqlite3
import sys

from rich.console import Console
from rich.table import Table

from villabook.commands.common import load_price_table, parse_date
from villabook.config import get_gap_policy, get_setting, load_settings
from villabook.domain.errors import VillabookError
from villabook.domain.models import DateRange, RuleId, SeasonalPriceRule
from villabook.domain.money import format_money, to_cents
from villabook.domain.pricing import compute_amount, nightly_breakdown
from villabook.store.queries import delete_seasonal_rule, save_seasonal_rule
from villabook.store.schema import get_db_path

console = Console()

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def price_set_command(
    start: str,
    end: str,
    monday: float = 0.0,
    tuesday: float = 0.0,
    wednesday: float = 0.0,
    thursday: float = 0.0,
    friday: float = 0.0,
    saturday: float = 0.0,
    sunday: float = 0.0,
    rule_id: int | None = None,
) -> None:
    """Add a pricing period, or replace an existing one when rule_id is given."""
    db_path = get_db_path()

    try:
        table = load_price_table(db_path)

        if rule_id is not None and table.get(RuleId(rule_id)) is None:
            console.print(f"[red]Pricing period {rule_id} not found[/red]", style="bold")
            sys.exit(1)

        rule = SeasonalPriceRule(
            id=RuleId(rule_id) if rule_id is not None else None,
            date_range=DateRange(parse_date(start), parse_date(end)),
            monday_price=to_cents(monday),
            tuesday_price=to_cents(tuesday),
            wednesday_price=to_cents(wednesday),
            thursday_price=to_cents(thursday),
            friday_price=to_cents(friday),
            saturday_price=to_cents(saturday),
            sunday_price=to_cents(sunday),
        )

        # Raises before anything is written
        table.upsert(rule)
        saved_id = save_seasonal_rule(rule, db_path)

        action = "updated" if rule_id is not None else "added"
        console.print(
            f"[green]✓[/green] Pricing period {saved_id} {action}: "
            f"{rule.date_range.start.isoformat()} to {rule.date_range.end.isoformat()}"
        )

    except VillabookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def price_list_command() -> None:
    """List pricing periods."""
    db_path = get_db_path()
    currency = get_setting(load_settings(), "currency", "$")

    try:
        table = load_price_table(db_path)

        if not len(table):
            console.print("[yellow]No pricing periods configured[/yellow]")
            return

        grid = Table(title=f"Seasonal pricing ({len(table)} periods)")
        grid.add_column("ID", style="dim", justify="right")
        grid.add_column("Start", style="cyan")
        grid.add_column("End", style="cyan")
        for label in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
            grid.add_column(label, justify="right")

        for rule in table:
            grid.add_row(
                str(rule.id),
                rule.date_range.start.isoformat(),
                rule.date_range.end.isoformat(),
                format_money(rule.monday_price, currency),
                format_money(rule.tuesday_price, currency),
                format_money(rule.wednesday_price, currency),
                format_money(rule.thursday_price, currency),
                format_money(rule.friday_price, currency),
                format_money(rule.saturday_price, currency),
                format_money(rule.sunday_price, currency),
            )

        console.print(grid)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def price_remove_command(rule_id: int) -> None:
    """Remove a pricing period."""
    db_path = get_db_path()

    try:
        if delete_seasonal_rule(RuleId(rule_id), db_path):
            console.print(f"[green]✓[/green] Pricing period {rule_id} removed")
        else:
            console.print(f"[yellow]Pricing period {rule_id} not found[/yellow]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def price_quote_command(checkin: str, checkout: str) -> None:
    """Show the nightly breakdown and total price of a stay."""
    db_path = get_db_path()
    settings = load_settings()
    currency = get_setting(settings, "currency", "$")

    try:
        stay = DateRange(parse_date(checkin), parse_date(checkout))
        if stay.is_empty():
            console.print("[red]Check-out date must be after check-in date[/red]", style="bold")
            sys.exit(1)

        table = load_price_table(db_path)
        rates = nightly_breakdown(stay, table)

        grid = Table(title=f"Quote: {stay.start.isoformat()} to {stay.end.isoformat()} ({len(rates)} nights)")
        grid.add_column("Night", style="cyan")
        grid.add_column("Day")
        grid.add_column("Period", style="dim", justify="right")
        grid.add_column("Price", justify="right")

        for rate in rates:
            price = format_money(rate.price, currency) if rate.covered else "[yellow]no rate[/yellow]"
            grid.add_row(
                rate.night.isoformat(),
                WEEKDAY_LABELS[rate.weekday],
                str(rate.rule_id) if rate.rule_id is not None else "-",
                price,
            )

        console.print(grid)

        total = compute_amount(stay, table, get_gap_policy(settings))
        console.print(f"\n[bold]Total:[/bold] {format_money(total, currency)}")

        uncovered = sum(1 for rate in rates if not rate.covered)
        if uncovered:
            console.print(f"[yellow]{uncovered} night(s) have no seasonal rate and are priced at zero[/yellow]")

    except VillabookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
