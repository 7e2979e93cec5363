"""Cash-flow report command."""

import sqlite3
import sys
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.table import Table

from villabook.commands.common import parse_optional_date, write_csv
from villabook.config import get_setting, load_settings
from villabook.dates import month_bounds, month_key, month_range
from villabook.domain.cashflow import aggregate, default_window, extend_projection, summarize
from villabook.domain.export import bucket_type, cashflow_rows
from villabook.domain.models import Booking, DateRange, Expense, MonthBucket
from villabook.domain.money import format_money
from villabook.store.queries import get_bookings, get_expenses
from villabook.store.schema import get_db_path

console = Console()


def compute_report_window(
    since: date | None,
    until: date | None,
    bookings: list[Booking],
    expenses: list[Expense],
    today: date,
) -> DateRange:
    """Resolve the reporting window.

    Missing bounds come from the recorded data (earliest to latest date);
    with no data at all, the current month is used.
    """
    fallback = default_window(bookings, expenses)
    if fallback is None:
        first, last = month_bounds(month_key(today))
        fallback = DateRange(start=first, end=last)

    return DateRange(start=since or fallback.start, end=until or fallback.end)


def render_cashflow_table(buckets: list[MonthBucket], currency: str) -> None:
    """Render the monthly cash-flow table."""
    table = Table(title="Monthly Cash Flow")
    table.add_column("Month", style="cyan")
    table.add_column("Type")
    table.add_column("Bookings", justify="right")
    table.add_column("Prepaid", justify="right")
    table.add_column("To Pay", justify="right")
    table.add_column("Total", justify="right", style="bold")
    table.add_column("Expenses", justify="right", style="red")

    for bucket in buckets:
        _, _, label = month_range(bucket.month)
        kind = bucket_type(bucket)
        table.add_row(
            label,
            f"[magenta]{kind}[/magenta]" if bucket.is_projection else kind,
            str(bucket.bookings_count),
            format_money(bucket.prepaid, currency),
            format_money(bucket.paid, currency),
            format_money(bucket.revenue, currency),
            format_money(bucket.expenses, currency),
        )

    console.print(table)


def report_command(
    since: str | None = None,
    until: str | None = None,
    projection_months: int | None = None,
    csv_path: str | None = None,
) -> None:
    """Show the monthly cash-flow report, optionally with projected months."""
    db_path = get_db_path()
    settings = load_settings()
    currency = get_setting(settings, "currency", "$")

    if projection_months is None:
        projection_months = int(get_setting(settings, "report.projection_months", 0))

    try:
        bookings = get_bookings(db_path)
        expenses = get_expenses(db_path)

        window = compute_report_window(
            parse_optional_date(since),
            parse_optional_date(until),
            bookings,
            expenses,
            date.today(),
        )

        if window.start > window.end:
            console.print("[yellow]Start date is after end date; nothing to report[/yellow]")
            return

        historical = aggregate(bookings, expenses, window)
        buckets = extend_projection(historical, projection_months, bookings, expenses)

        console.print(f"[bold cyan]{window.start.isoformat()} to {window.end.isoformat()}[/bold cyan]\n")

        summary = summarize(buckets)
        console.print(f"  [bold]Revenue:[/bold] [green]{format_money(summary.revenue, currency)}[/green]")
        console.print(f"  [bold]Total prepaid:[/bold] [blue]{format_money(summary.prepaid, currency)}[/blue]")
        console.print(f"  [bold]Total to pay:[/bold] [magenta]{format_money(summary.paid, currency)}[/magenta]")
        console.print(f"  [bold]Total expenses:[/bold] [red]{format_money(summary.expenses, currency)}[/red]")
        net_style = "green" if summary.net >= 0 else "red"
        console.print(f"  [bold]Net:[/bold] [{net_style}]{format_money(summary.net, currency)}[/{net_style}]\n")

        render_cashflow_table(buckets, currency)

        if csv_path:
            output = Path(csv_path).expanduser()
            write_csv(cashflow_rows(buckets), output)
            console.print(f"\n[green]✓[/green] Exported {len(buckets)} months to {output}")

    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)
