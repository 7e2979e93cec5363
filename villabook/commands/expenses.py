"""Expense commands (add, list, delete)."""

import sqlite3
import sys

from rich.console import Console
from rich.table import Table

from villabook.commands.common import parse_date, parse_optional_date
from villabook.config import get_expense_categories, get_setting, load_settings
from villabook.domain.errors import VillabookError
from villabook.domain.models import CategoryName, Expense, ExpenseId, Money
from villabook.domain.money import format_money, to_cents
from villabook.domain.validation import validate_expense
from villabook.store.queries import delete_expense, get_expenses, insert_expense
from villabook.store.schema import get_db_path

console = Console()


def expense_add_command(
    date: str,
    category: str,
    amount: float,
    description: str = "",
) -> None:
    """Add an expense.

    Args:
        date: Expense date.
        category: Expense category.
        amount: Amount in major units.
        description: Free-form description.
    """
    db_path = get_db_path()
    settings = load_settings()
    currency = get_setting(settings, "currency", "$")

    try:
        expense = Expense(
            date=parse_date(date),
            category=CategoryName(category.strip()),
            amount=to_cents(amount),
            description=description,
        )

        if not expense.category:
            console.print("[red]Please select a category[/red]", style="bold")
            sys.exit(1)

        validate_expense(expense)

        categories = get_expense_categories(settings)
        if expense.category not in categories:
            console.print(f"[yellow]Category '{expense.category}' is not in your configured categories[/yellow]")
            console.print(f"[dim]Configured: {', '.join(categories)}[/dim]")

        expense_id = insert_expense(expense, db_path)

        console.print(f"[green]✓[/green] Expense {expense_id} added:")
        console.print(f"  Date: {expense.date.isoformat()}")
        console.print(f"  Category: {expense.category}")
        console.print(f"  Amount: {format_money(expense.amount, currency)}")
        if expense.description:
            console.print(f"  Description: {expense.description}")

    except VillabookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def expense_list_command(
    since: str | None = None,
    until: str | None = None,
    category: str | None = None,
) -> None:
    """List expenses with their total."""
    db_path = get_db_path()
    currency = get_setting(load_settings(), "currency", "$")

    try:
        since_date = parse_optional_date(since)
        until_date = parse_optional_date(until)

        expenses = get_expenses(
            db_path,
            since_date.isoformat() if since_date else None,
            until_date.isoformat() if until_date else None,
            CategoryName(category) if category else None,
        )

        if not expenses:
            console.print("[yellow]No expenses found[/yellow]")
            return

        table = Table(title=f"Expenses ({len(expenses)})")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Category", style="magenta")
        table.add_column("Description", style="white")
        table.add_column("Amount", justify="right")

        for expense in expenses:
            table.add_row(
                str(expense.id),
                expense.date.isoformat(),
                expense.category,
                expense.description or "[dim]-[/dim]",
                format_money(expense.amount, currency),
            )

        console.print(table)

        total = Money(sum(expense.amount for expense in expenses))
        console.print(f"\n[bold]Total expenses:[/bold] {format_money(total, currency)}")

    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def expense_delete_command(expense_id: int) -> None:
    """Delete an expense."""
    db_path = get_db_path()

    try:
        if delete_expense(ExpenseId(expense_id), db_path):
            console.print(f"[green]✓[/green] Expense {expense_id} deleted")
        else:
            console.print(f"[yellow]Expense {expense_id} not found[/yellow]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
