"""Setup command: create, upgrade or reset the villabook database."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from villabook.commands.common import write_csv
from villabook.config import create_default_config, get_config_path
from villabook.domain.export import booking_rows
from villabook.store.queries import get_bookings
from villabook.store.schema import database_exists, get_db_path, init_database

console = Console()


def export_and_drop(db_path: Path, export_path: str | None) -> None:
    """Delete the database file, saving its bookings first.

    A database that still holds bookings is only dropped when export_path
    is given. Exits with status 1 otherwise.
    """
    bookings = get_bookings(db_path)

    if bookings:
        if not export_path:
            console.print(f"[red]The database holds {len(bookings)} booking(s).[/red]", style="bold")
            console.print("[yellow]Export them with 'villabook init --force --export FILE.csv'[/yellow]")
            sys.exit(1)

        output = Path(export_path).expanduser()
        write_csv(booking_rows(bookings), output)
        console.print(f"[green]✓[/green] Exported {len(bookings)} booking(s) to {output}")

    db_path.unlink()


def ensure_config(config_path: Path) -> None:
    if config_path.exists():
        console.print(f"[dim]Keeping config at {config_path}[/dim]")
        return
    create_default_config(config_path)
    console.print(f"[green]✓[/green] Config created at {config_path} (permissions: 600)")


def init_command(force: bool = False, migrate: bool = False, export_path: str | None = None) -> None:
    """Set up the villabook database and configuration.

    Args:
        force: Drop an existing database and start empty.
        migrate: Only add missing tables and indexes to an existing database.
        export_path: CSV file that receives the bookings of a dropped database.
    """
    db_path = get_db_path()
    config_path = get_config_path()

    try:
        if migrate:
            if not database_exists(db_path):
                console.print(f"[red]No database to upgrade at {db_path}[/red]", style="bold")
                sys.exit(1)
            init_database(db_path)
            console.print(f"[green]✓[/green] Schema of {db_path} is up to date")
            return

        if database_exists(db_path):
            if not force:
                console.print(f"[red]A database already exists at {db_path}[/red]", style="bold")
                console.print("[yellow]Use --migrate to upgrade it, or --force to start over[/yellow]")
                sys.exit(1)
            export_and_drop(db_path, export_path)

        init_database(db_path)
        console.print(f"[green]✓[/green] Database created at {db_path}")
        ensure_config(config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
