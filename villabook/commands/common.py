"""Input parsing, snapshot loading and CSV writing shared by commands."""

import csv
from datetime import date
from pathlib import Path

import pandas as pd

from villabook.domain.pricing import SeasonalPriceTable
from villabook.store.queries import get_seasonal_rules


def parse_date(raw: str) -> date:
    """Parse a user-entered date.

    ISO dates are taken as-is; anything else goes through
    pandas.to_datetime with day-first parsing (e.g. 10/06/2024 is 10 June).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    raw = raw.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass

    try:
        return pd.to_datetime(raw, dayfirst=True).date()
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw}': {e}") from e


def parse_optional_date(raw: str | None) -> date | None:
    return parse_date(raw) if raw else None


def load_price_table(db_path: Path) -> SeasonalPriceTable:
    """Load the stored seasonal rules as a price table snapshot."""
    return SeasonalPriceTable.from_snapshot(get_seasonal_rules(db_path))


def write_csv(rows: list[list[str]], csv_path: Path) -> None:
    """Write rows to a CSV file, creating the parent directory.

    Raises:
        OSError: If the file cannot be written.
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with open(csv_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)
