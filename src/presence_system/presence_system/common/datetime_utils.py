from __future__ import annotations

from datetime import date, datetime, timedelta

# Spreadsheet date serials count days from this epoch (1900 leap-year bug included).
SPREADSHEET_EPOCH = datetime(1899, 12, 30)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def spreadsheet_serial_to_date(serial: float) -> date:
    """Convert a spreadsheet date serial (e.g. 45292) into a calendar date."""
    return (SPREADSHEET_EPOCH + timedelta(days=float(serial))).date()


def safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None
