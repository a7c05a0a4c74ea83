"""Conversion of worksheet cells into canonical display text."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

from spreadsheet_sampler.worksheet import Cell, CellKind

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Day Excel's 1900 date system assigns to serial 0; time-only values sit on it.
_TIME_ONLY_EPOCH = datetime(1899, 12, 31)


def coerce(cell: Cell | None) -> str:
    """Return the canonical text of a cell.

    Absent cells and BLANK/ERROR/FORMULA cells yield ``""``. Never raises:
    a value that does not match its kind also yields ``""``.
    """
    if cell is None:
        return ""

    kind = cell.kind
    value = cell.value
    if kind == CellKind.TEXT:
        return value if isinstance(value, str) else ""
    if kind == CellKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return ""
        return str(float(value))
    if kind == CellKind.BOOLEAN:
        if not isinstance(value, bool):
            return ""
        return "true" if value else "false"
    if kind == CellKind.DATE:
        return format_date(value)
    return ""


def format_date(value: Any) -> str:
    """Format a date-like cell value as ``YYYY-MM-DD HH:MM:SS``."""
    instant = _to_datetime(value)
    if instant is None:
        return ""
    return instant.strftime(DATE_FORMAT)


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, time):
        return datetime.combine(_TIME_ONLY_EPOCH.date(), value.replace(tzinfo=None))
    if isinstance(value, timedelta):
        try:
            return _TIME_ONLY_EPOCH + value
        except OverflowError:
            return None
    return None
