"""Dataclasses representing a parsed worksheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Any


class CellKind(str, Enum):
    """Kind of value a worksheet cell holds."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    BLANK = "blank"
    ERROR = "error"
    FORMULA = "formula"


@dataclass(frozen=True)
class Cell:
    """A single cell: a kind tag plus the decoded value.

    DATE cells hold a ``datetime``, ``date``, ``time`` or ``timedelta``;
    BLANK cells hold ``None``; FORMULA cells hold the formula text.
    """

    kind: CellKind
    value: Any = None

    @classmethod
    def text(cls, value: str) -> Cell:
        return cls(CellKind.TEXT, value)

    @classmethod
    def number(cls, value: float) -> Cell:
        return cls(CellKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> Cell:
        return cls(CellKind.BOOLEAN, value)

    @classmethod
    def date(cls, value: Any) -> Cell:
        return cls(CellKind.DATE, value)

    @classmethod
    def blank(cls) -> Cell:
        return cls(CellKind.BLANK)

    @classmethod
    def error(cls, value: str | None = None) -> Cell:
        return cls(CellKind.ERROR, value)

    @classmethod
    def formula(cls, value: str) -> Cell:
        return cls(CellKind.FORMULA, value)


@dataclass
class Row:
    """A worksheet row: physically present cells keyed by 0-based column."""

    cells: dict[int, Cell] = field(default_factory=dict)

    @property
    def span(self) -> int:
        """Physical cell span: highest present column index + 1."""
        return max(self.cells) + 1 if self.cells else 0

    def cell(self, column_index: int) -> Cell | None:
        return self.cells.get(column_index)


@dataclass
class Worksheet:
    """A single worksheet: present rows keyed by 0-based row index."""

    name: str
    rows: dict[int, Row] = field(default_factory=dict)

    @property
    def last_row_index(self) -> int:
        """Highest present row index, or -1 for an empty sheet."""
        return max(self.rows) if self.rows else -1

    def row(self, row_index: int) -> Row | None:
        return self.rows.get(row_index)

    @classmethod
    def from_values(
        cls, rows: list[list[Any] | None], name: str = "Sheet1"
    ) -> Worksheet:
        """Build a sheet from plain Python values.

        ``None`` in the outer list is an absent row. Inside a row, ``None`` is a
        physically present blank cell, so ``["a", None]`` has span 2. Values map
        to cells by type: ``str`` to TEXT, ``bool`` to BOOLEAN, ``int``/``float``
        to NUMBER, date/time values to DATE.
        """
        sheet = cls(name=name)
        for row_index, values in enumerate(rows):
            if values is None:
                continue
            row = Row()
            for column_index, value in enumerate(values):
                if value is None:
                    row.cells[column_index] = Cell.blank()
                elif isinstance(value, Cell):
                    row.cells[column_index] = value
                elif isinstance(value, bool):
                    row.cells[column_index] = Cell.boolean(value)
                elif isinstance(value, (int, float)):
                    row.cells[column_index] = Cell.number(float(value))
                elif isinstance(value, (date, time, timedelta)):
                    row.cells[column_index] = Cell.date(value)
                else:
                    row.cells[column_index] = Cell.text(str(value))
            sheet.rows[row_index] = row
        return sheet
