"""Location of the header row and the data region below it.

The header is the first row holding any non-empty cell; its physical cell
span fixes how many columns are copied from every data row. The data region
starts right after the header and ends at the first absent row or the first
row physically shorter than the row before it. A short trailing notes row
therefore closes the table, while data rows that are shorter than the header
(optional trailing columns) are kept.
"""

from __future__ import annotations

from dataclasses import dataclass

from spreadsheet_sampler.services.cell_coercer import coerce
from spreadsheet_sampler.utils.logging import get_logger
from spreadsheet_sampler.worksheet import Worksheet

logger = get_logger(__name__)


@dataclass(frozen=True)
class HeaderRow:
    """Position and copy width of the header row."""

    row_index: int
    column_count: int

    @property
    def first_data_index(self) -> int:
        return self.row_index + 1


@dataclass(frozen=True)
class DataRegion:
    """Inclusive range of data row indices."""

    first_index: int
    last_index: int

    @property
    def row_count(self) -> int:
        return self.last_index - self.first_index + 1

    @property
    def is_empty(self) -> bool:
        return self.row_count <= 0


def locate_header(sheet: Worksheet) -> HeaderRow | None:
    """Find the first row holding at least one non-empty cell.

    Returns:
        The header row with its physical span as ``column_count``, or None
        when every row is absent or blank.
    """
    logger.info("Searching for the header row", sheet=sheet.name)
    for row_index in range(sheet.last_row_index + 1):
        row = sheet.row(row_index)
        if row is None:
            continue
        if any(coerce(cell) for cell in row.cells.values()):
            header = HeaderRow(row_index=row_index, column_count=row.span)
            logger.info(
                "Header row located",
                row_index=header.row_index,
                column_count=header.column_count,
            )
            return header
    logger.info("No header row found", sheet=sheet.name)
    return None


def locate_data_region(sheet: Worksheet, first_data_index: int) -> DataRegion:
    """Find the contiguous data rows starting at ``first_data_index``.

    Only row presence and physical span decide where the region ends; a row
    of present but blank cells does not end it.
    """
    logger.info("Searching for the last data row", first_data_index=first_data_index)
    previous = sheet.row(first_data_index)
    if previous is None:
        return DataRegion(first_index=first_data_index, last_index=first_data_index - 1)

    last_index = first_data_index
    for row_index in range(first_data_index + 1, sheet.last_row_index + 1):
        current = sheet.row(row_index)
        if current is None:
            logger.debug("Data region ends at absent row", row_index=row_index)
            break
        if current.span < previous.span:
            logger.debug(
                "Data region ends at shorter row",
                row_index=row_index,
                span=current.span,
                previous_span=previous.span,
            )
            break
        last_index = row_index
        previous = current

    return DataRegion(first_index=first_data_index, last_index=last_index)
