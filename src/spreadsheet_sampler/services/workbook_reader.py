"""Decode the first worksheet of an Excel workbook into a Worksheet."""

from __future__ import annotations

from datetime import date, time, timedelta
from pathlib import Path
from typing import Any

import xlrd
from openpyxl import load_workbook
from openpyxl.cell.cell import Cell as OpenpyxlCell
from openpyxl.worksheet.worksheet import Worksheet as OpenpyxlWorksheet

from spreadsheet_sampler.utils.exceptions import (
    SourceFileNotFoundError,
    UnsupportedFormatError,
    WorkbookReadError,
)
from spreadsheet_sampler.utils.logging import get_logger
from spreadsheet_sampler.worksheet import Cell, Row, Worksheet

logger = get_logger(__name__)

OPENPYXL_EXTENSIONS = frozenset({".xlsx", ".xlsm"})
XLRD_EXTENSIONS = frozenset({".xls"})
SUPPORTED_EXTENSIONS = OPENPYXL_EXTENSIONS | XLRD_EXTENSIONS

# Prefix of the lock files Excel leaves next to open workbooks.
LOCK_FILE_PREFIX = "~$"


class WorkbookReader:
    """Read the first sheet of .xlsx/.xlsm (openpyxl) or .xls (xlrd) files.

    Only physically present rows and cells are kept, so row spans match what
    the workbook stores rather than the sheet's bounding box.
    """

    def read_first_sheet(self, file_path: Path) -> Worksheet:
        """Decode the first worksheet of ``file_path``.

        Raises:
            SourceFileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the extension is not a supported workbook
                type or the file is an Excel lock file.
            WorkbookReadError: If the library cannot decode the file.
        """
        if not file_path.exists():
            raise SourceFileNotFoundError(file_path=str(file_path))

        if file_path.name.startswith(LOCK_FILE_PREFIX):
            raise UnsupportedFormatError(
                f"Excel lock file cannot be sampled: {file_path.name}",
                file_path=str(file_path),
            )

        suffix = file_path.suffix.lower()
        if suffix not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Unsupported workbook format: {suffix or '(none)'}",
                extension=suffix,
                file_path=str(file_path),
            )

        logger.info("Starting to process the file", file_path=str(file_path))
        if suffix in XLRD_EXTENSIONS:
            sheet = self._read_xls(file_path)
        else:
            sheet = self._read_xlsx(file_path)
        logger.info(
            "Worksheet decoded",
            sheet=sheet.name,
            present_rows=len(sheet.rows),
            last_row_index=sheet.last_row_index,
        )
        return sheet

    # ------------------------------------------------------------------ #
    # openpyxl
    # ------------------------------------------------------------------ #

    def _read_xlsx(self, file_path: Path) -> Worksheet:
        try:
            workbook = load_workbook(filename=file_path, data_only=False)
        except Exception as e:
            raise WorkbookReadError(
                f"Cannot open workbook: {e}", file_path=str(file_path)
            ) from e
        try:
            return self._convert_openpyxl_sheet(workbook.worksheets[0])
        finally:
            workbook.close()

    def _convert_openpyxl_sheet(self, ws: OpenpyxlWorksheet) -> Worksheet:
        sheet = Worksheet(name=ws.title)
        # _cells holds only the cells stored in the file; iter_rows() would
        # materialise every coordinate of the bounding box.
        for (row_number, column_number), cell in sorted(ws._cells.items()):
            row = sheet.rows.setdefault(row_number - 1, Row())
            row.cells[column_number - 1] = self._map_openpyxl_cell(cell)
        return sheet

    @staticmethod
    def _map_openpyxl_cell(cell: OpenpyxlCell) -> Cell:
        """Map an openpyxl cell to a tagged Cell."""
        value = cell.value
        data_type = cell.data_type
        if data_type == "f":
            return Cell.formula(str(value) if value is not None else "")
        if data_type == "e":
            return Cell.error(str(value) if value is not None else None)
        if value is None:
            return Cell.blank()
        if isinstance(value, bool):
            return Cell.boolean(value)
        if cell.is_date or isinstance(value, (date, time, timedelta)):
            return Cell.date(value)
        if isinstance(value, (int, float)):
            return Cell.number(float(value))
        if isinstance(value, str):
            return Cell.text(value)
        # Rich text and other string-like objects
        return Cell.text(str(value))

    # ------------------------------------------------------------------ #
    # xlrd
    # ------------------------------------------------------------------ #

    def _read_xls(self, file_path: Path) -> Worksheet:
        try:
            book = xlrd.open_workbook(
                str(file_path), ragged_rows=True, formatting_info=True
            )
        except Exception as e:
            raise WorkbookReadError(
                f"Cannot open workbook: {e}", file_path=str(file_path)
            ) from e
        try:
            xs = book.sheet_by_index(0)
            sheet = Worksheet(name=xs.name)
            for row_index in range(xs.nrows):
                length = xs.row_len(row_index)
                if length == 0:
                    continue
                row = Row()
                for column_index in range(length):
                    row.cells[column_index] = self._map_xlrd_cell(
                        xs.cell_type(row_index, column_index),
                        xs.cell_value(row_index, column_index),
                        book.datemode,
                    )
                sheet.rows[row_index] = row
            return sheet
        finally:
            book.release_resources()

    @staticmethod
    def _map_xlrd_cell(cell_type: int, value: Any, datemode: int) -> Cell:
        """Map an xlrd cell type/value pair to a tagged Cell."""
        if cell_type == xlrd.XL_CELL_TEXT:
            return Cell.text(value)
        if cell_type == xlrd.XL_CELL_NUMBER:
            return Cell.number(float(value))
        if cell_type == xlrd.XL_CELL_DATE:
            try:
                return Cell.date(xlrd.xldate_as_datetime(value, datemode))
            except (xlrd.XLDateError, ValueError, OverflowError):
                return Cell.error(str(value))
        if cell_type == xlrd.XL_CELL_BOOLEAN:
            return Cell.boolean(bool(value))
        if cell_type == xlrd.XL_CELL_ERROR:
            return Cell.error(xlrd.error_text_from_code.get(value))
        return Cell.blank()
