"""Tests for WorkbookReader."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
import xlrd
import xlwt
from openpyxl import load_workbook

from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.table_extractor import TableExtractor
from spreadsheet_sampler.services.workbook_reader import WorkbookReader
from spreadsheet_sampler.utils.exceptions import (
    ErrorCode,
    SourceFileNotFoundError,
    UnsupportedFormatError,
    WorkbookReadError,
)
from spreadsheet_sampler.worksheet import Cell, CellKind

BORDERED = "borders: left thin, right thin, top thin, bottom thin"


@pytest.fixture
def make_xls(tmp_path: Path) -> Callable[..., Path]:
    """Write rows to a legacy .xls file with xlwt, every cell bordered.

    ``None`` values become styled blank cells, as in a bordered table.
    """

    def _make(
        rows: list[list[Any]],
        name: str = "source.xls",
        title: str = "Data",
        num_format: str | None = None,
    ) -> Path:
        workbook = xlwt.Workbook()
        sheet = workbook.add_sheet(title)
        style = xlwt.easyxf(BORDERED, num_format_str=num_format)
        for row_index, values in enumerate(rows):
            for column_index, value in enumerate(values):
                sheet.write(row_index, column_index, value, style)
        path = tmp_path / name
        workbook.save(str(path))
        return path

    return _make


class TestReadXlsx:
    """Decoding .xlsx workbooks with openpyxl."""

    def test_reads_first_sheet_values(self, make_workbook: Callable[..., Path]) -> None:
        """Test decoding values of the first sheet."""
        path = make_workbook(
            [
                ["Name", "Age", "Member", "Joined"],
                ["Ana", 31, True, datetime(2021, 4, 2)],
            ],
            title="Members",
        )

        sheet = WorkbookReader().read_first_sheet(path)

        assert sheet.name == "Members"
        header = sheet.row(0)
        assert header is not None
        assert header.cell(0) == Cell.text("Name")
        data = sheet.row(1)
        assert data is not None
        assert data.cell(1) == Cell.number(31.0)
        assert data.cell(2) == Cell.boolean(True)
        assert data.cell(3) == Cell.date(datetime(2021, 4, 2))

    def test_formula_and_error_cells(self, make_workbook: Callable[..., Path]) -> None:
        """Test that formulas and errors keep their kinds."""
        path = make_workbook([["A", "B"], [2, "=A2*2"], [3, "#N/A"]])

        sheet = WorkbookReader().read_first_sheet(path)

        formula = sheet.row(1).cell(1)  # type: ignore[union-attr]
        assert formula is not None
        assert formula.kind == CellKind.FORMULA
        error = sheet.row(2).cell(1)  # type: ignore[union-attr]
        assert error is not None
        assert error.kind == CellKind.ERROR

    def test_only_stored_rows_and_cells(self, make_workbook: Callable[..., Path]) -> None:
        """Test that only stored rows and cells are kept."""
        path = make_workbook([["A", "B", "C"], ["a1"], None, [None, None, "c4"]])

        sheet = WorkbookReader().read_first_sheet(path)

        assert sorted(sheet.rows) == [0, 1, 3]
        assert sheet.row(1).span == 1  # type: ignore[union-attr]
        assert sheet.row(2) is None
        assert sheet.row(3).span == 3  # type: ignore[union-attr]
        assert sheet.row(3).cell(0) is None  # type: ignore[union-attr]
        assert sheet.last_row_index == 3

    def test_empty_workbook(self, make_workbook: Callable[..., Path]) -> None:
        """Test decoding a workbook without cells."""
        sheet = WorkbookReader().read_first_sheet(make_workbook([]))
        assert sheet.rows == {}
        assert sheet.last_row_index == -1

    def test_suffix_is_case_insensitive(
        self, make_workbook: Callable[..., Path]
    ) -> None:
        """Test that upper-case extensions are accepted."""
        path = make_workbook([["A"]], name="UPPER.XLSX")
        assert WorkbookReader().read_first_sheet(path).row(0) is not None

    def test_corrupt_workbook(self, tmp_path: Path) -> None:
        """Test that an undecodable .xlsx raises WorkbookReadError."""
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(WorkbookReadError) as exc_info:
            WorkbookReader().read_first_sheet(path)
        assert exc_info.value.error_code == ErrorCode.FILE_READ_ERROR

    def test_openpyxl_cell_store_layout(
        self, make_workbook: Callable[..., Path]
    ) -> None:
        """Test the openpyxl cell store the reader walks for stored cells."""
        path = make_workbook([["A", None, "C"], None, [None, "b3"]])

        ws = load_workbook(path).worksheets[0]

        assert isinstance(ws._cells, dict)
        assert set(ws._cells) == {(1, 1), (1, 3), (3, 2)}
        assert ws._cells[(1, 3)].value == "C"


class TestReadXls:
    """Decoding legacy .xls workbooks with xlrd."""

    def test_reads_real_file(self, make_xls: Callable[..., Path]) -> None:
        """Test decoding values of a legacy workbook written with xlwt."""
        path = make_xls(
            [["Name", "Age", "Member"], ["Ana", 31, True]], title="Members"
        )

        sheet = WorkbookReader().read_first_sheet(path)

        assert sheet.name == "Members"
        assert sheet.row(0).cell(0) == Cell.text("Name")  # type: ignore[union-attr]
        data = sheet.row(1)
        assert data is not None
        assert data.cell(1) == Cell.number(31.0)
        assert data.cell(2) == Cell.boolean(True)

    def test_reads_dates(self, make_xls: Callable[..., Path]) -> None:
        """Test that date-formatted numbers decode as dates."""
        path = make_xls(
            [["Joined"], [datetime(2021, 4, 2)]], num_format="YYYY-MM-DD"
        )

        sheet = WorkbookReader().read_first_sheet(path)

        assert sheet.row(1).cell(0) == Cell.date(datetime(2021, 4, 2))  # type: ignore[union-attr]

    def test_styled_blank_cells_count_in_span(
        self, make_xls: Callable[..., Path]
    ) -> None:
        """Test that bordered empty cells are kept as blank cells."""
        path = make_xls(
            [
                ["Name", "Age", "City"],
                ["Ana", 31, "Vilnius"],
                ["Jonas", 45, None],
                ["Ona", 27, "Klaipėda"],
            ]
        )

        sheet = WorkbookReader().read_first_sheet(path)

        assert [sheet.rows[i].span for i in sorted(sheet.rows)] == [3, 3, 3, 3]
        assert sheet.row(2).cell(2) == Cell.blank()  # type: ignore[union-attr]

    def test_bordered_table_keeps_all_data_rows(
        self, make_xls: Callable[..., Path]
    ) -> None:
        """Test that an empty bordered trailing cell does not end the table."""
        path = make_xls(
            [
                ["Name", "Age", "City"],
                ["Ana", 31, "Vilnius"],
                ["Jonas", 45, None],
                ["Ona", 27, "Klaipėda"],
            ]
        )
        sheet = WorkbookReader().read_first_sheet(path)

        result = TableExtractor().extract(sheet, SampleSpec.percentage(100))

        assert result.header.column_count == 3
        assert (result.region.first_index, result.region.last_index) == (1, 3)
        assert result.region.row_count == 3
        assert len(result.table.data_rows) == 3

    def test_corrupt_workbook(self, tmp_path: Path) -> None:
        """Test that an undecodable .xls raises WorkbookReadError."""
        path = tmp_path / "broken.xls"
        path.write_bytes(b"definitely not BIFF")
        with pytest.raises(WorkbookReadError):
            WorkbookReader().read_first_sheet(path)

    def test_maps_text_number_boolean(self) -> None:
        """Test mapping of xlrd text, number and boolean cells."""
        mapper = WorkbookReader._map_xlrd_cell
        assert mapper(xlrd.XL_CELL_TEXT, "Ana", 0) == Cell.text("Ana")
        assert mapper(xlrd.XL_CELL_NUMBER, 31, 0) == Cell.number(31.0)
        assert mapper(xlrd.XL_CELL_BOOLEAN, 1, 0) == Cell.boolean(True)

    def test_maps_date(self) -> None:
        """Test mapping of xlrd date cells."""
        cell = WorkbookReader._map_xlrd_cell(xlrd.XL_CELL_DATE, 45000.5, 0)
        assert cell == Cell.date(datetime(2023, 3, 15, 12, 0))

    def test_invalid_date_becomes_error(self) -> None:
        """Test that an out-of-range date becomes an error cell."""
        cell = WorkbookReader._map_xlrd_cell(xlrd.XL_CELL_DATE, 1e10, 0)
        assert cell.kind == CellKind.ERROR

    def test_maps_error_and_blank(self) -> None:
        """Test mapping of xlrd error and blank cells."""
        error = WorkbookReader._map_xlrd_cell(xlrd.XL_CELL_ERROR, 0x07, 0)
        assert error == Cell.error("#DIV/0!")
        assert WorkbookReader._map_xlrd_cell(xlrd.XL_CELL_BLANK, "", 0) == Cell.blank()
        assert WorkbookReader._map_xlrd_cell(xlrd.XL_CELL_EMPTY, "", 0) == Cell.blank()


class TestRejectedInputs:
    """Files the reader refuses before decoding."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises SourceFileNotFoundError."""
        with pytest.raises(SourceFileNotFoundError):
            WorkbookReader().read_first_sheet(tmp_path / "missing.xlsx")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Test that unsupported extensions are rejected."""
        path = tmp_path / "data.csv"
        path.write_text("a,b\n1,2\n")
        with pytest.raises(UnsupportedFormatError) as exc_info:
            WorkbookReader().read_first_sheet(path)
        assert exc_info.value.extension == ".csv"

    def test_excel_lock_file(self, tmp_path: Path) -> None:
        """Test that Excel lock files are rejected."""
        path = tmp_path / "~$source.xlsx"
        path.write_bytes(b"lock")
        with pytest.raises(UnsupportedFormatError):
            WorkbookReader().read_first_sheet(path)
