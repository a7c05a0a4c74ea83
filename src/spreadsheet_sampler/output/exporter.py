"""Write the sampled table and its explanation to disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from spreadsheet_sampler.services.table_extractor import OutputTable
from spreadsheet_sampler.utils.exceptions import ExportError
from spreadsheet_sampler.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ExportedArtifacts:
    """Paths of the two files one sampling run produces."""

    spreadsheet_path: Path
    report_path: Path

    @property
    def destination(self) -> Path:
        return self.spreadsheet_path.parent


class ArtifactExporter:
    """Persist a result workbook and its text explanation.

    The workbook is written first; when that fails the explanation is not
    written at all.
    """

    def __init__(
        self,
        spreadsheet_file_name: str = "rezultatas.xlsx",
        report_file_name: str = "paaiskinimas.txt",
        sheet_name: str = "Parinkti duomenys",
    ) -> None:
        self.spreadsheet_file_name = spreadsheet_file_name
        self.report_file_name = report_file_name
        self.sheet_name = sheet_name

    def export(
        self, table: OutputTable, report_text: str, destination: Path
    ) -> ExportedArtifacts:
        """Write both artifacts into ``destination``.

        Raises:
            ExportError: If either file cannot be written.
        """
        spreadsheet_path = destination / self.spreadsheet_file_name
        report_path = destination / self.report_file_name

        self.write_spreadsheet(table, spreadsheet_path)
        logger.info(
            "The new excel file was successfully saved",
            file_name=self.spreadsheet_file_name,
        )
        self.write_report(report_text, report_path)
        logger.info(
            "The new text file was successfully saved",
            file_name=self.report_file_name,
        )
        return ExportedArtifacts(
            spreadsheet_path=spreadsheet_path, report_path=report_path
        )

    def write_spreadsheet(self, table: OutputTable, path: Path) -> None:
        """Write ``table`` as a single-sheet workbook of text cells."""
        logger.info("Writing data to the new excel file", path=str(path))
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_name
        try:
            for row_number, row in enumerate(table.rows, start=1):
                for column_number, text in enumerate(row, start=1):
                    cell = sheet.cell(row=row_number, column=column_number, value=text)
                    # Text such as "=A1" must stay text, not become a formula.
                    cell.data_type = "s"
            path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(path)
        except (OSError, IllegalCharacterError) as e:
            logger.error("An error occurred when writing to the Excel file", exc_info=True)
            raise ExportError(
                ExportError.SPREADSHEET, str(path), reason=str(e)
            ) from e

    def write_report(self, report_text: str, path: Path) -> None:
        """Write the explanation as UTF-8 text."""
        try:
            path.write_text(report_text, encoding="utf-8")
        except OSError as e:
            logger.error("An error occurred when writing to the text file", exc_info=True)
            raise ExportError(ExportError.REPORT, str(path), reason=str(e)) from e
