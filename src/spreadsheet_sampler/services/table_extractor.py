"""Build the sampled table and its explanation from a worksheet."""

from __future__ import annotations

import random
from dataclasses import dataclass

from spreadsheet_sampler.output.report import (
    LITHUANIAN_TEMPLATE,
    ReportTemplate,
    render_report,
)
from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.cell_coercer import coerce
from spreadsheet_sampler.services.region_locator import (
    DataRegion,
    HeaderRow,
    locate_data_region,
    locate_header,
)
from spreadsheet_sampler.services.sampler import (
    SampleResult,
    compute_target_count,
    sample_rows,
)
from spreadsheet_sampler.utils.exceptions import (
    EmptyDataRegionError,
    HeaderNotFoundError,
)
from spreadsheet_sampler.utils.logging import get_logger
from spreadsheet_sampler.worksheet import Row, Worksheet

logger = get_logger(__name__)


@dataclass
class OutputTable:
    """Header row followed by the sampled rows, all as text."""

    rows: list[list[str]]

    @property
    def header(self) -> list[str]:
        return self.rows[0]

    @property
    def data_rows(self) -> list[list[str]]:
        return self.rows[1:]

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0


@dataclass
class ExtractionResult:
    """Everything one extraction produces, ready for export."""

    table: OutputTable
    report_text: str
    header: HeaderRow
    region: DataRegion
    target_count: int
    sample: SampleResult


class TableExtractor:
    """Locate the table in a worksheet, sample its rows and describe the result.

    Holds no state between calls; one instance may serve many extractions.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        template: ReportTemplate = LITHUANIAN_TEMPLATE,
    ) -> None:
        self._rng = rng
        self._template = template

    def extract(
        self,
        sheet: Worksheet,
        spec: SampleSpec,
        source_name: str | None = None,
    ) -> ExtractionResult:
        """Sample ``sheet`` according to ``spec``.

        Args:
            sheet: Parsed worksheet.
            spec: Percentage or count of data rows to keep.
            source_name: Name shown in the explanation; defaults to the sheet name.

        Raises:
            HeaderNotFoundError: If no row holds a non-empty cell.
            EmptyDataRegionError: If no data rows follow the header.
        """
        header = locate_header(sheet)
        if header is None:
            raise HeaderNotFoundError(sheet_name=sheet.name)

        region = locate_data_region(sheet, header.first_data_index)
        logger.info(
            "Data region located",
            header_row_index=header.row_index,
            first_data_index=region.first_index,
            last_data_index=region.last_index,
            row_count=region.row_count,
        )
        if region.is_empty:
            raise EmptyDataRegionError(
                header_row_index=header.row_index, row_count=region.row_count
            )

        target_count = compute_target_count(spec, region.row_count)
        logger.info(
            "Data rows will be taken randomly",
            mode=spec.mode.value,
            value=spec.value,
            target_count=target_count,
        )
        sample = sample_rows(
            region.first_index, region.last_index, target_count, rng=self._rng
        )

        table = self._build_table(sheet, header, sample)
        report_text = render_report(
            source_name or sheet.name, region, spec, sample, template=self._template
        )
        return ExtractionResult(
            table=table,
            report_text=report_text,
            header=header,
            region=region,
            target_count=target_count,
            sample=sample,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_table(
        sheet: Worksheet, header: HeaderRow, sample: SampleResult
    ) -> OutputTable:
        width = header.column_count
        rows = [_copy_row(sheet.row(header.row_index), width)]
        rows.extend(
            _copy_row(sheet.row(mapping.original_index), width) for mapping in sample
        )
        logger.debug("Copied rows", count=len(rows), width=width)
        return OutputTable(rows=rows)


def _copy_row(row: Row | None, width: int) -> list[str]:
    """Coerce the first ``width`` cells; missing cells become empty text."""
    if row is None:
        return [""] * width
    return [coerce(row.cell(column_index)) for column_index in range(width)]
