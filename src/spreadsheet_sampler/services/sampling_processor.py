"""Sampling pipeline entry point.

This module wires the collaborators around the extraction core:
1. Decodes the first worksheet of the source workbook
2. Locates the table, samples its rows and renders the explanation
3. Writes the result workbook, then the explanation

Any failure aborts the run; nothing is retried.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from spreadsheet_sampler.config import Settings
from spreadsheet_sampler.config import settings as app_settings
from spreadsheet_sampler.messages import describe_success
from spreadsheet_sampler.output.exporter import ArtifactExporter, ExportedArtifacts
from spreadsheet_sampler.output.report import get_template
from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.table_extractor import (
    ExtractionResult,
    TableExtractor,
)
from spreadsheet_sampler.services.workbook_reader import WorkbookReader
from spreadsheet_sampler.utils.exceptions import SamplerError, UnclassifiedError
from spreadsheet_sampler.utils.logging import LogContext, get_logger, timed_operation

logger = get_logger(__name__)


@dataclass
class SamplingOutcome:
    """Result of one successful sampling run."""

    source_name: str
    extraction: ExtractionResult
    artifacts: ExportedArtifacts
    message: str

    @property
    def spreadsheet_path(self) -> Path:
        return self.artifacts.spreadsheet_path

    @property
    def report_path(self) -> Path:
        return self.artifacts.report_path

    @property
    def destination(self) -> Path:
        return self.artifacts.destination


def process_file(
    file_path: Path,
    destination: Path,
    spec: SampleSpec,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    source_name: str | None = None,
) -> SamplingOutcome:
    """Sample rows of ``file_path`` and save the artifacts in ``destination``.

    Args:
        file_path: Workbook to sample (.xlsx, .xlsm or .xls).
        destination: Folder receiving the result workbook and explanation.
        spec: Percentage or count of data rows to keep.
        settings: Output names and language; the global settings by default.
        rng: Random source; seeded from ``settings.random_seed`` when omitted.
        source_name: Name written into the explanation; the file name by default.

    Raises:
        SamplerError: Classified failures (missing file, no header, empty
            region, export failure). Any other exception is wrapped in
            UnclassifiedError.
    """
    s = settings or app_settings
    name = source_name or file_path.name
    if rng is None and s.random_seed is not None:
        rng = random.Random(s.random_seed)

    with (
        LogContext(source=name),
        timed_operation(logger, "sampling") as metrics,
    ):
        try:
            sheet = WorkbookReader().read_first_sheet(file_path)
            extractor = TableExtractor(rng=rng, template=get_template(s.report_language))
            extraction = extractor.extract(sheet, spec, source_name=name)
            metrics.rows_scanned = extraction.region.row_count
            metrics.rows_sampled = len(extraction.sample)
            metrics.custom_metrics["columns"] = extraction.table.column_count

            exporter = ArtifactExporter(
                spreadsheet_file_name=s.spreadsheet_file_name,
                report_file_name=s.report_file_name,
                sheet_name=s.output_sheet_name,
            )
            artifacts = exporter.export(
                extraction.table, extraction.report_text, destination
            )
        except SamplerError as e:
            logger.log_sampling_result(
                source=name, success=False, error_code=e.error_code.value
            )
            raise
        except Exception as e:
            logger.exception("An unknown error occurred", error_type=type(e).__name__)
            raise UnclassifiedError(e, stage="sampling") from e

        logger.log_sampling_result(
            source=name,
            success=True,
            row_count=extraction.region.row_count,
            sampled_count=len(extraction.sample),
        )

    return SamplingOutcome(
        source_name=name,
        extraction=extraction,
        artifacts=artifacts,
        message=describe_success(
            artifacts.spreadsheet_path, artifacts.report_path, s.report_language
        ),
    )
