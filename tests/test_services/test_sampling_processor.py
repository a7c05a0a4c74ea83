"""Tests for the sampling pipeline entry point."""

import random
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from spreadsheet_sampler.config import Settings
from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.sampling_processor import process_file
from spreadsheet_sampler.utils.exceptions import (
    EmptyDataRegionError,
    ErrorCode,
    HeaderNotFoundError,
    SourceFileNotFoundError,
    UnclassifiedError,
)


@pytest.fixture
def source(make_workbook: Callable[..., Path]) -> Path:
    rows: list[list[object] | None] = [["Name", "Age", "City"]]
    rows.extend([f"Person {i}", 20 + i, f"City {i}"] for i in range(1, 11))
    rows.append(["Total: 10"])
    return make_workbook(rows, name="people.xlsx")


class TestProcessFile:
    """Successful runs."""

    def test_writes_sampled_workbook_and_report(
        self, source: Path, tmp_path: Path, sampler_settings: Settings
    ) -> None:
        """Test that the sampled rows and the report are written."""
        destination = tmp_path / "out"
        outcome = process_file(
            source,
            destination,
            SampleSpec.count(3),
            settings=sampler_settings,
            rng=random.Random(5),
        )

        assert outcome.source_name == "people.xlsx"
        assert outcome.destination == destination
        assert outcome.extraction.region.row_count == 10

        rows = [
            list(row)
            for row in load_workbook(outcome.spreadsheet_path).active.iter_rows(
                values_only=True
            )
        ]
        assert rows[0] == ["Name", "Age", "City"]
        assert len(rows) == 4
        for original_index, row in zip(
            outcome.extraction.sample.original_indices, rows[1:], strict=True
        ):
            assert row == [
                f"Person {original_index}",
                f"{20 + original_index}.0",
                f"City {original_index}",
            ]

        report = outcome.report_path.read_text(encoding="utf-8")
        assert report.startswith("Atrenkami duomenys iš failo: people.xlsx\n")
        assert report.count("--->") == 3

    def test_success_message_names_artifacts(
        self, source: Path, tmp_path: Path, sampler_settings: Settings
    ) -> None:
        """Test that the confirmation names both files and the folder."""
        outcome = process_file(
            source, tmp_path / "out", SampleSpec.percentage(50), settings=sampler_settings
        )
        assert outcome.message.startswith("Duomenys sėkmingai apdoroti ir išsaugoti.")
        assert "rezultatas.xlsx" in outcome.message
        assert "paaiskinimas.txt" in outcome.message
        assert str((tmp_path / "out").resolve()) in outcome.message

    def test_settings_choose_names_and_language(
        self, source: Path, tmp_path: Path
    ) -> None:
        """Test that settings control names and language."""
        settings = Settings(
            _env_file=None,
            spreadsheet_file_name="sample.xlsx",
            report_file_name="explanation.txt",
            output_sheet_name="Sample",
            report_language="en",
        )
        outcome = process_file(source, tmp_path, SampleSpec.count(1), settings=settings)

        assert outcome.spreadsheet_path.name == "sample.xlsx"
        assert load_workbook(outcome.spreadsheet_path).sheetnames == ["Sample"]
        report = outcome.report_path.read_text(encoding="utf-8")
        assert report.startswith("Data sampled from file: people.xlsx\n")
        assert outcome.message.startswith("The data was processed")

    def test_seed_from_settings_is_reproducible(
        self, source: Path, tmp_path: Path
    ) -> None:
        """Test that a configured seed makes runs reproducible."""
        settings = Settings(_env_file=None, random_seed=11)
        first = process_file(source, tmp_path / "a", SampleSpec.count(4), settings=settings)
        second = process_file(source, tmp_path / "b", SampleSpec.count(4), settings=settings)
        assert (
            first.extraction.sample.original_indices
            == second.extraction.sample.original_indices
        )

    def test_performance_metrics_logged(
        self, source: Path, tmp_path: Path, sampler_settings: Settings
    ) -> None:
        """Test that row counts and the table width are logged as metrics."""
        with patch(
            "spreadsheet_sampler.services.sampling_processor.logger.log_performance"
        ) as log_performance:
            process_file(
                source, tmp_path, SampleSpec.count(4), settings=sampler_settings
            )

        metrics = log_performance.call_args[0][0]
        assert metrics.operation == "sampling"
        assert metrics.rows_scanned == 10
        assert metrics.rows_sampled == 4
        assert metrics.custom_metrics == {"columns": 3}

    def test_source_name_override(
        self, source: Path, tmp_path: Path, sampler_settings: Settings
    ) -> None:
        """Test that source_name replaces the file name in the report."""
        outcome = process_file(
            source,
            tmp_path,
            SampleSpec.count(1),
            settings=sampler_settings,
            source_name="upload.xlsx",
        )
        assert outcome.report_path.read_text(encoding="utf-8").startswith(
            "Atrenkami duomenys iš failo: upload.xlsx\n"
        )


class TestProcessFileFailures:
    """Failed runs raise and leave no artifacts."""

    def test_missing_source(self, tmp_path: Path, sampler_settings: Settings) -> None:
        """Test that a missing file leaves no artifacts."""
        with pytest.raises(SourceFileNotFoundError):
            process_file(
                tmp_path / "missing.xlsx",
                tmp_path / "out",
                SampleSpec.count(1),
                settings=sampler_settings,
            )
        assert not (tmp_path / "out").exists()

    def test_blank_workbook(
        self,
        make_workbook: Callable[..., Path],
        tmp_path: Path,
        sampler_settings: Settings,
    ) -> None:
        """Test that a blank workbook leaves no artifacts."""
        path = make_workbook([], name="blank.xlsx")
        with pytest.raises(HeaderNotFoundError):
            process_file(path, tmp_path / "out", SampleSpec.count(1), settings=sampler_settings)
        assert not (tmp_path / "out").exists()

    def test_header_without_data(
        self,
        make_workbook: Callable[..., Path],
        tmp_path: Path,
        sampler_settings: Settings,
    ) -> None:
        """Test that a header without data rows leaves no artifacts."""
        path = make_workbook([["Name", "Age"], None, ["Ana", 31]], name="gap.xlsx")
        with pytest.raises(EmptyDataRegionError):
            process_file(path, tmp_path / "out", SampleSpec.count(1), settings=sampler_settings)
        assert not (tmp_path / "out").exists()

    def test_unexpected_error_is_wrapped(
        self, source: Path, tmp_path: Path, sampler_settings: Settings
    ) -> None:
        """Test that unexpected errors are wrapped in UnclassifiedError."""
        with (
            patch(
                "spreadsheet_sampler.services.sampling_processor.TableExtractor.extract",
                side_effect=KeyError("boom"),
            ),
            pytest.raises(UnclassifiedError) as exc_info,
        ):
            process_file(source, tmp_path, SampleSpec.count(1), settings=sampler_settings)

        assert exc_info.value.error_code == ErrorCode.UNEXPECTED_ERROR
        assert isinstance(exc_info.value.__cause__, KeyError)
        assert exc_info.value.details["error_type"] == "KeyError"
