import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook

from spreadsheet_sampler.config import Settings
from spreadsheet_sampler.worksheet import Worksheet


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so sampled rows are reproducible."""
    return random.Random(1234)


@pytest.fixture
def people_sheet() -> Worksheet:
    """Header at row 0 followed by five data rows."""
    return Worksheet.from_values(
        [
            ["Name", "Age", "City"],
            ["Ana", 31, "Vilnius"],
            ["Jonas", 45, "Kaunas"],
            ["Ona", 27, "Klaipėda"],
            ["Petras", 52, "Šiauliai"],
            ["Rūta", 38, "Panevėžys"],
        ],
        name="People",
    )


@pytest.fixture
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Write rows to an .xlsx file with openpyxl and return its path.

    ``None`` rows are skipped entirely; ``None`` values are left unwritten.
    """

    def _make(
        rows: list[list[Any] | None], name: str = "source.xlsx", title: str = "Data"
    ) -> Path:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = title
        for row_number, values in enumerate(rows, start=1):
            if values is None:
                continue
            for column_number, value in enumerate(values, start=1):
                if value is not None:
                    sheet.cell(row=row_number, column=column_number, value=value)
        path = tmp_path / name
        workbook.save(path)
        return path

    return _make


@pytest.fixture
def sampler_settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment, writing under ``tmp_path``."""
    return Settings(
        _env_file=None,
        temp_upload_dir=str(tmp_path / "uploads"),
        results_dir=str(tmp_path / "results"),
        random_seed=None,
    )
