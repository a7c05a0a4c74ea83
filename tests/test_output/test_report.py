"""Tests for the plain-text explanation."""

import pytest

from spreadsheet_sampler.output.report import (
    ENGLISH_TEMPLATE,
    LITHUANIAN_TEMPLATE,
    get_template,
    render_report,
)
from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.region_locator import DataRegion
from spreadsheet_sampler.services.sampler import RowMapping, SampleResult


@pytest.fixture
def sample() -> SampleResult:
    return SampleResult(
        mappings=[
            RowMapping(original_index=7, new_row_number=2),
            RowMapping(original_index=3, new_row_number=3),
        ]
    )


class TestRenderReport:
    """Tests for render_report()."""

    def test_lithuanian_narrative(self, sample: SampleResult) -> None:
        """Test the full Lithuanian explanation."""
        text = render_report(
            "people.xlsx",
            DataRegion(first_index=1, last_index=10),
            SampleSpec.count(2),
            sample,
        )
        assert text == (
            "Atrenkami duomenys iš failo: people.xlsx\n"
            "Bendras duomenų eilučių skaičius: 10\n"
            "Pirmos duomenų eilutės numeris: 2\n"
            "Paskutinės duomenų eilutės numeris: 11\n"
            "Nustatyta atsitiktinės atrankos būdu atrinkti 2 duomenų eilutes.\n"
            "Bendras atrinktų eilučių skaičius: 2\n"
            "Atrinktų eilučių numeriai:\n"
            "(Sename faile -> naujame faile)\n"
            "\n"
            "8 ---> 2\n"
            "4 ---> 3\n"
        )

    def test_percentage_instruction(self, sample: SampleResult) -> None:
        """Test the percentage instruction line."""
        text = render_report(
            "people.xlsx",
            DataRegion(first_index=1, last_index=4),
            SampleSpec.percentage(50),
            sample,
            template=ENGLISH_TEMPLATE,
        )
        assert "Randomly selecting 50.0% of all data rows.\n" in text
        assert "Total number of selected rows: 2\n" in text

    def test_only_mapping_lines_use_arrow(self, sample: SampleResult) -> None:
        """Test that only mapping lines contain the arrow."""
        text = render_report(
            "people.xlsx",
            DataRegion(first_index=1, last_index=10),
            SampleSpec.count(2),
            sample,
        )
        arrow_lines = [line for line in text.splitlines() if "--->" in line]
        assert arrow_lines == ["8 ---> 2", "4 ---> 3"]

    def test_empty_sample_has_no_mapping_lines(self) -> None:
        """Test that an empty sample lists no mappings."""
        text = render_report(
            "people.xlsx",
            DataRegion(first_index=1, last_index=3),
            SampleSpec.percentage(0),
            SampleResult(),
        )
        assert "--->" not in text
        assert text.endswith("(Sename faile -> naujame faile)\n\n")


class TestGetTemplate:
    def test_bundled_languages(self) -> None:
        """Test lookup of the bundled templates."""
        assert get_template("lt") is LITHUANIAN_TEMPLATE
        assert get_template("en") is ENGLISH_TEMPLATE

    def test_unknown_language(self) -> None:
        """Test that an unknown language is rejected."""
        with pytest.raises(ValueError, match="No report template"):
            get_template("de")
