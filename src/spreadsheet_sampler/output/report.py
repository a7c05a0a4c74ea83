"""Plain-text explanation of a sampling run.

The explanation names the source, describes the data region and the sampling
instruction, then lists every sampled row as ``<old> ---> <new>`` using the
row numbers a spreadsheet user sees (1-based).
"""

from __future__ import annotations

from dataclasses import dataclass

from spreadsheet_sampler.sample_spec import SampleSpec
from spreadsheet_sampler.services.region_locator import DataRegion
from spreadsheet_sampler.services.sampler import SampleResult

MAPPING_ARROW = " ---> "


@dataclass(frozen=True)
class ReportTemplate:
    """Wording of the explanation; placeholders use ``str.format`` syntax."""

    source: str
    row_count: str
    first_row: str
    last_row: str
    percentage_instruction: str
    count_instruction: str
    sampled_count: str
    mapping_heading: str


LITHUANIAN_TEMPLATE = ReportTemplate(
    source="Atrenkami duomenys iš failo: {source}\n",
    row_count="Bendras duomenų eilučių skaičius: {row_count}\n",
    first_row="Pirmos duomenų eilutės numeris: {row_number}\n",
    last_row="Paskutinės duomenų eilutės numeris: {row_number}\n",
    percentage_instruction=(
        "Nustatyta atsitiktinės atrankos būdu atrinkti {value}% "
        "visų duomenų eilučių.\n"
    ),
    count_instruction=(
        "Nustatyta atsitiktinės atrankos būdu atrinkti {value} duomenų eilutes.\n"
    ),
    sampled_count="Bendras atrinktų eilučių skaičius: {sampled_count}\n",
    mapping_heading="Atrinktų eilučių numeriai:\n(Sename faile -> naujame faile)\n\n",
)

ENGLISH_TEMPLATE = ReportTemplate(
    source="Data sampled from file: {source}\n",
    row_count="Total number of data rows: {row_count}\n",
    first_row="First data row number: {row_number}\n",
    last_row="Last data row number: {row_number}\n",
    percentage_instruction="Randomly selecting {value}% of all data rows.\n",
    count_instruction="Randomly selecting {value} data rows.\n",
    sampled_count="Total number of selected rows: {sampled_count}\n",
    mapping_heading="Selected row numbers:\n(Old file -> new file)\n\n",
)

TEMPLATES: dict[str, ReportTemplate] = {
    "lt": LITHUANIAN_TEMPLATE,
    "en": ENGLISH_TEMPLATE,
}


def get_template(language: str) -> ReportTemplate:
    """Return the bundled template for a language code."""
    try:
        return TEMPLATES[language]
    except KeyError:
        raise ValueError(f"No report template for language: {language}") from None


def render_report(
    source_name: str,
    region: DataRegion,
    spec: SampleSpec,
    sample: SampleResult,
    template: ReportTemplate = LITHUANIAN_TEMPLATE,
) -> str:
    """Render the explanation text for one sampling run."""
    parts = [
        template.source.format(source=source_name),
        template.row_count.format(row_count=region.row_count),
        template.first_row.format(row_number=region.first_index + 1),
        template.last_row.format(row_number=region.last_index + 1),
    ]
    if spec.is_percentage:
        parts.append(template.percentage_instruction.format(value=spec.value))
    else:
        parts.append(template.count_instruction.format(value=spec.value))
    parts.append(template.sampled_count.format(sampled_count=len(sample)))
    parts.append(template.mapping_heading)
    parts.extend(
        f"{mapping.original_row_number}{MAPPING_ARROW}{mapping.new_row_number}\n"
        for mapping in sample
    )
    return "".join(parts)
