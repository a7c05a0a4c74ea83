"""Output generation for sampling results.

This module renders the plain-text explanation of a run; the exporter in
``output.exporter`` writes it to disk next to the result workbook.
"""

from spreadsheet_sampler.output.report import (
    ENGLISH_TEMPLATE,
    LITHUANIAN_TEMPLATE,
    ReportTemplate,
    get_template,
    render_report,
)

__all__ = [
    "ENGLISH_TEMPLATE",
    "LITHUANIAN_TEMPLATE",
    "ReportTemplate",
    "get_template",
    "render_report",
]
