"""Services for locating, sampling and copying spreadsheet rows."""

from spreadsheet_sampler.services.cell_coercer import coerce
from spreadsheet_sampler.services.region_locator import (
    DataRegion,
    HeaderRow,
    locate_data_region,
    locate_header,
)
from spreadsheet_sampler.services.sampler import (
    RowMapping,
    SampleResult,
    compute_target_count,
    sample_rows,
)

__all__ = [
    "DataRegion",
    "HeaderRow",
    "RowMapping",
    "SampleResult",
    "coerce",
    "compute_target_count",
    "locate_data_region",
    "locate_header",
    "sample_rows",
]
