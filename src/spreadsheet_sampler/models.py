"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from spreadsheet_sampler.sample_spec import SampleMode


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: str
    version: str


class RowMappingModel(BaseModel):
    """One sampled row, in 1-based spreadsheet row numbers."""

    original_row: int = Field(..., description="Row number in the source sheet")
    new_row: int = Field(..., description="Row number in the result sheet")


class SampleResponse(BaseModel):
    """Response model for the sampling endpoint."""

    job_id: str = Field(..., description="Identifier of the stored artifacts")
    filename: str = Field(..., description="Original filename of uploaded workbook")
    mode: SampleMode = Field(..., description="Sampling instruction kind")
    value: float | int = Field(..., description="Percentage or row count requested")
    row_count: int = Field(..., description="Number of data rows found")
    sampled_count: int = Field(..., description="Number of rows copied")
    first_data_row: int = Field(..., description="First data row number (1-based)")
    last_data_row: int = Field(..., description="Last data row number (1-based)")
    mappings: list[RowMappingModel] = Field(
        default_factory=list, description="Sampled rows in draw order"
    )
    report: str = Field(..., description="Plain-text explanation of the run")
    artifacts: list[str] = Field(
        default_factory=list, description="Names of the downloadable files"
    )
    message: str = Field(..., description="Confirmation shown to the user")


class ErrorDetail(BaseModel):
    """Detailed error response model with error codes."""

    detail: str = Field(..., description="Error message")
    error_code: str | None = Field(
        default=None, description="Machine-readable error code (e.g., E4001)"
    )
    message: str | None = Field(
        default=None, description="Localized message shown to the user"
    )
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error context"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for tracing and debugging"
    )

