"""Utilities package for the spreadsheet sampler.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from spreadsheet_sampler.utils.exceptions import (
    EmptyDataRegionError,
    ErrorCode,
    ExportError,
    ExtractionError,
    FileError,
    HeaderNotFoundError,
    HTTPStatusMixin,
    SamplerError,
    UnclassifiedError,
    UnsupportedFormatError,
    ValidationError,
)
from spreadsheet_sampler.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Exceptions
    "EmptyDataRegionError",
    "ErrorCode",
    "ExportError",
    "ExtractionError",
    "FileError",
    "HeaderNotFoundError",
    "HTTPStatusMixin",
    "SamplerError",
    "UnclassifiedError",
    "UnsupportedFormatError",
    "ValidationError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
