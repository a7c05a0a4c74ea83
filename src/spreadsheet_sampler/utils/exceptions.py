"""Centralized exception classes for the spreadsheet sampler.

This module provides a hierarchy of custom exceptions with error codes,
HTTP status code mapping, and structured error details for consistent
error handling throughout the application.

Exception Hierarchy:
    SamplerError (base)
    ├── FileError
    │   ├── SourceFileNotFoundError
    │   ├── FileTooLargeError
    │   ├── UnsupportedFormatError
    │   └── WorkbookReadError
    ├── ValidationError
    ├── JobNotFoundError
    ├── ExtractionError
    │   ├── HeaderNotFoundError
    │   └── EmptyDataRegionError
    ├── ExportError
    └── UnclassifiedError

Error Codes:
    All errors have a unique error code (e.g., "E4001") that front ends use
    to pick the message shown to the user.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used in the application.

    Error codes are grouped by category:
    - E1xxx: Source file errors
    - E2xxx: Input validation errors
    - E3xxx: Job/artifact lookup errors
    - E4xxx: Extraction errors
    - E5xxx: Export errors
    - E9xxx: Internal/unexpected errors
    """

    # File errors (E1xxx)
    FILE_NOT_FOUND = "E1001"
    FILE_TOO_LARGE = "E1002"
    UNSUPPORTED_FORMAT = "E1003"
    FILE_READ_ERROR = "E1004"
    MISSING_FILE = "E1005"

    # Input validation errors (E2xxx)
    INVALID_PERCENTAGE = "E2001"
    INVALID_COUNT = "E2002"
    INVALID_INPUT = "E2003"

    # Job errors (E3xxx)
    JOB_NOT_FOUND = "E3001"

    # Extraction errors (E4xxx)
    HEADER_NOT_FOUND = "E4001"
    EMPTY_DATA_REGION = "E4002"

    # Export errors (E5xxx)
    SPREADSHEET_EXPORT_FAILED = "E5001"
    REPORT_EXPORT_FAILED = "E5002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"
    UNEXPECTED_ERROR = "E9999"


class HTTPStatusMixin:
    """Mixin that provides HTTP status code for exceptions.

    Subclasses set the `http_status` class attribute.
    """

    http_status: int = 500

    def get_http_status(self) -> int:
        """Get the HTTP status code for this exception.

        Returns:
            HTTP status code appropriate for this error.
        """
        return self.http_status


class SamplerError(Exception, HTTPStatusMixin):
    """Base exception for all spreadsheet sampler errors.

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
        http_status: HTTP status code for API responses (default 500).
    """

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for API responses.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# File Errors (E1xxx)
# =============================================================================


class FileError(SamplerError):
    """Base class for source file errors."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILE_READ_ERROR,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file path information.

        Args:
            message: Error message.
            error_code: Error code.
            file_path: Path to the problematic file.
            details: Additional details.
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, error_code, details)
        self.file_path = file_path


class SourceFileNotFoundError(FileError):
    """Raised when the workbook to sample does not exist.

    Note: Named to avoid shadowing built-in FileNotFoundError.
    """

    http_status: int = 404

    def __init__(
        self,
        file_path: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = message or f"File not found: {file_path}"
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_NOT_FOUND,
            file_path=file_path,
            details=details,
        )


class FileTooLargeError(FileError):
    """Raised when an uploaded workbook exceeds the maximum allowed size."""

    http_status: int = 413

    def __init__(
        self,
        file_size: int,
        max_size: int,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with size information.

        Args:
            file_size: Actual file size in bytes.
            max_size: Maximum allowed size in bytes.
            file_path: Optional file path.
            details: Additional details.
        """
        details = details or {}
        details["file_size_bytes"] = file_size
        details["max_size_bytes"] = max_size
        message = (
            f"File size ({file_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_TOO_LARGE,
            file_path=file_path,
            details=details,
        )
        self.file_size = file_size
        self.max_size = max_size


class UnsupportedFormatError(FileError):
    """Raised when a file is not a workbook the reader can decode."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        extension: str | None = None,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if extension is not None:
            details["extension"] = extension
        super().__init__(
            message=message,
            error_code=ErrorCode.UNSUPPORTED_FORMAT,
            file_path=file_path,
            details=details,
        )
        self.extension = extension


class WorkbookReadError(FileError):
    """Raised when a workbook exists but cannot be decoded."""

    http_status: int = 422

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_READ_ERROR,
            file_path=file_path,
            details=details,
        )


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================


class ValidationError(SamplerError):
    """Raised when percentage/count input fails validation."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_INPUT,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with validation details.

        Args:
            message: Main error message.
            error_code: Which input was invalid.
            field: Field that failed validation.
            value: The rejected raw value.
            details: Additional details.
        """
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, error_code, details)
        self.field = field


# =============================================================================
# Job Errors (E3xxx)
# =============================================================================


class JobNotFoundError(SamplerError):
    """Raised when a sampling job or one of its artifacts is unknown."""

    http_status: int = 404

    def __init__(
        self,
        job_id: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["job_id"] = job_id
        message = message or f"Job not found: {job_id}"
        super().__init__(message, ErrorCode.JOB_NOT_FOUND, details)
        self.job_id = job_id


# =============================================================================
# Extraction Errors (E4xxx)
# =============================================================================


class ExtractionError(SamplerError):
    """Base class for failures while locating or sampling the table."""

    http_status: int = 422

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with extraction stage.

        Args:
            message: Error message.
            error_code: Error code.
            stage: The extraction stage where the error occurred.
            details: Additional details.
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        super().__init__(message, error_code, details)
        self.stage = stage


class HeaderNotFoundError(ExtractionError):
    """Raised when no row of the sheet holds a non-empty cell."""

    def __init__(
        self,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if sheet_name is not None:
            details["sheet_name"] = sheet_name
        super().__init__(
            message="No header row found: the sheet has no non-empty cells",
            error_code=ErrorCode.HEADER_NOT_FOUND,
            stage="header_detection",
            details=details,
        )


class EmptyDataRegionError(ExtractionError):
    """Raised when no data rows follow the header row."""

    def __init__(
        self,
        header_row_index: int,
        row_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["header_row_index"] = header_row_index
        details["row_count"] = row_count
        super().__init__(
            message=(
                f"No data rows follow the header row at index {header_row_index}"
            ),
            error_code=ErrorCode.EMPTY_DATA_REGION,
            stage="region_detection",
            details=details,
        )
        self.header_row_index = header_row_index
        self.row_count = row_count


# =============================================================================
# Export Errors (E5xxx)
# =============================================================================


class ExportError(SamplerError):
    """Raised when writing the result workbook or report fails."""

    http_status: int = 500

    SPREADSHEET = "spreadsheet"
    REPORT = "report"

    def __init__(
        self,
        artifact: str,
        file_path: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the artifact that failed.

        Args:
            artifact: Either ExportError.SPREADSHEET or ExportError.REPORT.
            file_path: Destination path that could not be written.
            reason: Underlying error description.
            details: Additional details.
        """
        details = details or {}
        details["artifact"] = artifact
        details["file_path"] = file_path
        if reason:
            details["reason"] = reason
        error_code = (
            ErrorCode.SPREADSHEET_EXPORT_FAILED
            if artifact == self.SPREADSHEET
            else ErrorCode.REPORT_EXPORT_FAILED
        )
        super().__init__(
            message=f"Failed to write {artifact} to {file_path}",
            error_code=error_code,
            details=details,
        )
        self.artifact = artifact
        self.file_path = file_path


# =============================================================================
# Unexpected Errors (E9xxx)
# =============================================================================


class UnclassifiedError(SamplerError):
    """Wraps an unexpected exception raised while parsing or extracting."""

    http_status: int = 500

    def __init__(
        self,
        original: BaseException,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["error_type"] = type(original).__name__
        if stage:
            details["stage"] = stage
        super().__init__(
            message=f"Unexpected error: {type(original).__name__}: {original}",
            error_code=ErrorCode.UNEXPECTED_ERROR,
            details=details,
        )
        self.original = original
