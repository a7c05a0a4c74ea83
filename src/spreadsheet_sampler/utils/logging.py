"""Structured logging utilities for the spreadsheet sampler.

This module provides:
- Request/job ID tracking using contextvars for correlation across the pipeline
- Structured logging with consistent format and metadata
- Timing helpers for pipeline runs

Usage:
    from spreadsheet_sampler.utils.logging import (
        get_logger,
        set_request_id,
        LogContext,
    )

    logger = get_logger(__name__)

    with LogContext(job_id="job-456", source="people.xlsx"):
        logger.info("Sampling rows", row_count=120)
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# Context variables for request tracking
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
_job_id_var: ContextVar[str | None] = ContextVar("job_id", default=None)
_extra_context_var: ContextVar[dict[str, Any] | None] = ContextVar(
    "extra_context", default=None
)


def get_request_id() -> str | None:
    """Get the current request ID from context."""
    return _request_id_var.get()


def set_request_id(request_id: str | None) -> None:
    """Set the request ID in context.

    Args:
        request_id: The request ID to set, or None to clear.
    """
    _request_id_var.set(request_id)


def get_job_id() -> str | None:
    """Get the current job ID from context."""
    return _job_id_var.get()


def set_job_id(job_id: str | None) -> None:
    """Set the job ID in context.

    Args:
        job_id: The job ID to set, or None to clear.
    """
    _job_id_var.set(job_id)


def get_extra_context() -> dict[str, Any]:
    """Get additional context from context vars.

    Returns:
        Dictionary of extra context values.
    """
    ctx = _extra_context_var.get()
    return ctx if ctx is not None else {}


def set_extra_context(context: dict[str, Any]) -> None:
    """Set additional context in context vars."""
    _extra_context_var.set(context)


def clear_context() -> None:
    """Clear all context variables."""
    _request_id_var.set(None)
    _job_id_var.set(None)
    _extra_context_var.set(None)


@dataclass
class PerformanceMetrics:
    """Container for timing one pipeline operation.

    Attributes:
        operation: Name of the operation being measured.
        start_time: When the operation started.
        end_time: When the operation ended.
        duration_seconds: Duration in seconds.
        rows_scanned: Number of data rows found in the source sheet.
        rows_sampled: Number of rows copied into the result.
        custom_metrics: Additional custom metrics.
    """

    operation: str
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    duration_seconds: float = 0.0
    rows_scanned: int = 0
    rows_sampled: int = 0
    custom_metrics: dict[str, Any] = field(default_factory=dict)

    def finish(self) -> None:
        """Mark the operation as complete and calculate duration."""
        self.end_time = datetime.now(UTC)
        self.duration_seconds = (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {
            "operation": self.operation,
            "duration_seconds": f"{self.duration_seconds:.3f}",
        }
        if self.rows_scanned > 0:
            result["rows_scanned"] = self.rows_scanned
        if self.rows_sampled > 0:
            result["rows_sampled"] = self.rows_sampled
        if self.custom_metrics:
            result["custom_metrics"] = self.custom_metrics
        return result


class StructuredLogFormatter(logging.Formatter):
    """Log formatter that includes context variables.

    Adds request_id, job_id and any extra context to log records when
    available, creating a consistent structured format for all messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with context information."""
        prefix_parts = []
        request_id = get_request_id()
        if request_id:
            prefix_parts.append(f"request_id={request_id}")
        job_id = get_job_id()
        if job_id:
            prefix_parts.append(f"job_id={job_id}")
        for key, value in get_extra_context().items():
            prefix_parts.append(f"{key}={value}")

        prefix = f"[{' '.join(prefix_parts)}] " if prefix_parts else ""

        original_msg = record.msg
        record.msg = f"{prefix}{original_msg}"
        result = super().format(record)
        record.msg = original_msg

        return result


class StructuredLogger:
    """Logger wrapper that renders keyword arguments as key=value pairs."""

    def __init__(self, name: str) -> None:
        """Initialize the structured logger.

        Args:
            name: Logger name (typically __name__ of the module).
        """
        self._logger = logging.getLogger(name)
        self._name = name

    @property
    def logger(self) -> logging.Logger:
        """Access the underlying Python logger."""
        return self._logger

    def _build_message(
        self,
        message: str,
        **kwargs: Any,
    ) -> str:
        """Build a message with structured key-value pairs."""
        if not kwargs:
            return message

        parts = [f"{k}={v}" for k, v in kwargs.items()]
        return f"{message} | {', '.join(parts)}"

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._logger.debug(self._build_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._logger.info(self._build_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._logger.warning(self._build_message(message, **kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log an error message.

        Args:
            message: Log message.
            exc_info: Whether to include exception info.
            **kwargs: Additional structured data.
        """
        self._logger.error(self._build_message(message, **kwargs), exc_info=exc_info)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an exception with traceback."""
        self._logger.exception(self._build_message(message, **kwargs))

    def log_performance(self, metrics: PerformanceMetrics) -> None:
        """Log performance metrics."""
        self.info(
            f"Performance: {metrics.operation}",
            **metrics.to_dict(),
        )

    def log_sampling_result(
        self,
        source: str,
        success: bool,
        row_count: int | None = None,
        sampled_count: int | None = None,
        error_code: str | None = None,
    ) -> None:
        """Log completion of one sampling run.

        Args:
            source: Name of the source workbook.
            success: Whether both artifacts were produced.
            row_count: Data rows found in the source sheet.
            sampled_count: Rows copied into the result workbook.
            error_code: Error code of the failure, if any.
        """
        kwargs: dict[str, Any] = {"source": source, "success": success}
        if row_count is not None:
            kwargs["row_count"] = row_count
        if sampled_count is not None:
            kwargs["sampled_count"] = sampled_count
        if error_code:
            kwargs["error_code"] = error_code

        level = logging.INFO if success else logging.ERROR
        self._logger.log(level, self._build_message("Sampling completed", **kwargs))


class LogContext:
    """Context manager for adding temporary context to logs.

    Usage:
        with LogContext(job_id="123", source="data.xlsx"):
            logger.info("Processing...")  # Will include job_id and source
    """

    def __init__(self, **kwargs: Any) -> None:
        self._new_context = kwargs
        self._old_context: dict[str, Any] = {}
        self._old_job_id: str | None = None
        self._old_request_id: str | None = None

    def __enter__(self) -> "LogContext":
        """Enter the context, saving old values and setting new ones."""
        self._old_context = get_extra_context().copy()
        self._old_job_id = get_job_id()
        self._old_request_id = get_request_id()

        new_context = dict(self._new_context)
        job_id = new_context.pop("job_id", None)
        request_id = new_context.pop("request_id", None)

        if job_id is not None:
            set_job_id(job_id)
        if request_id is not None:
            set_request_id(request_id)

        merged = self._old_context.copy()
        merged.update(new_context)
        set_extra_context(merged)

        return self

    def __exit__(self, *args: Any) -> None:
        """Exit the context, restoring old values."""
        set_extra_context(self._old_context)
        set_job_id(self._old_job_id)
        set_request_id(self._old_request_id)


@contextmanager
def timed_operation(
    logger: StructuredLogger,
    operation: str,
) -> Generator[PerformanceMetrics, None, None]:
    """Context manager for timing operations.

    Usage:
        with timed_operation(logger, "sampling") as metrics:
            metrics.rows_sampled = 10

        # Automatically logs: "Performance: sampling | duration_seconds=..."

    Args:
        logger: Logger to use for output.
        operation: Name of the operation.

    Yields:
        PerformanceMetrics instance for tracking.
    """
    metrics = PerformanceMetrics(operation=operation)
    try:
        yield metrics
    finally:
        metrics.finish()
        logger.log_performance(metrics)


def configure_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    use_structured_formatter: bool = True,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (int or string like "INFO").
        format_string: Custom format string (uses default if None).
        use_structured_formatter: Whether to use the structured formatter.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter: logging.Formatter
    if use_structured_formatter:
        formatter = StructuredLogFormatter(format_string)
    else:
        formatter = logging.Formatter(format_string)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("Header located", row_index=0, column_count=3)
    """
    return StructuredLogger(name)
