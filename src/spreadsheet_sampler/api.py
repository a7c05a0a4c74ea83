"""FastAPI application for spreadsheet row sampling."""

import asyncio
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated, Any

from fastapi import (
    FastAPI,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from spreadsheet_sampler import __version__
from spreadsheet_sampler.config import settings, validate_settings_on_startup
from spreadsheet_sampler.messages import describe_failure
from spreadsheet_sampler.models import (
    ErrorDetail,
    HealthResponse,
    RowMappingModel,
    SampleResponse,
)
from spreadsheet_sampler.sample_spec import parse_sample_spec
from spreadsheet_sampler.services.sampling_processor import process_file
from spreadsheet_sampler.services.workbook_reader import LOCK_FILE_PREFIX
from spreadsheet_sampler.utils.exceptions import (
    ErrorCode,
    FileTooLargeError,
    JobNotFoundError,
    SamplerError,
    UnsupportedFormatError,
    ValidationError,
)
from spreadsheet_sampler.utils.logging import (
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    set_job_id,
    set_request_id,
)

# Configure structured logging using settings
configure_logging(
    level=settings.log_level_int,
    use_structured_formatter=True,
)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Spreadsheet Sampler API",
        description=(
            "Randomly samples data rows of an Excel table into a new workbook "
            "and explains which rows were taken."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Configure CORS using settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Validate settings on startup
    validate_settings_on_startup(settings)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Any:
        """Assign a request ID, expose it in the response and clear context."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()

    @app.exception_handler(SamplerError)
    async def sampler_exception_handler(
        request: Request, exc: SamplerError
    ) -> JSONResponse:
        """Return structured error responses for classified failures.

        The localized ``message`` is the same text the command line prints.
        """
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.error(
            f"Sampler Error: {exc.message}",
            error_code=exc.error_code.value,
            http_status=exc.get_http_status(),
        )
        return JSONResponse(
            status_code=exc.get_http_status(),
            content=ErrorDetail(
                detail=exc.message,
                error_code=exc.error_code.value,
                message=describe_failure(exc, settings.report_language),
                details=exc.details if exc.details else None,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Custom exception handler for HTTP exceptions."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                detail=str(exc.detail),
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler that hides internal details unless debugging."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.exception(
            f"Unexpected error: {type(exc).__name__}",
            error_type=type(exc).__name__,
        )
        if settings.debug:
            detail = f"Internal server error: {type(exc).__name__}: {exc}"
        else:
            detail = "Internal server error. Please try again later."

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorDetail(
                detail=detail,
                error_code=ErrorCode.INTERNAL_ERROR.value,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Check the health status of the service."""
        request_id = getattr(request.state, "request_id", None)
        logger.debug("Health check requested", request_id=request_id)
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": __version__,
        }

    @app.post(
        "/sample",
        response_model=SampleResponse,
        tags=["Sampling"],
        responses={
            400: {"model": ErrorDetail, "description": "Invalid input"},
            413: {"model": ErrorDetail, "description": "File too large"},
            422: {"model": ErrorDetail, "description": "No table in the workbook"},
        },
    )
    async def sample_workbook(
        request: Request,
        file: Annotated[UploadFile, File(description="Excel workbook to sample")],
        mode: Annotated[str, Form(description="'percentage' or 'count'")],
        value: Annotated[str, Form(description="Percentage (0-100) or row count")],
    ) -> dict[str, Any]:
        """Sample rows of an uploaded workbook.

        The workbook is processed synchronously. The result workbook and the
        explanation are stored under a new job ID and can be downloaded with
        GET /jobs/{job_id}/artifacts/{name}.

        Raises:
            ValidationError: 400 if the file is missing or mode/value are invalid
            UnsupportedFormatError: 400 for Excel lock files (~$ prefix)
            FileTooLargeError: 413 if the file exceeds the size limit
            ExtractionError: 422 if no table can be located
        """
        request_id = getattr(request.state, "request_id", None)

        if file.filename is None or file.filename == "":
            logger.warning("Sample request missing file", request_id=request_id)
            raise ValidationError(
                message="A workbook file must be provided",
                error_code=ErrorCode.MISSING_FILE,
                field="file",
            )

        if file.filename.startswith(LOCK_FILE_PREFIX):
            raise UnsupportedFormatError(
                f"Excel lock file cannot be sampled: {file.filename}",
                file_path=file.filename,
            )

        spec = parse_sample_spec(mode, value)

        file_content = await file.read()
        file_size = len(file_content)
        if file_size > settings.max_file_size_bytes:
            logger.warning(
                "File too large",
                file_size=file_size,
                max_size=settings.max_file_size_bytes,
                request_id=request_id,
            )
            raise FileTooLargeError(
                file_size=file_size,
                max_size=settings.max_file_size_bytes,
            )

        job_id = str(uuid.uuid4())
        set_job_id(job_id)

        upload_dir = Path(settings.temp_upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        temp_filepath = upload_dir / f"{job_id}{Path(file.filename).suffix}"
        temp_filepath.write_bytes(file_content)

        logger.info(
            "Workbook uploaded",
            job_id=job_id,
            filename=file.filename,
            file_size=file_size,
            request_id=request_id,
        )

        try:
            outcome = await asyncio.to_thread(
                process_file,
                temp_filepath,
                Path(settings.results_dir) / job_id,
                spec,
                settings=settings,
                source_name=file.filename,
            )
        finally:
            temp_filepath.unlink(missing_ok=True)

        extraction = outcome.extraction
        return {
            "job_id": job_id,
            "filename": file.filename,
            "mode": spec.mode,
            "value": spec.value,
            "row_count": extraction.region.row_count,
            "sampled_count": len(extraction.sample),
            "first_data_row": extraction.region.first_index + 1,
            "last_data_row": extraction.region.last_index + 1,
            "mappings": [
                RowMappingModel(
                    original_row=mapping.original_row_number,
                    new_row=mapping.new_row_number,
                )
                for mapping in extraction.sample
            ],
            "report": extraction.report_text,
            "artifacts": [outcome.spreadsheet_path.name, outcome.report_path.name],
            "message": outcome.message,
        }

    @app.get(
        "/jobs/{job_id}/artifacts/{name}",
        tags=["Jobs"],
        responses={
            404: {"model": ErrorDetail, "description": "Job or artifact not found"},
        },
    )
    async def get_artifact(request: Request, job_id: str, name: str) -> FileResponse:
        """Download the result workbook or the explanation of a job.

        Raises:
            JobNotFoundError: 404 if the job has no stored artifacts
            HTTPException: 404 if ``name`` is not one of the job's artifacts
        """
        request_id = getattr(request.state, "request_id", None)
        try:
            uuid.UUID(job_id)
        except ValueError:
            raise JobNotFoundError(job_id) from None

        job_dir = Path(settings.results_dir) / job_id
        if not job_dir.is_dir():
            logger.warning("Job not found", job_id=job_id, request_id=request_id)
            raise JobNotFoundError(job_id)

        media_types = {
            settings.spreadsheet_file_name: (
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            ),
            settings.report_file_name: "text/plain; charset=utf-8",
        }
        artifact_path = job_dir / name
        if name not in media_types or not artifact_path.is_file():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Artifact not found: {name}",
            )

        logger.debug("Artifact served", job_id=job_id, name=name, request_id=request_id)
        return FileResponse(artifact_path, media_type=media_types[name], filename=name)

    logger.info("FastAPI application created successfully")
    return app


# Create the application instance
app = create_app()
