"""Spreadsheet Sampler - random row sampling of Excel tables."""

__version__ = "0.1.0"


def main() -> None:
    """Run the FastAPI server using uvicorn."""
    import uvicorn

    from spreadsheet_sampler.config import settings

    uvicorn.run(
        "spreadsheet_sampler.api:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )
