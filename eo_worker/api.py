"""Read-side HTTP API over stored summaries."""

import psycopg
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from eo_worker.config.settings import Settings
from eo_worker.database.connection import close_pool, init_pool
from eo_worker.database.repositories.summary_repository import SummaryRepository
from eo_worker.logging.logger import Log
from eo_worker.processor.models import SummaryRecord

NO_MATCHES_MESSAGE = "No matching executive orders found."
NOT_FOUND_MESSAGE = "Executive order not found."
STORE_ERROR_MESSAGE = "Failed to read documents"


def filter_records(
    records: list[SummaryRecord],
    president: str | None = None,
    year: str | None = None,
    month: str | None = None,
    day: str | None = None,
) -> list[SummaryRecord]:
    """Apply the query-string filters of GET /api/eos.

    president is a case-insensitive substring match; year, month and day
    match the segments of the stored YYYY-MM-DD date. Month and day are
    zero-padded first, so month=3 matches "2025-03-14".
    """
    president_filter = (president or "").strip().lower()
    year_filter = (year or "").strip()
    month_filter = _pad(month)
    day_filter = _pad(day)

    matched: list[SummaryRecord] = []
    for record in records:
        segments = record.date_issued.split("-")
        if president_filter and president_filter not in record.president.lower():
            continue
        if year_filter and not record.date_issued.startswith(year_filter):
            continue
        if month_filter and (len(segments) < 2 or segments[1] != month_filter):
            continue
        if day_filter and (len(segments) < 3 or segments[2][:2] != day_filter):
            continue
        matched.append(record)
    return matched


def _pad(value: str | None) -> str:
    value = (value or "").strip()
    return value.zfill(2) if value else ""


def create_app(repository: SummaryRepository | None = None) -> FastAPI:
    repo = repository or SummaryRepository()
    app = FastAPI(title="Executive order summaries")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
        Log.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(psycopg.Error)
    async def store_error(_request: Request, exc: psycopg.Error) -> JSONResponse:
        Log.error(f"Store error: {exc}")
        return JSONResponse(status_code=500, content={"error": STORE_ERROR_MESSAGE})

    @app.get("/api/eos")
    def list_eos(
        president: str | None = None,
        year: str | None = None,
        month: str | None = None,
        day: str | None = None,
    ) -> JSONResponse:
        records = filter_records(repo.find_all(), president, year, month, day)
        if not records:
            return JSONResponse(status_code=404, content={"error": NO_MATCHES_MESSAGE})
        return JSONResponse(content=[record.to_document() for record in records])

    @app.get("/api/eos/{eo_id}")
    def get_eo(eo_id: str) -> JSONResponse:
        Log.info(f"Looking up document {eo_id}")
        record = repo.find_by_id(eo_id)
        if record is None:
            return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
        return JSONResponse(content=record.to_document())

    return app


def main() -> None:
    """Entry point: initialize pool -> serve the read API."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    try:
        uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
