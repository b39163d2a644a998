import sys
import threading

import httpx

from eo_worker.config.settings import Settings
from eo_worker.database.connection import close_pool, init_pool
from eo_worker.database.repositories.summary_repository import SummaryRepository
from eo_worker.database.schema import ensure_schema
from eo_worker.fetcher.exceptions import FetchError
from eo_worker.fetcher.source_fetcher import FederalRegisterFetcher
from eo_worker.logging.logger import Log
from eo_worker.processor.models import BatchReport
from eo_worker.processor.processor import build_processor
from eo_worker.worker.job_runner import JobRunner
from eo_worker.worker.worker_pool import WorkerPool

EXIT_INTERRUPTED = 130


def run_ingestion(
    settings: Settings,
    cancel_event: threading.Event | None = None,
) -> BatchReport:
    """Fetch the listing once and push every order through the worker pool.

    One HTTP client serves the listing and every PDF download, and is closed
    when the batch ends.

    Raises:
        FetchError: if the listing cannot be fetched; nothing is processed.
    """
    cancel_event = cancel_event or threading.Event()
    with httpx.Client(
        timeout=settings.http_timeout_seconds,
        follow_redirects=True,
    ) as http_client:
        descriptors = FederalRegisterFetcher(settings, client=http_client).fetch_all(cancel_event)

        repository = SummaryRepository()
        processor = build_processor(settings, repository, cancel_event, http_client)
        job_runner = JobRunner(processor, settings.max_requeues)
        pool = WorkerPool(job_runner, settings.worker_count, cancel_event)
        return pool.run(descriptors)


def main() -> None:
    """Entry point: initialize pool -> fetch -> process batch."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        ensure_schema()
        run_ingestion(settings)
    except FetchError as exc:
        Log.error(f"Failed to fetch executive orders: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        Log.warning("Interrupted, ingestion aborted")
        sys.exit(EXIT_INTERRUPTED)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
