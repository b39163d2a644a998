from eo_worker.logging.logger import Log
from eo_worker.processor.exceptions import PipelineCancelledError, RecordValidationError
from eo_worker.processor.models import JobOutcome, ProcessingJob
from eo_worker.processor.processor import Processor


class JobRunner:
    """Run one job, catch exceptions, and decide what happens to it next."""

    def __init__(self, processor: Processor, max_requeues: int) -> None:
        self._processor = processor
        self._max_requeues = max_requeues

    def run(self, job: ProcessingJob, worker_id: int) -> JobOutcome:
        """Execute a single job. Never raises for per-document failures."""
        eo_id = job.descriptor.eo_id
        Log.info(f"[Worker {worker_id}] Processing document {eo_id} (retry {job.retries})")
        try:
            context = self._processor.process(job.descriptor)
        except RecordValidationError as exc:
            return self._handle_invalid_record(job, worker_id, exc)
        except PipelineCancelledError as exc:
            Log.warning(f"[Worker {worker_id}] Document {eo_id} cancelled: {exc}")
            return JobOutcome.CANCELLED
        except Exception as exc:
            Log.error(f"[Worker {worker_id}] Document {eo_id} failed, not retrying: {exc}")
            return JobOutcome.FAILED

        if context.skipped:
            return JobOutcome.SKIPPED
        Log.info(f"[Worker {worker_id}] Document {eo_id} completed successfully")
        return JobOutcome.PERSISTED

    def _handle_invalid_record(
        self,
        job: ProcessingJob,
        worker_id: int,
        exc: RecordValidationError,
    ) -> JobOutcome:
        """Re-queue while under the ceiling, otherwise abandon."""
        eo_id = job.descriptor.eo_id
        if job.retries < self._max_requeues:
            Log.warning(
                f"[Worker {worker_id}] {exc}; re-queuing "
                f"(retry {job.retries + 1}/{self._max_requeues})"
            )
            return JobOutcome.REQUEUED
        Log.error(
            f"[Worker {worker_id}] Document {eo_id} failed validation "
            f"{job.retries + 1} times, abandoning"
        )
        return JobOutcome.ABANDONED
