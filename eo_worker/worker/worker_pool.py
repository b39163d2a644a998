import queue
import threading

from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.logging.logger import Log
from eo_worker.processor.models import BatchReport, JobOutcome, ProcessingJob
from eo_worker.worker.job_runner import JobRunner


class WorkerPool:
    """Fixed-size pool of threads draining one shared job queue.

    Every descriptor handed to run() produces exactly one done signal, no
    matter how many times its job is re-queued. Re-queued jobs go back onto
    the same queue from inside the worker loop.
    """

    def __init__(
        self,
        job_runner: JobRunner,
        worker_count: int = 1,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._job_runner = job_runner
        self._worker_count = max(1, worker_count)
        self._cancel_event = cancel_event or threading.Event()
        self._jobs: queue.Queue[ProcessingJob | None] = queue.Queue()
        self._done: queue.Queue[tuple[str, JobOutcome]] = queue.Queue()

    def run(self, descriptors: list[DocumentDescriptor]) -> BatchReport:
        """Process a batch and block until every descriptor is done."""
        report = BatchReport(total=len(descriptors))
        Log.info(
            f"Processing {len(descriptors)} executive orders "
            f"with {self._worker_count} workers"
        )
        threads = [
            threading.Thread(
                target=self._work,
                args=(worker_id,),
                name=f"worker-{worker_id}",
                daemon=True,
            )
            for worker_id in range(1, self._worker_count + 1)
        ]
        for thread in threads:
            thread.start()
        for descriptor in descriptors:
            self._jobs.put(ProcessingJob(descriptor=descriptor))

        try:
            self._collect(report)
        finally:
            for _ in threads:
                self._jobs.put(None)
            for thread in threads:
                thread.join()

        Log.info(
            "Batch complete: "
            + ", ".join(f"{outcome.value}={count}" for outcome, count in report.outcomes.items())
        )
        return report

    def cancel(self) -> None:
        self._cancel_event.set()

    def _collect(self, report: BatchReport) -> None:
        while report.done < report.total:
            try:
                eo_id, outcome = self._done.get()
            except KeyboardInterrupt:
                Log.info("Interrupted, cancelling remaining documents")
                self.cancel()
                continue
            report.record(outcome)
            Log.debug(f"Document {eo_id} done ({outcome.value}), {report.done}/{report.total}")

    def _work(self, worker_id: int) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                break
            if self._cancel_event.is_set():
                outcome = JobOutcome.CANCELLED
            else:
                outcome = self._job_runner.run(job, worker_id)
            if outcome is JobOutcome.REQUEUED:
                self._jobs.put(job.requeued())
                continue
            self._done.put((job.descriptor.eo_id, outcome))
