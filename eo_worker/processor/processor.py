import threading

import httpx

from eo_worker.config.settings import Settings
from eo_worker.database.repositories.summary_repository import SummaryRepository
from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.logging.logger import Log
from eo_worker.pdf.factory import PdfExtractorFactory
from eo_worker.processor.exceptions import PipelineCancelledError
from eo_worker.processor.pipeline import PipelineContext, PipelineStep
from eo_worker.processor.steps import (
    AssessImpactStep,
    ChunkTextStep,
    DeduplicateStep,
    ExtractTextStep,
    PersistRecordStep,
    SummarizeStep,
    ValidateRecordStep,
)
from eo_worker.processor.text_extractor import TextExtractor
from eo_worker.summarization.factory import SummarizerFactory


class Processor:
    """Runs one document through the pipeline steps in order.

    Pipeline: dedupe -> extract -> chunk -> summarize -> assess impact ->
    validate -> persist. Stops after dedupe when the document is already
    stored. Cancellation is checked before every step, so a cancelled run
    never reaches the persist step.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._steps = steps
        self._cancel_event = cancel_event or threading.Event()

    def process(self, descriptor: DocumentDescriptor) -> PipelineContext:
        context = PipelineContext(descriptor=descriptor)
        for step in self._steps:
            if self._cancel_event.is_set():
                raise PipelineCancelledError(
                    f"Cancelled before {step.stage.value} for document {descriptor.eo_id}"
                )
            context.stage = step.stage
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(
                    f"Document {descriptor.eo_id} failed at stage "
                    f"{context.stage.value}: {exc}"
                )
                raise
            if context.skipped:
                break
        return context


def build_processor(
    settings: Settings,
    repository: SummaryRepository,
    cancel_event: threading.Event,
    http_client: httpx.Client,
) -> Processor:
    """Build a Processor with all required adapters.

    http_client is borrowed for PDF downloads; the caller closes it.
    """
    text_extractor = TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        client=http_client,
        min_chars=settings.min_extracted_chars,
        cancel_event=cancel_event,
    )
    summarizer = SummarizerFactory.create(settings, cancel_event)
    steps: list[PipelineStep] = [
        DeduplicateStep(repository),
        ExtractTextStep(text_extractor),
        ChunkTextStep(settings.chunk_size),
        SummarizeStep(summarizer),
        AssessImpactStep(summarizer),
        ValidateRecordStep(),
        PersistRecordStep(repository),
    ]
    return Processor(steps=steps, cancel_event=cancel_event)
