from eo_worker.database.repositories.summary_repository import SummaryRepository
from eo_worker.logging.logger import Log
from eo_worker.processor.chunker import chunk_text
from eo_worker.processor.exceptions import RecordValidationError
from eo_worker.processor.models import Stage
from eo_worker.processor.pipeline import PipelineContext, PipelineStep
from eo_worker.processor.record_builder import build_record
from eo_worker.processor.text_extractor import TextExtractor
from eo_worker.processor.validator import missing_fields
from eo_worker.summarization.beneficiary import infer_primary_beneficiary
from eo_worker.summarization.summarizer import Summarizer


class DeduplicateStep(PipelineStep):
    stage = Stage.DEDUPING

    def __init__(self, repository: SummaryRepository) -> None:
        self._repository = repository

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._repository.exists(context.descriptor.eo_id):
            context.skipped = True
            Log.info(f"Document {context.descriptor.eo_id} already stored, skipping")
        return context


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACTING

    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted_text = self._text_extractor.extract(context.descriptor.pdf_url)
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document "
            f"{context.descriptor.eo_id}"
        )
        return context


class ChunkTextStep(PipelineStep):
    stage = Stage.CHUNKING

    def __init__(self, chunk_size: int) -> None:
        self._chunk_size = chunk_size

    def run(self, context: PipelineContext) -> PipelineContext:
        context.chunks = chunk_text(context.extracted_text, self._chunk_size)
        return context


class SummarizeStep(PipelineStep):
    stage = Stage.SUMMARIZING

    def __init__(self, summarizer: Summarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: PipelineContext) -> PipelineContext:
        total = len(context.chunks)
        summaries: list[str] = []
        for index, chunk in enumerate(context.chunks, start=1):
            if index > 1:
                self._summarizer.throttle()
            Log.info(
                f"Summarizing chunk {index}/{total} of document {context.descriptor.eo_id}"
            )
            summaries.append(self._summarizer.summarize_chunk(chunk, index))
        context.chunk_summaries = summaries
        context.final_summary = self._summarizer.merge_summaries(summaries)
        return context


class AssessImpactStep(PipelineStep):
    stage = Stage.ASSESSING_IMPACT

    def __init__(self, summarizer: Summarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.impact = self._summarizer.assess_impact(context.final_summary)
        context.primary_beneficiary = infer_primary_beneficiary(
            context.final_summary, context.impact
        )
        context.record = build_record(
            context.descriptor,
            context.final_summary,
            context.impact,
            context.primary_beneficiary,
        )
        Log.info(
            f"Document {context.descriptor.eo_id}: primary beneficiary "
            f"'{context.primary_beneficiary}'"
        )
        return context


class ValidateRecordStep(PipelineStep):
    stage = Stage.VALIDATING

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before validation")
        missing = missing_fields(context.record)
        if missing:
            raise RecordValidationError(context.descriptor.eo_id, missing)
        return context


class PersistRecordStep(PipelineStep):
    stage = Stage.PERSISTING

    def __init__(self, repository: SummaryRepository) -> None:
        self._repository = repository

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before persist")
        self._repository.save(context.record)
        context.persisted = True
        Log.info(f"Saved summary for document {context.descriptor.eo_id}")
        return context
