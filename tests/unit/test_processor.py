import threading
from unittest.mock import MagicMock

import pytest

from eo_worker.database.repositories.summary_repository import SummaryRepository
from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.processor.exceptions import (
    PipelineCancelledError,
    RecordValidationError,
    TextExtractionError,
)
from eo_worker.processor.models import Stage
from eo_worker.processor.processor import Processor
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
from eo_worker.summarization.summarizer import Summarizer

FULL_IMPACT = {"average": "A.", "poorest": "P.", "richest": "R."}


def _make_pipeline(
    chunk_size: int = 3000,
    cancel_event: threading.Event | None = None,
) -> tuple[Processor, MagicMock, MagicMock, MagicMock]:
    repository = MagicMock(spec=SummaryRepository)
    text_extractor = MagicMock(spec=TextExtractor)
    summarizer = MagicMock(spec=Summarizer)

    repository.exists.return_value = False
    text_extractor.extract.return_value = "x" * 500
    summarizer.summarize_chunk.side_effect = lambda _text, index: f"- chunk {index}"
    summarizer.merge_summaries.return_value = "- Final point one\n- Final point two"
    summarizer.assess_impact.return_value = dict(FULL_IMPACT)

    steps = [
        DeduplicateStep(repository),
        ExtractTextStep(text_extractor),
        ChunkTextStep(chunk_size),
        SummarizeStep(summarizer),
        AssessImpactStep(summarizer),
        ValidateRecordStep(),
        PersistRecordStep(repository),
    ]
    return Processor(steps=steps, cancel_event=cancel_event), repository, text_extractor, summarizer


class TestProcessorPipeline:
    def test_runs_all_steps_and_persists_record(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, text_extractor, summarizer = _make_pipeline()

        context = processor.process(descriptor)

        repository.exists.assert_called_once_with("2025-00001")
        text_extractor.extract.assert_called_once_with(descriptor.pdf_url)
        summarizer.summarize_chunk.assert_called_once_with("x" * 500, 1)
        summarizer.merge_summaries.assert_called_once_with(["- chunk 1"])
        summarizer.assess_impact.assert_called_once_with("- Final point one\n- Final point two")
        repository.save.assert_called_once_with(context.record)
        assert context.persisted is True
        assert context.stage is Stage.PERSISTING
        assert context.record is not None
        assert context.record.summary == ["Final point one", "Final point two"]
        assert context.record.impact == FULL_IMPACT

    def test_summarizes_every_chunk_in_order(self, descriptor: DocumentDescriptor) -> None:
        processor, _repo, _extractor, summarizer = _make_pipeline(chunk_size=200)

        processor.process(descriptor)

        assert [c.args[1] for c in summarizer.summarize_chunk.call_args_list] == [1, 2, 3]
        summarizer.merge_summaries.assert_called_once_with(["- chunk 1", "- chunk 2", "- chunk 3"])
        assert summarizer.throttle.call_count == 2

    def test_skips_document_already_stored(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, text_extractor, summarizer = _make_pipeline()
        repository.exists.return_value = True

        context = processor.process(descriptor)

        assert context.skipped is True
        assert context.stage is Stage.DEDUPING
        text_extractor.extract.assert_not_called()
        summarizer.summarize_chunk.assert_not_called()
        repository.save.assert_not_called()

    def test_extraction_failure_stops_pipeline(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, text_extractor, summarizer = _make_pipeline()
        text_extractor.extract.side_effect = TextExtractionError("too short")

        with pytest.raises(TextExtractionError, match="too short"):
            processor.process(descriptor)

        summarizer.summarize_chunk.assert_not_called()
        repository.save.assert_not_called()

    def test_store_error_in_dedupe_propagates(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, text_extractor, _summarizer = _make_pipeline()
        repository.exists.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            processor.process(descriptor)

        text_extractor.extract.assert_not_called()

    def test_invalid_record_is_not_persisted(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, _extractor, summarizer = _make_pipeline()
        summarizer.assess_impact.return_value = {
            "average": "Unparsed impact response: ???",
            "poorest": "",
            "richest": "",
        }

        with pytest.raises(RecordValidationError) as exc_info:
            processor.process(descriptor)

        assert exc_info.value.missing_fields == ["impact.poorest", "impact.richest"]
        repository.save.assert_not_called()

    def test_summary_without_bullets_fails_validation(self, descriptor: DocumentDescriptor) -> None:
        processor, repository, _extractor, summarizer = _make_pipeline()
        summarizer.merge_summaries.return_value = "A paragraph with no bullets."

        with pytest.raises(RecordValidationError, match="summary"):
            processor.process(descriptor)

        repository.save.assert_not_called()

    def test_primary_beneficiary_is_inferred(self, descriptor: DocumentDescriptor) -> None:
        processor, _repo, _extractor, summarizer = _make_pipeline()
        summarizer.merge_summaries.return_value = "- Expands investment incentives."

        context = processor.process(descriptor)

        assert context.record is not None
        assert context.record.primary_beneficiary == "richest"


class TestProcessorCancellation:
    def test_cancelled_before_start_does_nothing(self, descriptor: DocumentDescriptor) -> None:
        cancel_event = threading.Event()
        cancel_event.set()
        processor, repository, _extractor, _summarizer = _make_pipeline(cancel_event=cancel_event)

        with pytest.raises(PipelineCancelledError):
            processor.process(descriptor)

        repository.exists.assert_not_called()

    def test_cancel_mid_pipeline_never_persists(self, descriptor: DocumentDescriptor) -> None:
        cancel_event = threading.Event()
        processor, repository, _extractor, summarizer = _make_pipeline(cancel_event=cancel_event)

        def cancel_during_impact(_summary: str) -> dict[str, str]:
            cancel_event.set()
            return dict(FULL_IMPACT)

        summarizer.assess_impact.side_effect = cancel_during_impact

        with pytest.raises(PipelineCancelledError, match="validating"):
            processor.process(descriptor)

        repository.save.assert_not_called()
