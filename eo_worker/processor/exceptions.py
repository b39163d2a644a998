class ProcessorError(Exception):
    """Base exception for all per-document pipeline errors."""


class TextExtractionError(ProcessorError):
    """Raised when a PDF cannot be downloaded or yields implausibly little text."""


class RecordValidationError(ProcessorError):
    """Raised when a built record is missing required fields. Triggers a re-queue."""

    def __init__(self, eo_id: str, missing_fields: list[str]) -> None:
        super().__init__(f"Record {eo_id} is missing fields: {', '.join(missing_fields)}")
        self.eo_id = eo_id
        self.missing_fields = missing_fields


class PipelineCancelledError(ProcessorError):
    """Raised when the batch is cancelled while a document is in flight."""
