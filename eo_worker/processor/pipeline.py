from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.processor.models import ImpactMapping, Stage, SummaryRecord


@dataclass(slots=True)
class PipelineContext:
    """Accumulates data as one document moves through the pipeline steps."""

    descriptor: DocumentDescriptor
    stage: Stage = Stage.QUEUED
    skipped: bool = False
    extracted_text: str = ""
    chunks: list[str] = field(default_factory=list)
    chunk_summaries: list[str] = field(default_factory=list)
    final_summary: str = ""
    impact: ImpactMapping = field(default_factory=dict)
    primary_beneficiary: str = ""
    record: SummaryRecord | None = None
    persisted: bool = False


class PipelineStep(ABC):
    stage: ClassVar[Stage]

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
