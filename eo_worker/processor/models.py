from dataclasses import dataclass, field, replace
from enum import Enum

from eo_worker.fetcher.models import DocumentDescriptor

BENEFICIARY_GROUPS: tuple[str, ...] = ("average", "poorest", "richest")

ImpactMapping = dict[str, str]


class Stage(str, Enum):
    """Per-job pipeline states, in execution order."""

    QUEUED = "queued"
    DEDUPING = "deduping"
    EXTRACTING = "extracting"
    CHUNKING = "chunking"
    SUMMARIZING = "summarizing"
    ASSESSING_IMPACT = "assessing_impact"
    VALIDATING = "validating"
    PERSISTING = "persisting"


class JobOutcome(str, Enum):
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    FAILED = "failed"
    REQUEUED = "requeued"
    ABANDONED = "abandoned"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProcessingJob:
    """A descriptor plus how many times it has been re-queued."""

    descriptor: DocumentDescriptor
    retries: int = 0

    def requeued(self) -> "ProcessingJob":
        return replace(self, retries=self.retries + 1)


@dataclass
class SummaryRecord:
    """The persisted unit, one per executive order."""

    eo_id: str
    title: str
    date_issued: str
    president: str
    html_url: str
    pdf_url: str
    summary: list[str] = field(default_factory=list)
    impact: ImpactMapping = field(default_factory=dict)
    primary_beneficiary: str = "average"

    def to_document(self) -> dict[str, object]:
        """Return the JSON shape stored and served by the read API."""
        return {
            "eo_id": self.eo_id,
            "title": self.title,
            "date_issued": self.date_issued,
            "president": self.president,
            "html_url": self.html_url,
            "pdf_url": self.pdf_url,
            "summary": list(self.summary),
            "impact": {group: self.impact.get(group, "") for group in BENEFICIARY_GROUPS},
            "primary_beneficiary": self.primary_beneficiary,
        }


@dataclass
class BatchReport:
    """Terminal outcome counts for one ingestion run."""

    total: int = 0
    outcomes: dict[JobOutcome, int] = field(default_factory=dict)

    def record(self, outcome: JobOutcome) -> None:
        self.outcomes[outcome] = self.outcomes.get(outcome, 0) + 1

    def count(self, outcome: JobOutcome) -> int:
        return self.outcomes.get(outcome, 0)

    @property
    def done(self) -> int:
        return sum(self.outcomes.values())
