"""Completeness check run before any record is persisted."""

from eo_worker.processor.models import BENEFICIARY_GROUPS, SummaryRecord

_SCALAR_FIELDS = ("eo_id", "title", "date_issued", "president", "html_url", "pdf_url")


def missing_fields(record: SummaryRecord) -> list[str]:
    """Return the names of required fields that are empty, in a stable order."""
    missing = [name for name in _SCALAR_FIELDS if not _filled(getattr(record, name))]
    if not record.summary:
        missing.append("summary")
    missing.extend(
        f"impact.{group}"
        for group in BENEFICIARY_GROUPS
        if not _filled(record.impact.get(group))
    )
    return missing


def validate_record(record: SummaryRecord) -> bool:
    return not missing_fields(record)


def _filled(value: object) -> bool:
    return isinstance(value, str) and value != ""
