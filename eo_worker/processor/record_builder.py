from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.processor.models import BENEFICIARY_GROUPS, ImpactMapping, SummaryRecord

_BULLET_PREFIXES = ("- ", "* ")


def split_markdown_bullets(markdown: str) -> list[str]:
    """Return the text of each '- ' or '* ' bullet line, in order."""
    bullets: list[str] = []
    for line in markdown.splitlines():
        line = line.strip()
        for prefix in _BULLET_PREFIXES:
            if line.startswith(prefix):
                bullet = line[len(prefix):].strip()
                if bullet:
                    bullets.append(bullet)
                break
    return bullets


def build_record(
    descriptor: DocumentDescriptor,
    final_summary: str,
    impact: ImpactMapping,
    primary_beneficiary: str,
) -> SummaryRecord:
    return SummaryRecord(
        eo_id=descriptor.eo_id,
        title=descriptor.title,
        date_issued=descriptor.date_issued,
        president=descriptor.president,
        html_url=descriptor.html_url,
        pdf_url=descriptor.pdf_url,
        summary=split_markdown_bullets(final_summary),
        impact={group: impact.get(group, "") for group in BENEFICIARY_GROUPS},
        primary_beneficiary=primary_beneficiary,
    )
