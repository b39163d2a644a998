from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentDescriptor:
    """Metadata for one executive order, as listed by the Federal Register."""

    eo_id: str
    title: str
    president: str
    date_issued: str
    html_url: str
    pdf_url: str
