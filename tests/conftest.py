import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from eo_worker.fetcher.models import DocumentDescriptor

ORDER_LINES = [
    "Executive Order 14999 of January 30, 2025",
    "By the authority vested in me as President by the Constitution",
    "and the laws of the United States of America, it is hereby ordered:",
    "Section 1. Purpose. This order directs agencies to review programs.",
    "Sec. 2. Policy. Agencies shall report their findings within 90 days.",
]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def order_pdf_bytes() -> bytes:
    """Generate a one-page PDF with several lines of order text (> 100 chars)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for line in ORDER_LINES:
        c.drawString(72, y, line)
        y -= 20
    c.save()
    return buf.getvalue()


@pytest.fixture()
def descriptor() -> DocumentDescriptor:
    return DocumentDescriptor(
        eo_id="2025-00001",
        title="Reviewing Federal Programs",
        president="Donald Trump",
        date_issued="2025-01-30",
        html_url="https://www.federalregister.gov/documents/2025/01/30/2025-00001/x",
        pdf_url="https://www.govinfo.gov/content/pkg/FR-2025-01-30/pdf/2025-00001.pdf",
    )


@pytest.fixture()
def blank_middle_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF whose middle page is blank."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "First page")
    c.showPage()
    c.showPage()
    c.drawString(72, 720, "Last page")
    c.save()
    return buf.getvalue()
