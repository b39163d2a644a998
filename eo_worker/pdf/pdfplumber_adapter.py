import io
from collections.abc import Iterator

import pdfplumber

from eo_worker.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    engine = "pdfplumber"

    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                yield page.extract_text() or ""
