from collections.abc import Iterator

import pymupdf

from eo_worker.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    """Faster engine; text order follows the content stream, not layout."""

    engine = "pymupdf"

    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                yield page.get_text()
