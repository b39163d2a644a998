from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import ClassVar

from eo_worker.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only yield raw page texts; decoding errors are wrapped and
    blank pages (cover sheets, trailing separators in Federal Register
    prints) are dropped here.
    """

    engine: ClassVar[str]

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from every non-blank page, in page order.

        Raises:
            PdfExtractionError: if the PDF cannot be parsed.
        """
        try:
            pages = [text.strip() for text in self._iter_page_texts(pdf_bytes)]
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} could not parse PDF: {exc}") from exc
        return "\n".join(text for text in pages if text)

    @abstractmethod
    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        """Yield the text of each page."""
