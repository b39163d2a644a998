import pytest

from eo_worker.pdf.exceptions import PdfExtractionError
from eo_worker.pdf.pdfplumber_adapter import PdfPlumberAdapter
from eo_worker.pdf.pymupdf_adapter import PyMuPdfAdapter

ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", ADAPTERS)
class TestPdfAdapters:
    def test_extract_returns_text(self, adapter_cls: type, sample_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert "Hello PDF World" in result

    def test_extract_keeps_page_order(self, adapter_cls: type, multi_page_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(multi_page_pdf_bytes)
        assert result.index("Page one content") < result.index("Page two content")

    def test_extract_empty_pdf_returns_empty_string(
        self, adapter_cls: type, empty_pdf_bytes: bytes
    ) -> None:
        assert adapter_cls().extract(empty_pdf_bytes) == ""

    def test_extract_raises_on_invalid_bytes(self, adapter_cls: type) -> None:
        with pytest.raises(PdfExtractionError):
            adapter_cls().extract(b"not a pdf")

    def test_extract_drops_blank_pages(
        self, adapter_cls: type, blank_middle_page_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(blank_middle_page_pdf_bytes)
        assert result.splitlines() == ["First page", "Last page"]

    def test_error_message_names_engine(self, adapter_cls: type) -> None:
        with pytest.raises(PdfExtractionError, match=adapter_cls.engine):
            adapter_cls().extract(b"not a pdf")
