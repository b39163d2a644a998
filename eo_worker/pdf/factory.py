from eo_worker.config.settings import Settings
from eo_worker.pdf.base import BasePdfExtractor
from eo_worker.pdf.pdfplumber_adapter import PdfPlumberAdapter
from eo_worker.pdf.pymupdf_adapter import PyMuPdfAdapter

_ENGINES: dict[str, type[BasePdfExtractor]] = {
    adapter.engine: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
}


class PdfExtractorFactory:
    """Picks the PDF engine named by settings.pdf_engine."""

    @staticmethod
    def create(settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = _ENGINES.get(engine)
        if adapter_cls is None:
            raise ValueError(f"Unknown PDF engine '{engine}'. Choose from: {sorted(_ENGINES)}")
        return adapter_cls()
