import threading

import httpx

from eo_worker.logging.logger import Log
from eo_worker.pdf.base import BasePdfExtractor
from eo_worker.processor.cancellation import call_cancellable
from eo_worker.processor.exceptions import TextExtractionError


class TextExtractor:
    """Downloads a PDF into memory and extracts its text.

    Output shorter than min_chars is treated as a failed parse or a scanned
    image rather than a genuinely short order. The download is abandoned as
    soon as cancel_event is set.
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        client: httpx.Client,
        min_chars: int = 100,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._client = client
        self._min_chars = min_chars
        self._cancel_event = cancel_event or threading.Event()

    def extract(self, pdf_url: str) -> str:
        """Return the plain text of the PDF at pdf_url.

        Raises:
            TextExtractionError: on download failure or too-short text.
            PdfExtractionError: if the downloaded bytes are not a readable PDF.
            PipelineCancelledError: if cancelled while downloading.
        """
        if not pdf_url:
            raise TextExtractionError("Document has no PDF URL")
        pdf_bytes = call_cancellable(
            self._cancel_event, f"download of {pdf_url}", self._download, pdf_url
        )
        Log.debug(f"Downloaded {len(pdf_bytes)} bytes from {pdf_url}")
        text = self._pdf_extractor.extract(pdf_bytes)
        if len(text) < self._min_chars:
            raise TextExtractionError(
                f"Extracted text too short ({len(text)} chars) from {pdf_url}"
            )
        return text

    def _download(self, pdf_url: str) -> bytes:
        try:
            response = self._client.get(pdf_url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TextExtractionError(f"Failed to download PDF {pdf_url}: {exc}") from exc
        return response.content
