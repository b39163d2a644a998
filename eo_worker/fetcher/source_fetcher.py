"""Pages through the Federal Register listing API for executive orders."""

import threading
from datetime import date
from typing import Any

import httpx

from eo_worker.config.settings import Settings
from eo_worker.fetcher.authority import derive_president, parse_iso_date
from eo_worker.fetcher.exceptions import FetchError
from eo_worker.fetcher.models import DocumentDescriptor
from eo_worker.logging.logger import Log


class FederalRegisterFetcher:
    """Collects executive-order descriptors, newest first.

    Pagination is capped at ``settings.listing_max_pages`` and stops early on
    the first page without a matching document. Any request or decode error
    aborts the fetch; no partial list is returned.
    """

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._client = client or httpx.Client(
            timeout=settings.http_timeout_seconds,
            follow_redirects=True,
        )

    def fetch_all(self, cancel_event: threading.Event | None = None) -> list[DocumentDescriptor]:
        """Return every matching descriptor, newest first.

        Raises:
            FetchError: on any page failure, or if cancel_event is set between pages.
        """
        descriptors: list[DocumentDescriptor] = []
        for page in range(1, self._settings.listing_max_pages + 1):
            if cancel_event is not None and cancel_event.is_set():
                raise FetchError(f"Listing fetch cancelled before page {page}")
            results = self._fetch_page(page)
            matching = [
                self._to_descriptor(item)
                for item in results
                if item.get("type") == self._settings.listing_document_type
            ]
            Log.info(
                f"Listing page {page}: {len(results)} results, {len(matching)} matching"
            )
            if not matching:
                break
            descriptors.extend(matching)

        descriptors.sort(key=_issue_date_key, reverse=True)
        Log.info(f"Fetched {len(descriptors)} executive orders")
        return descriptors

    def _fetch_page(self, page: int) -> list[dict[str, Any]]:
        params = {
            "conditions[term]": self._settings.listing_search_term,
            "order": "desc",
            "per_page": str(self._settings.listing_page_size),
            "page": str(page),
        }
        try:
            response = self._client.get(self._settings.listing_base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise FetchError(f"API request failed on page {page}: {exc}") from exc
        except ValueError as exc:
            raise FetchError(f"Invalid JSON on page {page}: {exc}") from exc

        if not isinstance(payload, dict):
            raise FetchError(f"Unexpected response shape on page {page}")
        # The API omits "results" entirely past the last page.
        results = payload.get("results") or []
        if not isinstance(results, list):
            raise FetchError(f"'results' on page {page} is not a list")
        return [item for item in results if isinstance(item, dict)]

    @staticmethod
    def _to_descriptor(item: dict[str, Any]) -> DocumentDescriptor:
        publication_date = str(item.get("publication_date") or "")
        return DocumentDescriptor(
            eo_id=str(item.get("document_number") or ""),
            title=str(item.get("title") or ""),
            president=derive_president(publication_date),
            date_issued=publication_date,
            html_url=str(item.get("html_url") or ""),
            pdf_url=str(item.get("pdf_url") or ""),
        )


def _issue_date_key(descriptor: DocumentDescriptor) -> date:
    return parse_iso_date(descriptor.date_issued) or date.min
