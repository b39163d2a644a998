import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from eo_worker.config.settings import Settings
from eo_worker.database.connection import close_pool, get_connection, init_pool
from eo_worker.database.schema import ensure_schema
from eo_worker.processor.models import SummaryRecord


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "eo_summaries_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for eo_id in cleanup:
                cur.execute("DELETE FROM summaries WHERE eo_id = %s", (eo_id,))
        conn.commit()


@pytest.fixture
def make_record(integration_cleanup: list[str]):  # type: ignore[no-untyped-def]
    """Build a record with a test-only eo_id that is deleted after the test."""

    def _make(eo_id: str, date_issued: str = "2025-01-30", **overrides: Any) -> SummaryRecord:
        integration_cleanup.append(eo_id)
        fields: dict[str, Any] = {
            "eo_id": eo_id,
            "title": f"Integration order {eo_id}",
            "date_issued": date_issued,
            "president": "Donald Trump",
            "html_url": f"https://example.test/{eo_id}",
            "pdf_url": f"https://example.test/{eo_id}.pdf",
            "summary": ["First point", "Second point"],
            "impact": {"average": "A.", "poorest": "P.", "richest": "R."},
            "primary_beneficiary": "average",
        }
        fields.update(overrides)
        return SummaryRecord(**fields)

    return _make
