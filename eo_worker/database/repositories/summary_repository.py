from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from eo_worker.database.connection import get_connection
from eo_worker.processor.models import SummaryRecord

_COLUMNS = (
    "eo_id, title, date_issued, president, html_url, pdf_url, "
    "summary, impact, primary_beneficiary"
)


class SummaryRepository:
    """Database operations for the summaries table, keyed by eo_id."""

    def exists(self, eo_id: str) -> bool:
        """Return True if a summary for eo_id is already stored.

        A missing row is a normal False; connection or query errors propagate.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM summaries WHERE eo_id = %s", (eo_id,))
                row = cur.fetchone()
        return row is not None

    def save(self, record: SummaryRecord) -> None:
        """Upsert a finished record.

        Uniqueness per run is guaranteed by the exists() check that precedes
        processing, so this does not look before writing.
        """
        document = record.to_document()
        with get_connection() as conn:
            conn.execute(
                f"""
                INSERT INTO summaries ({_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (eo_id) DO UPDATE SET
                    title = EXCLUDED.title,
                    date_issued = EXCLUDED.date_issued,
                    president = EXCLUDED.president,
                    html_url = EXCLUDED.html_url,
                    pdf_url = EXCLUDED.pdf_url,
                    summary = EXCLUDED.summary,
                    impact = EXCLUDED.impact,
                    primary_beneficiary = EXCLUDED.primary_beneficiary,
                    updated_at = NOW()
                """,
                (
                    record.eo_id,
                    record.title,
                    record.date_issued,
                    record.president,
                    record.html_url,
                    record.pdf_url,
                    Jsonb(document["summary"]),
                    Jsonb(document["impact"]),
                    record.primary_beneficiary,
                ),
            )
            conn.commit()

    def find_by_id(self, eo_id: str) -> SummaryRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM summaries WHERE eo_id = %s",
                    (eo_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_record(row)

    def find_all(self) -> list[SummaryRecord]:
        """Return every stored summary, newest issue date first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM summaries ORDER BY date_issued DESC, eo_id"
                )
                rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]


def _row_to_record(row: dict[str, Any]) -> SummaryRecord:
    return SummaryRecord(
        eo_id=row["eo_id"],
        title=row["title"],
        date_issued=row["date_issued"],
        president=row["president"],
        html_url=row["html_url"],
        pdf_url=row["pdf_url"],
        summary=list(row["summary"] or []),
        impact=dict(row["impact"] or {}),
        primary_beneficiary=row["primary_beneficiary"],
    )
