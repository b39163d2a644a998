from eo_worker.database.connection import get_connection

SUMMARIES_DDL = """
CREATE TABLE IF NOT EXISTS summaries (
    eo_id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    date_issued TEXT NOT NULL,
    president TEXT NOT NULL,
    html_url TEXT NOT NULL,
    pdf_url TEXT NOT NULL,
    summary JSONB NOT NULL,
    impact JSONB NOT NULL,
    primary_beneficiary TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


def ensure_schema() -> None:
    """Create the summaries table if it does not exist yet."""
    with get_connection() as conn:
        conn.execute(SUMMARIES_DDL)
        conn.commit()
