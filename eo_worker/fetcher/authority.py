"""Derives the issuing president from a publication date."""

from datetime import date

UNKNOWN_PRESIDENT = "Unknown"

# Most recent term first; a term starts on its inauguration day.
_TERMS: tuple[tuple[date, str], ...] = (
    (date(2025, 1, 20), "Donald Trump"),
    (date(2021, 1, 20), "Joe Biden"),
    (date(2017, 1, 20), "Donald Trump"),
    (date(2009, 1, 20), "Barack Obama"),
    (date(2001, 1, 20), "George W. Bush"),
    (date(1993, 1, 20), "Bill Clinton"),
)


def parse_iso_date(value: str) -> date | None:
    """Parse a YYYY-MM-DD string, returning None when malformed."""
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None


def derive_president(date_str: str) -> str:
    """Return the president in office on date_str, or 'Unknown'."""
    issued = parse_iso_date(date_str)
    if issued is None:
        return UNKNOWN_PRESIDENT
    for term_start, president in _TERMS:
        if issued >= term_start:
            return president
    return UNKNOWN_PRESIDENT
