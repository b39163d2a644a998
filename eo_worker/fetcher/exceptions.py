class FetchError(Exception):
    """Raised when the listing API cannot be read. Aborts the whole batch."""
