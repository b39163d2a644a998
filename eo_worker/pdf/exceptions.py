class PdfExtractionError(Exception):
    """Raised when a PDF cannot be parsed into text."""
