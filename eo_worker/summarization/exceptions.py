class SummarizationError(Exception):
    """Raised when a summary or impact assessment cannot be produced."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class RateLimitedError(SummarizationNetworkError):
    """Raised when the AI provider answers with HTTP 429."""
