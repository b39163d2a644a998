from abc import ABC, abstractmethod


class BaseGenerationClient(ABC):
    """One chat-completion round trip against a text generation provider.

    Implementations never retry. They must surface provider throttling as
    RateLimitedError so the summarizer can back off; every other failure is
    a SummarizationError.
    """

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the stripped text of the first completion choice."""
