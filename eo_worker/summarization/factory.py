import threading
from typing import ClassVar

from eo_worker.config.settings import Settings
from eo_worker.summarization.client_base import BaseGenerationClient
from eo_worker.summarization.example_client_adapter import ExampleClientAdapter
from eo_worker.summarization.openai_client_adapter import OpenAIClientAdapter
from eo_worker.summarization.summarizer import Summarizer


class SummarizerFactory:
    """Creates the configured summarizer and its provider client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(
        cls,
        settings: Settings,
        cancel_event: threading.Event | None = None,
    ) -> Summarizer:
        """Create a configured summarizer from application settings."""
        provider = settings.summarization_provider.strip().lower()
        return Summarizer(
            client=cls.create_client(provider, settings),
            model="example" if provider == "example" else settings.summarization_model_name,
            temperature=settings.summarization_temperature,
            max_attempts=settings.rate_limit_max_attempts,
            backoff_seconds=settings.rate_limit_backoff_seconds,
            chunk_delay_seconds=settings.chunk_delay_seconds,
            cancel_event=cancel_event,
        )

    @classmethod
    def create_client(cls, provider: str, settings: Settings) -> BaseGenerationClient:
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.summarization_api_key,
            timeout_seconds=settings.summarization_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = (settings.summarization_base_url or "").strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "summarization_base_url is required for "
                    "summarization_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {supported}"
        )
