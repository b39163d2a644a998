"""AI-powered executive order summarizer."""

import threading

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from eo_worker.logging.logger import Log
from eo_worker.processor.cancellation import call_cancellable
from eo_worker.processor.exceptions import PipelineCancelledError
from eo_worker.processor.models import ImpactMapping
from eo_worker.summarization.client_base import BaseGenerationClient
from eo_worker.summarization.exceptions import RateLimitedError, SummarizationError
from eo_worker.summarization.impact_parser import parse_impact_response
from eo_worker.summarization.prompt_loader import load_prompt


class Summarizer:
    """Turns extracted order text into a bullet summary and an impact assessment.

    One call per chunk, one call to merge the chunk summaries, one call for
    the impact assessment. Only the per-chunk call retries, and only on rate
    limiting: after the n-th rate-limited attempt it waits
    ``backoff_seconds * n`` before trying again. Every provider call and
    every wait returns early with PipelineCancelledError once cancel_event
    is set.
    """

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float = 0.2,
        max_attempts: int = 5,
        backoff_seconds: float = 5,
        chunk_delay_seconds: float = 0.0,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds
        self._chunk_delay_seconds = chunk_delay_seconds
        self._cancel_event = cancel_event or threading.Event()
        self._chunk_system_prompt = load_prompt("chunk_summary_system")
        self._final_system_prompt = load_prompt("final_summary_system")
        self._impact_system_prompt = load_prompt("impact_system")
        self._impact_prompt_template = load_prompt("impact_prompt")

    def summarize_chunk(self, text: str, chunk_index: int) -> str:
        """Summarize one chunk, retrying with linear backoff on rate limits."""
        retrying = Retrying(
            retry=retry_if_exception_type(RateLimitedError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_incrementing(start=self._backoff_seconds, increment=self._backoff_seconds),
            sleep=self._wait,
            before_sleep=lambda state: self._log_rate_limited(chunk_index, state),
        )
        try:
            return retrying(self._call_ai, self._chunk_system_prompt, text)
        except RetryError as exc:
            raise SummarizationError(
                f"Chunk {chunk_index} still rate limited after "
                f"{exc.last_attempt.attempt_number} attempts"
            ) from exc.last_attempt.exception()

    def merge_summaries(self, summaries: list[str]) -> str:
        """Combine ordered chunk summaries into one final bullet list."""
        if not summaries:
            raise SummarizationError("No chunk summaries to merge")
        return self._call_ai(self._final_system_prompt, "\n".join(summaries))

    def assess_impact(self, summary: str) -> ImpactMapping:
        """Ask for one impact sentence per beneficiary group."""
        prompt = self._impact_prompt_template.format(summary=summary)
        raw_response = self._call_ai(self._impact_system_prompt, prompt)
        Log.debug(f"Impact raw response:\n{raw_response}")
        return parse_impact_response(raw_response)

    def throttle(self) -> None:
        """Pause between consecutive chunk calls of one document."""
        if self._chunk_delay_seconds > 0:
            self._wait(self._chunk_delay_seconds)

    def _call_ai(self, system_prompt: str, user_prompt: str) -> str:
        return call_cancellable(
            self._cancel_event, "AI provider call", self._complete, system_prompt, user_prompt
        )

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )

    def _log_rate_limited(self, chunk_index: int, state: RetryCallState) -> None:
        delay = state.next_action.sleep if state.next_action else 0
        Log.warning(
            f"Rate limited on chunk {chunk_index} "
            f"(attempt {state.attempt_number}/{self._max_attempts}), retrying in {delay}s"
        )

    def _wait(self, seconds: float) -> None:
        if self._cancel_event.wait(seconds):
            raise PipelineCancelledError("Cancelled while waiting on the AI provider")
