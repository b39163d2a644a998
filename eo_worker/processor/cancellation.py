import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import TypeVar

from eo_worker.processor.exceptions import PipelineCancelledError

T = TypeVar("T")

POLL_SECONDS = 0.05


def call_cancellable(
    cancel_event: threading.Event,
    description: str,
    func: Callable[..., T],
    *args: object,
) -> T:
    """Run a blocking network call, returning early if cancel_event fires.

    The call runs on a helper thread while the caller polls the event. On
    cancellation the caller unwinds with PipelineCancelledError at once; the
    abandoned request ends on its own client timeout and its result is
    discarded. Exceptions raised by func propagate unchanged.
    """
    if cancel_event.is_set():
        raise PipelineCancelledError(f"Cancelled before {description}")

    executor = ThreadPoolExecutor(
        max_workers=1,
        thread_name_prefix=f"{threading.current_thread().name}-io",
    )
    future = executor.submit(func, *args)
    executor.shutdown(wait=False)
    while True:
        try:
            return future.result(timeout=POLL_SECONDS)
        except FuturesTimeoutError:
            # Same class as builtin TimeoutError; a finished future raised it itself.
            if future.done():
                raise
            if cancel_event.is_set():
                future.cancel()
                raise PipelineCancelledError(f"Cancelled during {description}") from None
