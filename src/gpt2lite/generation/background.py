## Run generation off the caller's thread, with cancellation and progress
# gpt2lite/src/gpt2lite/generation/background.py

from __future__ import annotations

import queue
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Iterator, Optional

from gpt2lite.errors import GenerationCancelled
from gpt2lite.generation.loop import GenerationLoop, GenerationStep, validate_token_count
from gpt2lite.utils.logger import get_logger

logger = get_logger(__name__)


class GenerationHandle:
    """
    Handle on one background generation call.

    - `result()` blocks for the final text, re-raising any error. A call
      cancelled mid-run or before it started raises GenerationCancelled.
    - `cancel()` asks the loop to stop before its next step.
    - `steps()` yields GenerationStep reports as they are produced.
    """

    _DONE = None

    def __init__(self, future: Future, cancel_event: threading.Event, progress: queue.Queue):
        self._future = future
        self._cancel_event = cancel_event
        self._progress = progress

    def result(self, timeout: Optional[float] = None) -> str:
        try:
            return self._future.result(timeout=timeout)
        except CancelledError:
            # dropped from the queue before its first step
            raise GenerationCancelled(0) from None

    def cancel(self) -> None:
        self._cancel_event.set()
        # Not started yet: drop it from the queue entirely
        self._future.cancel()

    def done(self) -> bool:
        return self._future.done()

    def steps(self) -> Iterator[GenerationStep]:
        while True:
            item = self._progress.get()
            if item is self._DONE:
                return
            yield item


class BackgroundGenerator:
    """
    Single-worker executor for GenerationLoop calls.

    One worker means calls run one after another, so the model is never
    invoked concurrently, while the submitting thread stays free.
    """

    def __init__(self, loop: GenerationLoop):
        self.loop = loop
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gpt2lite-gen")

    def submit(self, text: str, token_count: int) -> GenerationHandle:
        # Bad arguments fail here, before anything is queued
        validate_token_count(token_count)

        cancel_event = threading.Event()
        progress: queue.Queue = queue.Queue()

        def _run() -> str:
            try:
                return self.loop.run(
                    text,
                    token_count,
                    cancel_event=cancel_event,
                    on_step=progress.put,
                )
            finally:
                progress.put(GenerationHandle._DONE)

        future = self._executor.submit(_run)
        # A cancelled-before-start future never runs _run, so close the stream here
        future.add_done_callback(
            lambda f: progress.put(GenerationHandle._DONE) if f.cancelled() else None
        )
        logger.debug(f"Queued background generation of {token_count} token(s)")
        return GenerationHandle(future, cancel_event, progress)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundGenerator":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
