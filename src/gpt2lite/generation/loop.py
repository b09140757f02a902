## Greedy autoregressive generation over a fixed-size context window
# gpt2lite/src/gpt2lite/generation/loop.py

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from gpt2lite.errors import GenerationCancelled, InvalidArgumentError
from gpt2lite.generation.context_window import ContextWindow
from gpt2lite.generation.selection import GreedySelector
from gpt2lite.modeling.configs.window_config import WindowConfig
from gpt2lite.modeling.boundary import InferenceFn, check_input_shape, check_output_shape
from gpt2lite.tokenization.gpt2_tokenizer import GPT2Tokenizer
from gpt2lite.utils.logger import get_logger

logger = get_logger(__name__)

Selector = Callable[[np.ndarray], int]


@dataclass(frozen=True)
class GenerationStep:
    """Progress report emitted after each generated token."""

    index: int
    token_id: int
    fragment: str


def validate_token_count(token_count) -> int:
    # bool is an int subclass; reject it along with None / floats / strings
    if not isinstance(token_count, (int, np.integer)) or isinstance(token_count, bool):
        raise InvalidArgumentError(f"token_count must be an integer, got {token_count!r}")
    if token_count < 0:
        raise InvalidArgumentError(f"token_count must be >= 0, got {token_count}")
    return int(token_count)


def join_fragment(text_so_far: str, fragment: str) -> str:
    """
    Return what to append for `fragment`: the fragment itself, preceded by a
    separating space unless either side already has whitespace there.
    """
    if not fragment:
        return ""
    if not text_so_far or text_so_far[-1].isspace() or fragment[0].isspace():
        return fragment
    return " " + fragment


class GenerationLoop:
    """
    Drive `infer` one greedy step at a time.

    Per step: assemble the padded window, run the model, pick the best id at
    the last real position, append it to the history, decode it on its own
    and add it to the output. Each call to `run` owns a fresh ContextWindow,
    so one loop object can serve several threads; calls into the model are
    serialised on `_infer_lock`.
    """

    def __init__(
        self,
        tokenizer: GPT2Tokenizer,
        infer: InferenceFn,
        config: WindowConfig | None = None,
        selector: Selector | None = None,
    ):
        self.tokenizer = tokenizer
        self.infer = infer
        self.config = config or WindowConfig()
        self.selector = selector or GreedySelector()
        self._infer_lock = threading.Lock()

    def run(
        self,
        text: str,
        token_count: int,
        cancel_event: Optional[threading.Event] = None,
        on_step: Optional[Callable[[GenerationStep], None]] = None,
    ) -> str:
        token_count = validate_token_count(token_count)
        if token_count == 0:
            return text

        history = self.tokenizer.encode(text)
        if not history:
            raise InvalidArgumentError("Input text encodes to no tokens; nothing to continue from")

        window = ContextWindow(
            history,
            sequence_length=self.config.sequence_length,
            pad_id=self.config.pad_id,
        )
        output = ""
        logger.info(f"Generating {token_count} token(s) from {len(history)} prompt token(s)")

        for step in range(token_count):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Generation cancelled after {step} step(s)")
                raise GenerationCancelled(step)

            input_ids = window.to_input()
            check_input_shape(input_ids, self.config)
            logger.debug(f"step {step}: input ids {window.ids}")

            with self._infer_lock:
                raw_scores = self.infer(input_ids)
            scores = check_output_shape(raw_scores, self.config)
            position = window.last_position()
            token_id = self.selector(scores[position])

            window.append(token_id)
            fragment = self.tokenizer.decode_token(token_id)
            output += join_fragment(text + output, fragment)
            logger.debug(f"step {step}: picked id {token_id} -> {fragment!r}")

            if on_step is not None:
                on_step(GenerationStep(index=step, token_id=token_id, fragment=fragment))

        output = output.rstrip()
        logger.debug(f"Generated text: {output!r}")
        return text + output
