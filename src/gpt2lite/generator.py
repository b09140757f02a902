## gpt2lite/src/gpt2lite/generator.py
"""
TextGenerator: tokenizer + inference backend + greedy loop behind a single
`generate(text, token_count)` call.
"""

from __future__ import annotations

from gpt2lite.generation.background import BackgroundGenerator, GenerationHandle
from gpt2lite.generation.loop import GenerationLoop, Selector
from gpt2lite.modeling.configs.window_config import WindowConfig
from gpt2lite.modeling.boundary import InferenceFn
from gpt2lite.tokenization.gpt2_tokenizer import GPT2Tokenizer
from gpt2lite.tokenization.loader import build_tokenizer, load_tokenizer
from gpt2lite.utils.config_util import _model_cfg
from gpt2lite.utils.logger import get_logger

logger = get_logger(__name__)


def window_config_from(project_config: dict) -> WindowConfig:
    model_cfg = _model_cfg(project_config)
    return WindowConfig(
        sequence_length=model_cfg.get("sequence_length", 64),
        vocab_size=model_cfg.get("vocab_size", 50257),
        pad_id=model_cfg.get("pad_id", 0),
    )


class TextGenerator:
    """
    The tokenizer + model unit. Built only from fully loaded parts, so an
    instance is always usable; `from_resources` / `from_config` raise instead
    of returning a half-initialised object.
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
        self.loop = GenerationLoop(tokenizer, infer, self.config, selector=selector)
        self._background: BackgroundGenerator | None = None

        if tokenizer.vocab_size != self.config.vocab_size:
            logger.warning(
                f"Tokenizer vocab={tokenizer.vocab_size} "
                f"but model vocab={self.config.vocab_size}"
            )
        logger.info(f"Input size: {self.config.sequence_length}")
        logger.info(f"Output size: {self.config.sequence_length * self.config.vocab_size}")

    @classmethod
    def from_resources(
        cls,
        vocab_resource,
        merges_resource,
        infer: InferenceFn,
        config: WindowConfig | None = None,
        selector: Selector | None = None,
    ) -> "TextGenerator":
        """Build from in-memory vocab.json / merges.txt content (or Paths)."""
        tokenizer = build_tokenizer(vocab_resource, merges_resource)
        return cls(tokenizer, infer, config=config, selector=selector)

    @classmethod
    def from_config(cls, project_config: dict, device: str = "cpu") -> "TextGenerator":
        """Build from a nested project config (see utils.config_util)."""
        from gpt2lite.modeling.inference import load_inference  # torch is only needed here

        tokenizer = load_tokenizer(project_config)
        infer = load_inference(project_config, device=device)
        return cls(tokenizer, infer, config=window_config_from(project_config))

    def generate(self, text: str, token_count: int) -> str:
        """Append `token_count` greedily generated tokens to `text`."""
        logger.debug(f"generate: text={text!r}, token_count={token_count}")
        return self.loop.run(text, token_count)

    def submit(self, text: str, token_count: int) -> GenerationHandle:
        """Like generate(), but on a background worker; returns a handle."""
        if self._background is None:
            self._background = BackgroundGenerator(self.loop)
        return self._background.submit(text, token_count)

    def close(self) -> None:
        if self._background is not None:
            self._background.shutdown()
            self._background = None
