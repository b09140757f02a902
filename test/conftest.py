"""
Shared pytest fixtures for gpt2lite tests.

The small vocabulary below is self-consistent with SMALL_MERGES: it holds
all 256 byte symbols (ids 0..255, GPT-2 order, so "!" is id 0) followed by
one token per merge, in merge order (ids 256..269).
"""

import json

import numpy as np
import pytest

from gpt2lite.modeling.configs.window_config import WindowConfig
from gpt2lite.tokenization.byte_encoder import bytes_to_unicode
from gpt2lite.tokenization.gpt2_tokenizer import GPT2Tokenizer
from gpt2lite.tokenization.resources import load_merge_ranks, load_vocabulary

SMALL_MERGES = [
    ("H", "i"),        # 256 Hi
    ("Ġ", "t"),        # 257 Ġt
    ("h", "e"),        # 258 he
    ("Ġt", "he"),      # 259 Ġthe
    ("r", "e"),        # 260 re
    ("Ġthe", "re"),    # 261 Ġthere
    ("l", "l"),        # 262 ll
    ("he", "ll"),      # 263 hell
    ("hell", "o"),     # 264 hello
    ("Ġ", "w"),        # 265 Ġw
    ("o", "r"),        # 266 or
    ("Ġw", "or"),      # 267 Ġwor
    ("l", "d"),        # 268 ld
    ("Ġwor", "ld"),    # 269 Ġworld
]

SMALL_VOCAB_SIZE = 256 + len(SMALL_MERGES)


def _small_vocab_dict() -> dict:
    vocab = {}
    for symbol in bytes_to_unicode().values():
        vocab[symbol] = len(vocab)
    for a, b in SMALL_MERGES:
        vocab[a + b] = len(vocab)
    return vocab


# --- Resource Fixtures ---

@pytest.fixture
def small_vocab_json():
    """vocab.json content for the small vocabulary."""
    return json.dumps(_small_vocab_dict(), ensure_ascii=False)


@pytest.fixture
def small_merges_text():
    """merges.txt content, header line first."""
    lines = ["#version: 0.2"] + [f"{a} {b}" for a, b in SMALL_MERGES]
    return "\n".join(lines) + "\n"


@pytest.fixture
def small_tokenizer(small_vocab_json, small_merges_text):
    return GPT2Tokenizer(
        load_vocabulary(small_vocab_json),
        load_merge_ranks(small_merges_text),
    )


@pytest.fixture
def small_config():
    """Short window so eviction is easy to hit."""
    return WindowConfig(sequence_length=8, vocab_size=SMALL_VOCAB_SIZE)


# --- GPT-2 sized scenario ---

@pytest.fixture(scope="session")
def gpt2_sized_vocab_json():
    """{"Hi": 0, "Ġthere": 1, ...} padded with filler tokens to 50257 entries."""
    vocab = {"Hi": 0, "Ġthere": 1}
    for i in range(2, 50257):
        vocab[f"<|filler{i}|>"] = i
    return json.dumps(vocab, ensure_ascii=False)


@pytest.fixture
def two_line_merges_text():
    return "#version: 0.2\nH i\n"


# --- Stub inference functions ---

class FavorTokenInference:
    """Every score row prefers `token_id`. Records each input it is given."""

    def __init__(self, token_id: int, sequence_length: int, vocab_size: int):
        self.scores = np.zeros((sequence_length, vocab_size), dtype=np.float32)
        self.scores[:, token_id] = 1.0
        self.inputs = []

    def __call__(self, input_ids):
        self.inputs.append(np.array(input_ids, copy=True))
        return self.scores.copy()


class PositionInference:
    """Row r prefers id `base + r`, so the picked id reveals the row read."""

    def __init__(self, base: int, sequence_length: int, vocab_size: int):
        self.scores = np.zeros((sequence_length, vocab_size), dtype=np.float32)
        for row in range(sequence_length):
            self.scores[row, base + row] = 1.0
        self.calls = 0

    def __call__(self, input_ids):
        self.calls += 1
        return self.scores.copy()


@pytest.fixture
def favor_token_inference():
    """Factory: favor_token_inference(token_id, config)."""

    def _make(token_id: int, config: WindowConfig) -> FavorTokenInference:
        return FavorTokenInference(token_id, config.sequence_length, config.vocab_size)

    return _make


@pytest.fixture
def position_inference():
    """Factory: position_inference(base, config)."""

    def _make(base: int, config: WindowConfig) -> PositionInference:
        return PositionInference(base, config.sequence_length, config.vocab_size)

    return _make
