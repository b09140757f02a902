## gpt2lite/src/gpt2lite/tokenization/gpt2_tokenizer.py
from typing import List, Sequence

import regex as re

from gpt2lite.errors import TokenizationError
from gpt2lite.tokenization.bpe import BPEMerger
from gpt2lite.tokenization.byte_encoder import decode_symbols, encode_bytes
from gpt2lite.tokenization.resources import MergeRankTable, Vocabulary

MODEL_TYPE = "gpt2_byte_bpe"

# GPT-2 pre-split: contractions, letter runs, digit runs, other symbol runs
# (each with one optional leading space), then whitespace. `\s+(?!\S)` leaves
# the last space of a run to be glued onto the following word.
GPT2_SPLIT_PATTERN = (
    r"""'s|'t|'re|'ve|'m|'ll|'d| ?\p{L}+| ?\p{N}+| ?[^\s\p{L}\p{N}]+|\s+(?!\S)|\s+"""
)


class GPT2Tokenizer:
    """
    Byte-level BPE tokenizer compatible with GPT-2's vocab.json / merges.txt.

    Key features:
    - Splits text into word-like chunks with the GPT-2 regex.
    - Spells each chunk's UTF-8 bytes with printable symbols, so there is
      never an unknown token.
    - Merges with a BPEMerger and maps subwords to ids with a Vocabulary.
    - Shares the vocabulary and merge table read-only; the only mutable state
      is the merger's lock-guarded cache.
    """

    model_type = MODEL_TYPE

    def __init__(
        self,
        vocab: Vocabulary,
        merge_ranks: MergeRankTable,
        use_cache: bool = True,
    ):
        self.vocab = vocab
        self.merge_ranks = merge_ranks
        self.merger = BPEMerger(merge_ranks, use_cache=use_cache)
        self.compiled_pattern = re.compile(GPT2_SPLIT_PATTERN)

    @property
    def vocab_size(self) -> int:
        return len(self.vocab)

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def split(self, text: str) -> List[str]:
        """Pre-split raw text into the chunks BPE runs on."""
        return re.findall(self.compiled_pattern, text)

    def tokenize(self, text: str) -> List[str]:
        """Text -> subword strings (byte-encoded), before the id lookup."""
        subwords = []
        for chunk in self.split(text):
            subwords.extend(self.merger.bpe(encode_bytes(chunk)))
        return subwords

    def encode(self, text: str) -> List[int]:
        ids = []
        for subword in self.tokenize(text):
            idx = self.vocab.token_to_id(subword)
            if idx is None:
                raise TokenizationError(
                    f"Subword {subword!r} is not in the vocabulary; "
                    "vocab and merges do not belong together"
                )
            ids.append(idx)
        return ids

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode(self, ids: Sequence[int]) -> str:
        """Convert token IDs back to text."""
        tokens = []
        for idx in ids:
            token = self.vocab.id_to_token(int(idx))
            if token is None:
                raise TokenizationError(f"Invalid token id: {idx}")
            tokens.append(token)

        try:
            text_bytes = decode_symbols("".join(tokens))
        except ValueError as exc:
            raise TokenizationError(f"Vocabulary entry is not byte-level: {exc}") from exc

        # A single id can end mid-character; replace rather than fail.
        return text_bytes.decode("utf-8", errors="replace")

    def decode_token(self, idx: int) -> str:
        """Decode one id on its own (used once per generated token)."""
        return self.decode([idx])

    def token_to_id(self, token: str):
        return self.vocab.token_to_id(token)
