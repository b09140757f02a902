## Byte-pair merging driven by a precomputed merge-rank table
# gpt2lite/src/gpt2lite/tokenization/bpe.py

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Sequence, Tuple

from gpt2lite.tokenization.resources import MergeRankTable


def apply_merge(symbols: Sequence[str], pair: Tuple[str, str]) -> List[str]:
    """Replace every non-overlapping occurrence of `pair`, left to right."""
    merged = []
    i = 0
    a, b = pair

    while i < len(symbols):
        if i < len(symbols) - 1 and symbols[i] == a and symbols[i + 1] == b:
            merged.append(a + b)
            i += 2
        else:
            merged.append(symbols[i])
            i += 1

    return merged


class BPEMerger:
    """
    Merge a byte-encoded word into subword tokens.

    Repeatedly picks the adjacent pair with the lowest rank in the table and
    merges all of its occurrences, until no adjacent pair has a rank.

    Results are memoized per word. The cache is only a speed-up: a merger
    with `use_cache=False` returns exactly the same tokens.
    """

    def __init__(self, merge_ranks: MergeRankTable, use_cache: bool = True):
        self.merge_ranks = merge_ranks
        self.use_cache = use_cache
        self._cache: Dict[str, Tuple[str, ...]] = {}
        self._lock = threading.Lock()

    def best_pair(self, symbols: Sequence[str]) -> Optional[Tuple[str, str]]:
        """
        Lowest-ranked adjacent pair, or None if no pair is in the table.
        On equal ranks the leftmost pair wins (strict `<` while scanning).
        """
        best = None
        best_rank = None
        for pair in zip(symbols, symbols[1:]):
            rank = self.merge_ranks.rank(pair)
            if rank is None:
                continue
            if best_rank is None or rank < best_rank:
                best, best_rank = pair, rank
        return best

    def merge_symbols(self, symbols: Sequence[str]) -> List[str]:
        """Run the merge loop on an explicit symbol sequence (no caching)."""
        symbols = list(symbols)
        while len(symbols) > 1:
            pair = self.best_pair(symbols)
            if pair is None:
                break
            symbols = apply_merge(symbols, pair)
        return symbols

    def bpe(self, word: str) -> Tuple[str, ...]:
        """Merge a byte-encoded word, one symbol per character to start with."""
        if self.use_cache:
            with self._lock:
                cached = self._cache.get(word)
            if cached is not None:
                return cached

        result = tuple(self.merge_symbols(list(word)))

        if self.use_cache:
            with self._lock:
                self._cache.setdefault(word, result)
        return result

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
