## Vocabulary and merge-rank table, built from in-memory resources
# gpt2lite/src/gpt2lite/tokenization/resources.py

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Dict, Iterator, Optional, Tuple

from gpt2lite.errors import ResourceFormatError
from gpt2lite.utils.logger import get_logger

logger = get_logger(__name__)

Pair = Tuple[str, str]


class Vocabulary:
    """
    Bijective mapping between subword strings and integer ids.

    Built once from a key-value resource and read-only afterwards, so a single
    instance can be shared by any number of tokenizers and threads.
    """

    def __init__(self, token_to_id: Mapping[str, int]):
        encoder: Dict[str, int] = {}
        decoder: Dict[int, str] = {}
        for token, idx in token_to_id.items():
            if not isinstance(token, str):
                raise ResourceFormatError(f"Vocabulary key is not a string: {token!r}")
            # bool is an int subclass, but `true` is not a token id
            if not isinstance(idx, int) or isinstance(idx, bool) or idx < 0:
                raise ResourceFormatError(
                    f"Vocabulary id for {token!r} is not a non-negative integer: {idx!r}"
                )
            if idx in decoder:
                raise ResourceFormatError(
                    f"Vocabulary id {idx} used by both {decoder[idx]!r} and {token!r}"
                )
            encoder[token] = idx
            decoder[idx] = token

        self._encoder = MappingProxyType(encoder)
        self._decoder = MappingProxyType(decoder)

    def __len__(self) -> int:
        return len(self._encoder)

    def __contains__(self, token: object) -> bool:
        return token in self._encoder

    def __iter__(self) -> Iterator[str]:
        return iter(self._encoder)

    def token_to_id(self, token: str) -> Optional[int]:
        return self._encoder.get(token)

    def id_to_token(self, idx: int) -> Optional[str]:
        return self._decoder.get(idx)

    @property
    def encoder(self) -> Mapping[str, int]:
        return self._encoder

    @property
    def decoder(self) -> Mapping[int, str]:
        return self._decoder


class MergeRankTable:
    """Priority of adjacent symbol pairs: lower rank = merged earlier."""

    def __init__(self, ranks: Mapping[Pair, int]):
        self._ranks = MappingProxyType(dict(ranks))

    def __len__(self) -> int:
        return len(self._ranks)

    def __contains__(self, pair: object) -> bool:
        return pair in self._ranks

    def rank(self, pair: Pair) -> Optional[int]:
        """Rank of `pair`, or None when the pair is never merged."""
        return self._ranks.get(pair)

    @property
    def ranks(self) -> Mapping[Pair, int]:
        return self._ranks


# -------------------------------------------------------------------------
# Loaders
# -------------------------------------------------------------------------

def load_vocabulary(resource: str | bytes | Mapping[str, int]) -> Vocabulary:
    """
    Build a Vocabulary from a JSON object (text or bytes) or a ready mapping.

    Anything that is not a string -> non-negative integer mapping with unique
    ids raises ResourceFormatError.
    """
    if isinstance(resource, (str, bytes, bytearray)):
        try:
            data = json.loads(resource)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ResourceFormatError(f"Vocabulary is not valid JSON: {exc}") from exc
    else:
        data = resource

    if not isinstance(data, Mapping):
        raise ResourceFormatError(
            f"Vocabulary must be a JSON object, got {type(data).__name__}"
        )

    vocab = Vocabulary(data)
    logger.info(f"Loaded vocabulary with {len(vocab)} entries")
    return vocab


def _iter_lines(resource: str | bytes | Iterable[str]) -> Iterator[str]:
    if isinstance(resource, (bytes, bytearray)):
        try:
            resource = resource.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResourceFormatError(f"Merges file is not UTF-8: {exc}") from exc
    if isinstance(resource, str):
        return iter(resource.splitlines())
    return (line.rstrip("\r\n") for line in resource)


def load_merge_ranks(resource: str | bytes | Iterable[str]) -> MergeRankTable:
    """
    Build a MergeRankTable from merges.txt content.

    The first line is a header ("#version: ...") and is dropped. A pair on
    file line `i` (0-based) gets rank `i - 1`. Lines with fewer than two
    fields are skipped silently but still use up their rank, so ranks stay
    aligned with line numbers.
    """
    ranks: Dict[Pair, int] = {}
    skipped = 0
    for index, line in enumerate(_iter_lines(resource)):
        if index == 0:
            continue
        parts = line.split()
        if len(parts) < 2:
            skipped += 1
            continue
        ranks[(parts[0], parts[1])] = index - 1

    if skipped:
        logger.debug(f"Skipped {skipped} malformed merge line(s)")
    logger.info(f"Loaded merge-rank table with {len(ranks)} pairs")
    return MergeRankTable(ranks)
