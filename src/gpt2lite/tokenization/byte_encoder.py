## Byte <-> printable symbol transform used by byte-level BPE
# gpt2lite/src/gpt2lite/tokenization/byte_encoder.py

from functools import lru_cache
from typing import Dict


@lru_cache(maxsize=None)
def bytes_to_unicode() -> Dict[int, str]:
    """
    Map every byte 0..255 to a printable unicode character.

    Bytes that already print fine (most of ASCII and Latin-1) map to themselves.
    The remaining 68 (control chars, space, ...) are shifted to chr(256 + n),
    so e.g. the space byte 32 becomes 'Ġ'. The mapping is a bijection, which
    is what lets any byte string round-trip through vocabulary strings
    without an unknown token.
    """
    bs = (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )
    cs = bs[:]
    n = 0
    for b in range(2**8):
        if b not in bs:
            bs.append(b)
            cs.append(2**8 + n)
            n += 1
    return dict(zip(bs, (chr(c) for c in cs)))


@lru_cache(maxsize=None)
def unicode_to_bytes() -> Dict[str, int]:
    """Inverse of bytes_to_unicode()."""
    return {s: b for b, s in bytes_to_unicode().items()}


def encode_bytes(text: str) -> str:
    """UTF-8 encode `text` and spell every byte with its printable symbol."""
    byte_encoder = bytes_to_unicode()
    return "".join(byte_encoder[b] for b in text.encode("utf-8"))


def decode_symbols(symbols: str) -> bytes:
    """Turn a string of printable symbols back into raw bytes."""
    byte_decoder = unicode_to_bytes()
    try:
        return bytes(byte_decoder[s] for s in symbols)
    except KeyError as exc:
        raise ValueError(f"Not a byte-level symbol: {exc.args[0]!r}") from exc
