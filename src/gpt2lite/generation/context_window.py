## Bounded token history fed to the model at each step
# gpt2lite/src/gpt2lite/generation/context_window.py

from typing import Iterable, List

import numpy as np


class ContextWindow:
    """
    Ordered token-id history, capped at `sequence_length` ids.

    Only real ids are stored. Padding is added when the fixed-size model
    input is assembled and never written back, so an id that happens to
    equal `pad_id` is never mistaken for padding.
    """

    def __init__(self, ids: Iterable[int], sequence_length: int = 64, pad_id: int = 0):
        if sequence_length <= 0:
            raise ValueError(f"sequence_length must be positive, got {sequence_length}")
        self.sequence_length = sequence_length
        self.pad_id = pad_id
        self._ids: List[int] = [int(i) for i in ids]
        self.truncate()

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    def truncate(self) -> None:
        """Drop the oldest ids so at most `sequence_length` remain."""
        if len(self._ids) > self.sequence_length:
            self._ids = self._ids[-self.sequence_length:]

    def append(self, token_id: int) -> None:
        self._ids.append(int(token_id))
        self.truncate()

    def last_position(self) -> int:
        """Index of the last real token inside the model input (-1 if empty)."""
        return min(len(self._ids), self.sequence_length) - 1

    def to_input(self) -> np.ndarray:
        """int32[sequence_length]: the history, right-padded with pad_id."""
        input_ids = np.full(self.sequence_length, self.pad_id, dtype=np.int32)
        input_ids[: len(self._ids)] = self._ids
        return input_ids
