## Shape contract of the model-inference boundary
# gpt2lite/src/gpt2lite/modeling/boundary.py

from typing import Callable

import numpy as np

from gpt2lite.errors import InferenceShapeError
from gpt2lite.modeling.configs.window_config import WindowConfig

# infer(int32[sequence_length]) -> float32[sequence_length, vocab_size]
InferenceFn = Callable[[np.ndarray], np.ndarray]


def check_input_shape(input_ids: np.ndarray, config: WindowConfig) -> None:
    if input_ids.shape != (config.sequence_length,):
        raise InferenceShapeError(
            f"Model input must have shape ({config.sequence_length},), "
            f"got {input_ids.shape}"
        )


def check_output_shape(scores, config: WindowConfig) -> np.ndarray:
    """
    Return `scores` as a [sequence_length, vocab_size] array.

    A leading batch axis of size 1 is dropped; any other mismatch means the
    model and the vocabulary do not belong together.
    """
    # torch tensors (possibly on GPU) come back through .cpu()
    if hasattr(scores, "detach"):
        scores = scores.detach().cpu().numpy()
    scores = np.asarray(scores)

    if scores.ndim == 3 and scores.shape[0] == 1:
        scores = scores[0]

    expected = (config.sequence_length, config.vocab_size)
    if scores.shape != expected:
        raise InferenceShapeError(f"Model output must have shape {expected}, got {scores.shape}")
    return scores
