## Next-token selection strategies
# gpt2lite/src/gpt2lite/generation/selection.py

import numpy as np


class GreedySelector:
    """
    Pick the highest-scoring id. Ties go to the lowest index, which is what
    `np.nanargmax` returns (first occurrence). NaN scores are never picked;
    a row with nothing but NaN raises ValueError.

    Any callable `(score_row) -> int` can stand in for this, e.g. a
    temperature or top-k sampler.
    """

    def __call__(self, scores: np.ndarray) -> int:
        scores = np.asarray(scores)
        if scores.ndim != 1 or scores.size == 0:
            raise ValueError(f"Expected a non-empty score row, got shape {scores.shape}")
        if np.isnan(scores).all():
            raise ValueError("Score row is all NaN; the model produced no usable scores")
        return int(np.nanargmax(scores))
