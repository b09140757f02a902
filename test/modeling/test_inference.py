# test/modeling/test_inference.py

from types import SimpleNamespace

import numpy as np
import pytest
import torch
import torch.nn as nn

from gpt2lite.modeling.inference import (
    TorchInference,
    load_inference,
    load_torchscript_inference,
)


class FavorTokenModel(nn.Module):
    """Fixed logits: every position prefers `token_id`."""

    def __init__(self, vocab_size: int, token_id: int):
        super().__init__()
        self.vocab_size = vocab_size
        self.token_id = token_id

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        out = torch.zeros([x.shape[0], x.shape[1], self.vocab_size])
        out[:, :, self.token_id] = 1.0
        return out


class TinyLM(nn.Module):
    """Embedding straight to vocab logits; HF-style output object."""

    def __init__(self, vocab_size: int):
        super().__init__()
        self.emb = nn.Embedding(vocab_size, vocab_size)

    def forward(self, x):
        return SimpleNamespace(logits=self.emb(x))


def test_torch_inference_output_shape():
    infer = TorchInference(FavorTokenModel(vocab_size=20, token_id=3))
    scores = infer(np.zeros(8, dtype=np.int32))
    assert isinstance(scores, np.ndarray)
    assert scores.shape == (1, 8, 20)
    assert int(np.argmax(scores[0, -1])) == 3


def test_torch_inference_unwraps_logits_attribute():
    infer = TorchInference(TinyLM(vocab_size=12))
    scores = infer(np.arange(6, dtype=np.int32))
    assert scores.shape == (1, 6, 12)
    assert scores.dtype == np.float32


def test_torch_inference_is_stateless():
    infer = TorchInference(TinyLM(vocab_size=12))
    ids = np.array([1, 2, 3, 0], dtype=np.int32)
    np.testing.assert_array_equal(infer(ids), infer(ids))


def test_torch_inference_puts_module_in_eval_mode():
    model = TinyLM(vocab_size=5)
    model.train()
    TorchInference(model)
    assert not model.training


def test_load_torchscript_inference(tmp_path):
    scripted = torch.jit.script(FavorTokenModel(vocab_size=20, token_id=7))
    path = tmp_path / "model.pt"
    scripted.save(str(path))

    infer = load_torchscript_inference(path)
    assert int(np.argmax(infer(np.zeros(4, dtype=np.int32))[0, 0])) == 7


def test_load_torchscript_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_torchscript_inference(tmp_path / "missing.pt")


def test_load_inference_from_config(tmp_path, monkeypatch):
    monkeypatch.setenv("GPT2LITE_ASSETS_DIR", str(tmp_path))
    torch.jit.script(FavorTokenModel(vocab_size=20, token_id=2)).save(str(tmp_path / "m.pt"))

    infer = load_inference({"model_config": {"torchscript_path": "m.pt"}})
    assert infer(np.zeros(3, dtype=np.int32)).shape == (1, 3, 20)


def test_load_inference_needs_a_backend():
    with pytest.raises(ValueError):
        load_inference({"model_config": {}})
