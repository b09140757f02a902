## PyTorch / transformers backends for the model-inference boundary
# gpt2lite/src/gpt2lite/modeling/inference.py

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import torch
import torch.nn as nn

from gpt2lite.utils.config_util import _model_cfg
from gpt2lite.utils.logger import get_logger
from gpt2lite.utils.path_util import resolve_asset_path

logger = get_logger(__name__)


class TorchInference:
    """
    Wrap a causal LM (`torch.nn.Module` or TorchScript module) as an InferenceFn.

    The module is called with a (1, sequence_length) int64 tensor and may
    return a tensor of logits or an object with a `.logits` attribute
    (Hugging Face style). Stateless between calls.
    """

    def __init__(self, module: nn.Module, device: str = "cpu"):
        self.device = device
        self.module = module.to(device)
        self.module.eval()

    @torch.no_grad()
    def __call__(self, input_ids: np.ndarray) -> np.ndarray:
        x = torch.as_tensor(np.asarray(input_ids), dtype=torch.long, device=self.device)
        out = self.module(x.unsqueeze(0))
        logits = getattr(out, "logits", out)
        if isinstance(logits, (tuple, list)):
            logits = logits[0]
        return logits.float().cpu().numpy()


def load_torchscript_inference(path: Union[str, Path], device: str = "cpu") -> TorchInference:
    """Load a TorchScript export (e.g. a traced GPT-2) from disk."""
    path = resolve_asset_path(path)
    if not path.exists():
        raise FileNotFoundError(f"TorchScript model not found at: {path}")
    module = torch.jit.load(str(path), map_location=device)
    return TorchInference(module, device=device)


def load_hf_inference(model_name_or_path: str, device: str = "cpu") -> TorchInference:
    """Load a Hugging Face causal LM (e.g. "gpt2") as an InferenceFn."""
    from transformers import AutoModelForCausalLM

    model = AutoModelForCausalLM.from_pretrained(model_name_or_path)
    return TorchInference(model, device=device)


def load_inference(project_config: dict, device: str = "cpu") -> TorchInference:
    """
    Build the inference backend named in model_config:
    - "torchscript_path": a TorchScript file (absolute, or under the assets dir)
    - "model_name_or_path": a Hugging Face checkpoint name or directory
    """
    model_cfg = _model_cfg(project_config)

    if model_cfg.get("torchscript_path"):
        logger.info(f"Loading TorchScript model: {model_cfg['torchscript_path']}")
        return load_torchscript_inference(model_cfg["torchscript_path"], device=device)
    if model_cfg.get("model_name_or_path"):
        logger.info(f"Loading Hugging Face model: {model_cfg['model_name_or_path']}")
        return load_hf_inference(model_cfg["model_name_or_path"], device=device)

    raise ValueError("model_config needs either 'torchscript_path' or 'model_name_or_path'")
