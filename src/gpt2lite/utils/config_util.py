## Configuration Utilities for gpt2lite
# gpt2lite/src/gpt2lite/utils/config_util.py

import json
from pathlib import Path

REQUIRED_SECTIONS = ("model_config", "tokenizer_config", "generation_config")


def _model_cfg(cfg: dict) -> dict:
    """Return model_config sub-dict if present, otherwise the whole dict."""
    return cfg.get("model_config", cfg)


def _tokenizer_cfg(cfg: dict) -> dict:
    """Return tokenizer_config sub-dict if present, otherwise the whole dict."""
    return cfg.get("tokenizer_config", cfg)


def _generation_cfg(cfg: dict) -> dict:
    """Return generation_config sub-dict if present, otherwise the whole dict."""
    return cfg.get("generation_config", cfg)


def load_config(caller_file: str, config_filename: str = "config.json") -> dict:
    """
    Load a configuration file located in the same directory as the caller.
    The filename is flexible (default: config.json).
    """
    project_dir = Path(caller_file).resolve().parent
    config_path = project_dir / config_filename

    if not config_path.exists():
        raise FileNotFoundError(f"{config_filename} not found at: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def validate_nested_config(cfg: dict, config_path: Path | str = "") -> None:
    """
    Validate that a config has the expected nested structure.

    Args:
        cfg: The configuration dictionary to validate
        config_path: Optional path for better error messages
    """
    for key in REQUIRED_SECTIONS:
        if key not in cfg:
            path_info = f" in {config_path}" if config_path else ""
            raise ValueError(f"Missing required key '{key}'{path_info}")


def load_nested_config(config_path: Path | str) -> dict:
    """
    Load and validate a nested project config given the path of the file itself.
    Combines load_config and validate_nested_config for convenience.
    """
    config_path = Path(config_path).expanduser().resolve()
    cfg = load_config(caller_file=str(config_path), config_filename=config_path.name)
    validate_nested_config(cfg, config_path)
    return cfg
