## Path Utilities for gpt2lite
# gpt2lite/src/gpt2lite/utils/path_util.py

from pathlib import Path
import os

from gpt2lite.errors import ResourceLoadError
from .config_util import _tokenizer_cfg

# ---------------------------------------------------------------------
# 1. Global assets directory helpers
# ---------------------------------------------------------------------
def get_global_assets_dir() -> Path:
    """
    Return the base directory where vocab / merges / model files live.

    Priority:
    1. $GPT2LITE_ASSETS_DIR
    2. Fallback: ~/.gpt2lite
    """
    env_root = os.environ.get("GPT2LITE_ASSETS_DIR")
    if env_root:
        return Path(env_root).expanduser()
    return Path.home() / ".gpt2lite"


def resolve_asset_path(path: str | Path) -> Path:
    """Absolute paths are kept as-is, relative ones live under the assets dir."""
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return get_global_assets_dir() / path


# ---------------------------------------------------------------------
# 2. Tokenizer resources
# ---------------------------------------------------------------------
def get_tokenizer_paths(project_config: dict) -> tuple[Path, Path]:
    """
    Return (vocab_path, merges_path) from tokenizer_config, defaulting to
    the GPT-2 file names "vocab.json" and "merges.txt".
    """
    tok_cfg = _tokenizer_cfg(project_config)
    vocab_path = resolve_asset_path(tok_cfg.get("vocab_file", "vocab.json"))
    merges_path = resolve_asset_path(tok_cfg.get("merges_file", "merges.txt"))
    return vocab_path, merges_path


def read_resource(path: Path) -> str:
    """Read a UTF-8 resource file, turning I/O problems into ResourceLoadError."""
    try:
        with path.open("r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceLoadError(f"Could not read resource {path}: {exc}") from exc


def short_path(p: Path, base: Path) -> str:
    try:
        return str(p.relative_to(base))
    except ValueError:
        return str(p)
