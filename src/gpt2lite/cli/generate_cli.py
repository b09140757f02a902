# gpt2lite/cli/generate_cli.py

import argparse
from pathlib import Path

import torch

from gpt2lite.errors import Gpt2LiteError
from gpt2lite.generator import TextGenerator
from gpt2lite.utils.config_util import _generation_cfg, _model_cfg, load_nested_config
from gpt2lite.utils.logger import get_logger, set_log_level
from gpt2lite.utils.path_util import get_global_assets_dir, get_tokenizer_paths, short_path

logger = get_logger(__name__)


# ---------------------------------------------------------
# Utilities
# ---------------------------------------------------------
def _select_device(device_arg: str | None) -> str:
    if device_arg in ("cpu", "cuda"):
        return device_arg
    return "cuda" if torch.cuda.is_available() else "cpu"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Continue a prompt with greedy GPT-2 generation."
    )
    parser.add_argument(
        "--config", type=str, required=True, help="Path to project_config.json"
    )
    parser.add_argument(
        "--prompt",
        type=str,
        default=None,
        help="Prompt text (if omitted, read from stdin).",
    )
    parser.add_argument(
        "--tokens",
        type=int,
        default=None,
        help="Number of tokens to generate (default: generation_config.max_new_tokens).",
    )
    parser.add_argument(
        "--device",
        type=str,
        choices=["cpu", "cuda", "auto"],
        default="auto",
        help="Device to use (default: auto)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG shows per-step token ids).",
    )
    return parser


def gpt2lite_generate(argv=None) -> int:
    """
    Generate text from the command line.

        gpt2lite-generate --config /path/to/project_config.json [--prompt "hello"] [--tokens 20]

    If --prompt is omitted, it will ask interactively.
    """
    args = build_parser().parse_args(argv)
    set_log_level(args.log_level)

    cfg = load_nested_config(args.config)
    gen_cfg = _generation_cfg(cfg)
    token_count = args.tokens if args.tokens is not None else gen_cfg.get("max_new_tokens", 20)

    device = _select_device(args.device)
    vocab_path, merges_path = get_tokenizer_paths(cfg)
    assets_dir = get_global_assets_dir()

    logger.info("============================================================")
    logger.info("gpt2lite-generate")
    logger.info("============================================================")
    logger.info(f"Vocab          : {short_path(vocab_path, assets_dir)}")
    logger.info(f"Merges         : {short_path(merges_path, assets_dir)}")
    logger.info(f"Seq Length     : {_model_cfg(cfg).get('sequence_length', 64)}")
    logger.info(f"Tokens         : {token_count}")
    logger.info(f"Device         : {device}")
    logger.info("============================================================")

    prompt = args.prompt
    if not prompt:
        prompt = input("Enter a prompt (e.g. 'hello'): ").strip()
        if not prompt:
            prompt = "hello."

    try:
        generator = TextGenerator.from_config(cfg, device=device)
        output = generator.generate(prompt, token_count)
    except Gpt2LiteError as exc:
        logger.error(f"[gpt2lite-generate] {exc}")
        return 1

    print("---")
    print(f"Prompt : {prompt}")
    print(f"Output : {output}")
    return 0


def main() -> None:
    raise SystemExit(gpt2lite_generate())


if __name__ == "__main__":
    main()
