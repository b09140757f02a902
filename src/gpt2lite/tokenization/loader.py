## Concurrent set-up of the tokenizer resources
# gpt2lite/src/gpt2lite/tokenization/loader.py

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Tuple

from gpt2lite.errors import ResourceLoadError
from gpt2lite.tokenization.gpt2_tokenizer import GPT2Tokenizer
from gpt2lite.tokenization.resources import (
    MergeRankTable,
    Vocabulary,
    load_merge_ranks,
    load_vocabulary,
)
from gpt2lite.utils.config_util import _tokenizer_cfg
from gpt2lite.utils.logger import get_logger
from gpt2lite.utils.path_util import get_tokenizer_paths, read_resource

logger = get_logger(__name__)


def _load_vocab_task(resource) -> Vocabulary:
    if isinstance(resource, Path):
        resource = read_resource(resource)
    return load_vocabulary(resource)


def _load_merges_task(resource) -> MergeRankTable:
    if isinstance(resource, Path):
        resource = read_resource(resource)
    return load_merge_ranks(resource)


def load_resources(vocab_resource, merges_resource) -> Tuple[Vocabulary, MergeRankTable]:
    """
    Load the vocabulary and the merge table as two concurrent tasks.

    Each resource may be in-memory content or a Path to read first. Both
    must succeed: the first failure cancels the other task (if it has not
    started yet) and is re-raised, so nothing half-built is returned.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="gpt2lite-load") as pool:
        vocab_future = pool.submit(_load_vocab_task, vocab_resource)
        merges_future = pool.submit(_load_merges_task, merges_resource)

        done, pending = wait([vocab_future, merges_future], return_when=FIRST_EXCEPTION)
        for future in (vocab_future, merges_future):
            if future not in done:
                continue
            exc = future.exception()
            if exc is None:
                continue
            for other in pending:
                other.cancel()
            logger.error(f"Tokenizer resources failed to load: {exc}")
            if isinstance(exc, ResourceLoadError):
                raise exc
            raise ResourceLoadError(f"Unexpected error while loading resources: {exc}") from exc

        return vocab_future.result(), merges_future.result()


def build_tokenizer(vocab_resource, merges_resource, use_cache: bool = True) -> GPT2Tokenizer:
    """Load both resources (concurrently) and build a GPT2Tokenizer."""
    vocab, merge_ranks = load_resources(vocab_resource, merges_resource)
    return GPT2Tokenizer(vocab, merge_ranks, use_cache=use_cache)


def load_tokenizer(project_config: dict) -> GPT2Tokenizer:
    """
    Load a tokenizer from the files named in tokenizer_config
    (vocab_file / merges_file, relative to the assets dir).
    """
    vocab_path, merges_path = get_tokenizer_paths(project_config)

    for path in (vocab_path, merges_path):
        if not path.exists():
            raise ResourceLoadError(f"Tokenizer resource not found at: {path}")

    use_cache = _tokenizer_cfg(project_config).get("use_cache", True)
    return build_tokenizer(vocab_path, merges_path, use_cache=use_cache)
