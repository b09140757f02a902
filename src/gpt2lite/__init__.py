# src/gpt2lite/__init__.py

# Errors
from .errors import (
    Gpt2LiteError,
    ResourceLoadError,
    ResourceFormatError,
    TokenizationError,
    InvalidArgumentError,
    InferenceShapeError,
    GenerationCancelled,
)

# Tokenization (lightweight)
from .tokenization.resources import Vocabulary, MergeRankTable, load_vocabulary, load_merge_ranks
from .tokenization.bpe import BPEMerger
from .tokenization.gpt2_tokenizer import GPT2Tokenizer
from .tokenization.loader import load_resources, build_tokenizer, load_tokenizer

# Configs
from .modeling.configs.window_config import WindowConfig

# Generation
from .generation.context_window import ContextWindow
from .generation.selection import GreedySelector
from .generation.loop import GenerationLoop, GenerationStep
from .generation.background import BackgroundGenerator, GenerationHandle
from .generator import TextGenerator

__all__ = [
    # Errors
    "Gpt2LiteError",
    "ResourceLoadError",
    "ResourceFormatError",
    "TokenizationError",
    "InvalidArgumentError",
    "InferenceShapeError",
    "GenerationCancelled",

    # Tokenization
    "Vocabulary",
    "MergeRankTable",
    "load_vocabulary",
    "load_merge_ranks",
    "BPEMerger",
    "GPT2Tokenizer",
    "load_resources",
    "build_tokenizer",
    "load_tokenizer",

    # Configs
    "WindowConfig",

    # Generation
    "ContextWindow",
    "GreedySelector",
    "GenerationLoop",
    "GenerationStep",
    "BackgroundGenerator",
    "GenerationHandle",
    "TextGenerator",
]
