## gpt2lite/scripts/generation/sanity_generate.py
"""
Manual sanity check for TextGenerator.
Run directly, NOT via pytest.

Needs the real GPT-2 vocab.json / merges.txt in $GPT2LITE_ASSETS_DIR
(or ~/.gpt2lite). The model is a stub that always prefers " the", so the
check is about tokenizer + loop wiring, not text quality.
"""
import numpy as np

from gpt2lite import TextGenerator, WindowConfig, build_tokenizer
from gpt2lite.utils.path_util import get_tokenizer_paths

config = WindowConfig()
vocab_path, merges_path = get_tokenizer_paths({"tokenizer_config": {}})
tok = build_tokenizer(vocab_path, merges_path)

scores = np.zeros((config.sequence_length, config.vocab_size), dtype=np.float32)
scores[:, tok.token_to_id("Ġthe")] = 1.0

generator = TextGenerator(tok, infer=lambda ids: scores, config=config)

tests = [
    "hello",
    "Hello, world!",
    "Elephants live in Africa and Asia.",
]

for t in tests:
    ids = tok.encode(t)
    print("----")
    print("INPUT   :", t)
    print("IDS     :", ids)
    print("DECODED :", tok.decode(ids))
    print("OUTPUT  :", generator.generate(t, 3))
