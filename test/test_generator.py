# test/test_generator.py

import threading
import time

import pytest

from gpt2lite.errors import ResourceFormatError
from gpt2lite.generator import TextGenerator, window_config_from
from gpt2lite.modeling.configs.window_config import WindowConfig


@pytest.fixture
def scenario_generator(gpt2_sized_vocab_json, two_line_merges_text, favor_token_inference):
    config = WindowConfig()
    gen = TextGenerator.from_resources(
        gpt2_sized_vocab_json,
        two_line_merges_text,
        favor_token_inference(1, config),
        config=config,
    )
    yield gen
    gen.close()


def test_generate_end_to_end(scenario_generator):
    assert scenario_generator.generate("Hi", 2) == "Hi there there"


def test_generate_zero_tokens(scenario_generator):
    assert scenario_generator.generate("Hi", 0) == "Hi"


def test_generate_is_deterministic(scenario_generator):
    assert scenario_generator.generate("Hi", 4) == scenario_generator.generate("Hi", 4)


def test_submit_runs_in_background(scenario_generator):
    handle = scenario_generator.submit("Hi", 2)
    assert handle.result(timeout=30) == "Hi there there"


def test_failed_setup_produces_no_generator(two_line_merges_text, favor_token_inference):
    with pytest.raises(ResourceFormatError):
        TextGenerator.from_resources(
            '{"Hi": "zero"}',
            two_line_merges_text,
            favor_token_inference(1, WindowConfig()),
        )


def test_vocab_size_mismatch_only_warns(small_vocab_json, small_merges_text, favor_token_inference, caplog):
    config = WindowConfig(sequence_length=8, vocab_size=300)
    gen = TextGenerator.from_resources(
        small_vocab_json, small_merges_text, favor_token_inference(261, config), config=config
    )
    assert "vocab" in caplog.text
    assert gen.generate("Hi", 1) == "Hi there"


def test_window_config_from_project_config():
    cfg = window_config_from({"model_config": {"sequence_length": 16, "vocab_size": 270}})
    assert (cfg.sequence_length, cfg.vocab_size, cfg.pad_id) == (16, 270, 0)


class OverlapCounter:
    """Wraps a stub model and records how many callers are inside it at once."""

    def __init__(self, inner, delay: float = 0.02):
        self.inner = inner
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def __call__(self, input_ids):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return self.inner(input_ids)
        finally:
            with self._lock:
                self.active -= 1


def test_model_never_called_concurrently(small_vocab_json, small_merges_text, small_config, favor_token_inference):
    counter = OverlapCounter(favor_token_inference(261, small_config))
    gen = TextGenerator.from_resources(small_vocab_json, small_merges_text, counter, config=small_config)
    try:
        handle = gen.submit("Hi", 5)
        results = []
        workers = [
            threading.Thread(target=lambda: results.append(gen.generate("Hi", 5)))
            for _ in range(2)
        ]
        for w in workers:
            w.start()
        results.append(gen.generate("Hi", 5))
        for w in workers:
            w.join(timeout=30)
        results.append(handle.result(timeout=30))
    finally:
        gen.close()

    assert counter.max_active == 1
    assert results == ["Hi there there there there there"] * 4
