## Exception hierarchy for gpt2lite
# gpt2lite/src/gpt2lite/errors.py


class Gpt2LiteError(Exception):
    """Base class for every error raised by gpt2lite."""


class ResourceLoadError(Gpt2LiteError):
    """A vocabulary or merge-rank resource could not be read."""


class ResourceFormatError(ResourceLoadError):
    """A resource was read but is not in the expected shape."""


class TokenizationError(Gpt2LiteError):
    """
    Raised when the vocabulary and merge table disagree, e.g. a merged
    subword has no id, or an id has no subword.
    """


class InvalidArgumentError(Gpt2LiteError, ValueError):
    """Bad caller input, rejected before any work starts."""


class InferenceShapeError(Gpt2LiteError):
    """The model was fed, or returned, a tensor of the wrong shape."""


class GenerationCancelled(Gpt2LiteError):
    """Generation was stopped between two steps."""

    def __init__(self, steps_done: int):
        super().__init__(f"Generation cancelled after {steps_done} step(s)")
        self.steps_done = steps_done
