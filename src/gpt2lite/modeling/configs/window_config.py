## Configuration class for the fixed-window inference model.
from transformers import PretrainedConfig


class WindowConfig(PretrainedConfig):
    """
    Shape of the model boundary the generation loop drives.

    Parameters
    ----------
    sequence_length : int, optional (default=64)
        Length of the input window fed to the model at every step. History
        longer than this is truncated oldest-first; shorter history is
        right-padded with `pad_id`.
    vocab_size : int, optional (default=50257)
        Width of each output score row (GPT-2 vocabulary size). Only used for
        tensor shaping and shape checks.
    pad_id : int, optional (default=0)
        Value written into unused trailing input slots. It only ever appears
        in the assembled input array, never in the token history.
    **kwargs : dict, optional
        Forwarded to PretrainedConfig.

    Example
    -------
    >>> config = WindowConfig(sequence_length=64, vocab_size=50257)
    """

    model_type = "gpt2lite_window"

    def __init__(
        self,
        sequence_length=64,  ## model input length
        vocab_size=50257,    ## score row width
        pad_id=0,            ## filler for unused input slots
        **kwargs
    ):
        super().__init__(**kwargs)
        self.sequence_length = sequence_length
        self.vocab_size      = vocab_size
        self.pad_id          = pad_id
