## Logging setup for gpt2lite
# gpt2lite/src/gpt2lite/utils/logger.py

import logging
import sys

# Centralized logging config
logging.basicConfig(
    level=logging.INFO,  # or DEBUG to see per-step token ids
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),  # terminal
    ],
)


def get_logger(name: str) -> logging.Logger:
    """Return a logger instance for the given module/class."""
    return logging.getLogger(name)


def set_log_level(level: str | int) -> None:
    """Change the level of every gpt2lite logger (used by the CLI)."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("gpt2lite").setLevel(level)
