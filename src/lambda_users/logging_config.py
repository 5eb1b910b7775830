"""
Logging setup for the users Lambda.

``setup_logging`` attaches a single console handler to the root logger.
CloudWatch picks up everything written to stderr, so no file handler is
needed. Warm Lambda containers import the app once but tests build it
repeatedly, hence the guard against adding a second handler.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once at ``level`` (case insensitive)."""
    logger = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    if logger.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
