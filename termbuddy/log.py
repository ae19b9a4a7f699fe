"""
Logging setup for TermBuddy

Standard output is reserved for the generated command, so every log
record goes to standard error through rich.
"""

import logging
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "termbuddy"

err_console = Console(stderr=True)


def setup_logging(level: str = "warning") -> logging.Logger:
    """Configure the package logger and return it"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Avoid stacking handlers when called more than once (tests, REPL)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the package logger"""
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
