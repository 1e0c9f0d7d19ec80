"""Logging setup for the command-line tools."""

import logging
from pathlib import Path

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = "WARNING", log_file: str | Path | None = None) -> logging.Logger:
    """Route engine loggers to the terminal via rich, and optionally to a file.

    Args:
        level: Logging level name or number
        log_file: Optional path for a plain-text log

    Returns:
        The root logger
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_poker_outs", False):
            root.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setLevel(level)
    console_handler._poker_outs = True  # type: ignore[attr-defined]
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        file_handler.setLevel(level)
        file_handler._poker_outs = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    return root
