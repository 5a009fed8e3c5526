"""Logging setup for notex.

The TUI owns the terminal, so log records go to a file when one is configured
and are discarded otherwise.
"""
import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_file: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """Configure the root logger.

    Args:
        log_file: Path of the log file, or None to disable log output
        level: Level name such as "DEBUG" or "INFO"

    Returns:
        The configured root logger
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return root
